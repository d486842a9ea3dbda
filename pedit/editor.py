"""Modal terminal editor: key handling, screen drawing and the main loop."""

from __future__ import annotations

import curses
import locale
import sys
from typing import Callable, TextIO

from .buffer import Buffer, BufferError, char_width, open_buffer
from .defs import (
    KEY_ENTER1,
    KEY_ESCAPE,
    KEY_TAB,
    CursorStyle,
    Mode,
    State,
    ctrl,
    cursor_style_sequence,
    mode_name,
)

INFOBAR_HEIGHT = 2


def line_number_width(size: int) -> int:
    """Return the width of the line-number column for a buffer of ``size`` lines."""
    if size < 1:
        raise ValueError("buffer size must be at least 1")
    return len(str(size)) + 2


def _key_code(key: str | int) -> int:
    return ord(key) if isinstance(key, str) else int(key)


def _put(win, row: int, col: int, text: str) -> None:
    """Draw ``text`` at ``row``/``col``, ignoring positions off the window."""
    if row < 0 or col < 0:
        return
    try:
        win.addstr(row, col, text)
    except curses.error:
        pass


class Editor:
    """Binds a buffer and the editor state to the mode-specific key handlers."""

    def __init__(self, buffer: Buffer, state: State | None = None, out: TextIO | None = None):
        if state is None:
            state = buffer.state if buffer.state is not None else State()
        buffer.state = state
        self.buffer = buffer
        self.state = state
        self.out = out
        self.info_msg: str | None = None
        self._handlers: dict[Mode, Callable[[int], bool]] = {
            Mode.NORMAL: self.handle_normal,
            Mode.INSERT: self.handle_insert,
            Mode.VISUAL: self.handle_visual,
            Mode.SEARCH: self.handle_search,
        }

    def _set_cursor_style(self, style: CursorStyle) -> None:
        out = self.out if self.out is not None else sys.stdout
        out.write(cursor_style_sequence(style))
        out.flush()

    def handle_key(self, key: str | int) -> bool:
        """Handle ``key`` in the current mode; return whether the editor should close."""
        return self._handlers[Mode(self.state.current_mode)](_key_code(key))

    def handle_normal(self, key: str | int) -> bool:
        """Handle a key in normal mode."""
        code = _key_code(key)
        buf = self.buffer
        if code in (curses.KEY_DOWN, ord("j")):
            buf.move_cursor_down()
        elif code in (curses.KEY_UP, ord("k")):
            buf.move_cursor_up()
        elif code in (curses.KEY_RIGHT, ord("l")):
            buf.move_cursor_right()
        elif code in (curses.KEY_LEFT, ord("h")):
            buf.move_cursor_left()
        elif code == ord("i"):
            self._set_cursor_style(CursorStyle.BAR)
            self.state.current_mode = Mode.INSERT
        elif code == ord("a"):
            self.state.current_mode = Mode.INSERT
        elif code == ord("v"):
            self.state.current_mode = Mode.VISUAL
        elif code == ord("/"):
            self.state.current_mode = Mode.SEARCH
        elif code == ctrl("s"):
            try:
                buf.save(buf.file_path)
            except BufferError:
                self.info_msg = "Failed to save file!"
            else:
                return True
        return False

    def handle_insert(self, key: str | int) -> bool:
        """Handle a key in insert mode."""
        code = _key_code(key)
        buf = self.buffer
        if code == curses.KEY_DOWN:
            buf.move_cursor_down()
        elif code == curses.KEY_UP:
            buf.move_cursor_up()
        elif code == curses.KEY_RIGHT:
            buf.move_cursor_right()
        elif code == curses.KEY_LEFT:
            buf.move_cursor_left()
        elif code == KEY_ESCAPE:
            self._set_cursor_style(CursorStyle.BLOCK)
            self.state.current_mode = Mode.NORMAL
        elif code == curses.KEY_DC:
            buf.delete_char_at_cursor()
        elif code == curses.KEY_BACKSPACE:
            self._backspace()
        elif code == KEY_TAB:
            buf.append_char_at_cursor("\t")
        elif code == KEY_ENTER1:
            if buf.insert_line_at_cursor():
                self.state.line_size = line_number_width(buf.size)
        else:
            buf.append_char_at_cursor(code)
        return False

    def _backspace(self) -> None:
        buf = self.buffer
        line = buf.find_line(buf.cursor_y)
        if line is None:
            return
        if line.size <= 0 and line is not buf.last_line and line is not buf.first_line:
            if buf.delete_line(line):
                self.state.line_size = line_number_width(buf.size)
            return
        if buf.delete_char_at_cursor_x(buf.cursor_x - 1):
            if buf.move_render_cursor_x(buf.cursor_x - 1, -1):
                buf.cursor_x -= 1

    def handle_visual(self, key: str | int) -> bool:
        """Handle a key in visual mode."""
        if _key_code(key) == KEY_ESCAPE:
            self.state.current_mode = Mode.NORMAL
        return False

    def handle_search(self, key: str | int) -> bool:
        """Handle a key in search mode."""
        if _key_code(key) == KEY_ESCAPE:
            self.state.current_mode = Mode.NORMAL
        return False

    def render(self, line_win, text_win, infobar_win) -> tuple[int, int]:
        """Draw line numbers, text and the info bar; return the screen cursor position."""
        buf = self.buffer
        state = self.state
        for win in (line_win, text_win, infobar_win):
            win.erase()

        for i, line in enumerate(buf.lines):
            number = str(i + 1)
            if buf.cursor_y >= state.max_y:
                buf.scroll_y = buf.cursor_max - state.max_y + 1
            else:
                buf.scroll_y = 0
            row = i - buf.scroll_y
            _put(line_win, row, state.line_size - 2 - len(number), number)
            col = 0
            for ch in line.chars:
                _put(text_win, row, col, ch)
                col += char_width(ch)

        try:
            infobar_win.addstr(f"{mode_name(state.current_mode)} @ {buf.file_path}\n")
            if self.info_msg is not None:
                infobar_win.addstr(self.info_msg)
        except curses.error:
            pass
        return buf.cursor_y - buf.scroll_y, buf.render_cursor_x + state.line_size

    def run(self, screen) -> None:
        """Run the interactive loop on the curses ``screen`` until the user quits."""
        buf = self.buffer
        state = self.state
        try:
            screen.move(buf.cursor_y, buf.cursor_x + state.line_size + 1)
        except curses.error:
            pass
        screen.refresh()
        curses.noecho()
        curses.raw()

        state.max_y, state.max_x = screen.getmaxyx()
        line_win = curses.newwin(state.max_y - INFOBAR_HEIGHT, state.line_size, 0, 0)
        text_win = curses.newwin(
            state.max_y - INFOBAR_HEIGHT, state.max_x - state.line_size, 0, state.line_size
        )
        infobar_win = curses.newwin(INFOBAR_HEIGHT, state.max_x, state.max_y - INFOBAR_HEIGHT, 0)
        text_win.keypad(True)
        infobar_win.keypad(True)

        state.max_y -= INFOBAR_HEIGHT
        buf.cursor_max = state.max_y

        close_requested = False
        while not close_requested:
            if curses.is_term_resized(state.max_y, state.max_x):
                state.max_y, state.max_x = screen.getmaxyx()
                state.max_y -= INFOBAR_HEIGHT
            try:
                line_win.resize(state.max_y, state.line_size)
                line_win.mvwin(0, 0)
                text_win.resize(state.max_y, state.max_x - state.line_size)
                text_win.mvwin(0, state.line_size)
            except curses.error:
                pass

            row, col = self.render(line_win, text_win, infobar_win)
            try:
                screen.move(row, col)
            except curses.error:
                pass
            line_win.refresh()
            text_win.refresh()
            infobar_win.refresh()
            screen.refresh()

            try:
                key = text_win.get_wch()
            except curses.error:
                self.info_msg = "Invalid character!"
                continue
            self.info_msg = None

            close_requested = self.handle_key(key)
            if _key_code(key) == ctrl("q"):
                break


def main(argv: list[str] | None = None) -> int:
    """Open the file named on the command line in the editor."""
    args = sys.argv[1:] if argv is None else list(argv)
    if not args:
        print("Usage: pedit <filename>")
        return 1
    locale.setlocale(locale.LC_ALL, "")
    state = State()
    try:
        buffer = open_buffer(args[0], state)
    except BufferError as exc:
        print(exc)
        return 1
    state.line_size = line_number_width(buffer.size)
    editor = Editor(buffer, state)
    curses.wrapper(editor.run)
    return 0


if __name__ == "__main__":
    sys.exit(main())
"""Text buffer: lines of characters with a cursor."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from wcwidth import wcwidth

from .defs import State

BUFFER_MAX_LINE_SIZE = 512


class BufferError(Exception):
    """Raised when a buffer cannot be read from or written to a file."""


def char_width(c: str | int) -> int:
    """Return the terminal column width of ``c`` (-1 for non-printable characters)."""
    ch = chr(c) if isinstance(c, int) else c
    return wcwidth(ch)


@dataclass(eq=False)
class Line:
    """One line of text held as a list of characters."""

    chars: list[str] = field(default_factory=list)

    @property
    def size(self) -> int:
        return len(self.chars)

    @property
    def text(self) -> str:
        return "".join(self.chars)


def _split_lines(text: str) -> list[Line]:
    """Split text as line reads of at most MAX-1 characters would."""
    limit = BUFFER_MAX_LINE_SIZE - 1
    lines = []
    pos = 0
    while pos < len(text):
        end = text.find("\n", pos, pos + limit)
        if end == -1:
            chunk = text[pos:pos + limit]
            pos += len(chunk)
        else:
            chunk = text[pos:end]
            pos = end + 1
        lines.append(Line(list(chunk)))
    return lines


@dataclass(eq=False)
class Buffer:
    """An editable text buffer with a logical and a rendered cursor."""

    file_path: str | None = None
    state: State | None = None
    lines: list[Line] = field(default_factory=lambda: [Line()])
    cursor_x: int = 0
    cursor_y: int = 0
    # The rendered cursor differs from cursor_x for wide characters.
    render_cursor_x: int = 0
    cursor_max: int = 0
    scroll_y: int = 0

    @property
    def size(self) -> int:
        return len(self.lines)

    @property
    def first_line(self) -> Line | None:
        return self.lines[0] if self.lines else None

    @property
    def last_line(self) -> Line | None:
        return self.lines[-1] if self.lines else None

    def save(self, path: str | None) -> None:
        """Write every line, each followed by a newline, to ``path``."""
        if path is None:
            raise BufferError("No file path to save to")
        content = "".join(line.text + "\n" for line in self.lines)
        try:
            with open(path, "w", encoding="utf-8", newline="") as fh:
                fh.write(content)
        except OSError as exc:
            raise BufferError(f"Failed to save file: {path}") from exc

    def find_line(self, index: int) -> Line | None:
        """Return the line at ``index`` or None when there is none."""
        if 0 <= index < self.size:
            return self.lines[index]
        return None

    def find_char(self, line: Line | None, index: int) -> str | None:
        """Return the character at ``index`` of ``line`` or None."""
        if line is None or not 0 <= index < line.size:
            return None
        return line.chars[index]

    def append_char_at_cursor(self, c: str | int) -> None:
        """Insert ``c`` after the character under the cursor."""
        ch = chr(c) if isinstance(c, int) else c
        if self.cursor_y >= self.size or self.cursor_x > BUFFER_MAX_LINE_SIZE:
            return
        line = self.find_line(self.cursor_y)
        if line is None or line.size >= BUFFER_MAX_LINE_SIZE:
            return
        if self.find_char(line, self.cursor_x) is None:
            line.chars.append(ch)
            return
        if self.cursor_x >= line.size - 1:
            line.chars.append(ch)
        else:
            line.chars.insert(self.cursor_x + 1, ch)
        self.render_cursor_x += char_width(ch)
        self.cursor_x += 1

    def _scroll_after_down(self) -> None:
        if (
            self.state is not None
            and self.cursor_y > self.state.max_y
            and self.cursor_y >= self.cursor_max
        ):
            self.cursor_max += 1

    def move_cursor_down(self) -> None:
        """Move the cursor one line down, to the start of the line."""
        if self.state is not None and self.cursor_y < self.size - 1:
            self.cursor_y += 1
            self.render_cursor_x = 0
            self.cursor_x = 0
            self._scroll_after_down()

    def move_cursor_up(self) -> None:
        """Move the cursor one line up, to the start of the line."""
        if self.cursor_y > 0:
            self.cursor_y -= 1
            self.render_cursor_x = 0
            self.cursor_x = 0
            if self.cursor_y <= self.scroll_y:
                self.cursor_max -= 1

    def move_cursor_right(self) -> None:
        """Move the cursor one character right if possible."""
        line = self.find_line(self.cursor_y)
        if (
            line is not None
            and line.size != 0
            and self.cursor_x < line.size - 1
            and self.render_cursor_x < line.size - 1
            and self.move_render_cursor(1)
        ):
            self.cursor_x += 1

    def move_cursor_left(self) -> None:
        """Move the cursor one character left if possible."""
        if self.cursor_x > 0 and self.render_cursor_x > 0 and self.move_render_cursor(-1):
            self.cursor_x -= 1

    def delete_char_at(self, cursor_x: int, cursor_y: int) -> bool:
        """Delete the character at the given position; return whether one was deleted."""
        line = self.find_line(cursor_y)
        if line is None or line.size <= 0:
            return False
        ch = self.find_char(line, cursor_x)
        if ch is None:
            return False
        if cursor_x != 0 and cursor_x == line.size - 1:
            self.render_cursor_x -= char_width(ch)
            self.cursor_x -= 1
        del line.chars[cursor_x]
        return True

    def delete_char_at_cursor_x(self, cursor_x: int) -> bool:
        """Delete the character at ``cursor_x`` on the cursor's line."""
        return self.delete_char_at(cursor_x, self.cursor_y)

    def delete_char_at_cursor(self) -> bool:
        """Delete the character under the cursor."""
        return self.delete_char_at(self.cursor_x, self.cursor_y)

    def delete_line(self, line: Line) -> bool:
        """Remove ``line`` unless it is the first or the last line."""
        index = next((i for i, ln in enumerate(self.lines) if ln is line), None)
        if index is None or index == 0 or index == self.size - 1:
            return False
        del self.lines[index]
        if self.cursor_y <= self.scroll_y:
            self.cursor_max -= 1
        return True

    def insert_line_at(self, cursor_y: int) -> bool:
        """Insert an empty line after line ``cursor_y``; the cursor is untouched."""
        if self.find_line(cursor_y) is None:
            return False
        self.lines.insert(cursor_y + 1, Line())
        return True

    def insert_line_at_cursor(self) -> bool:
        """Insert an empty line after the cursor's line and move onto it."""
        if not self.insert_line_at(self.cursor_y):
            return False
        self.cursor_y += 1
        self.render_cursor_x = 0
        self.cursor_x = 0
        self._scroll_after_down()
        return True

    def move_render_cursor_x(self, cursor_x: int, direction_x: int) -> bool:
        """Shift the rendered cursor by the width of the character at ``cursor_x``."""
        ch = self.find_char(self.find_line(self.cursor_y), cursor_x)
        if ch is None:
            return False
        self.render_cursor_x += char_width(ch) * direction_x
        return True

    def move_render_cursor(self, direction_x: int) -> bool:
        """Shift the rendered cursor by the width of the character under the cursor."""
        return self.move_render_cursor_x(self.cursor_x, direction_x)


def open_buffer(path: str, state: State | None = None) -> Buffer:
    """Read ``path`` into a new buffer, creating an empty file if it is missing."""
    path = str(path)
    try:
        text = Path(path).read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise BufferError(f"Failed to read file: {path}") from exc
    except OSError:
        try:
            with open(path, "w", encoding="utf-8"):
                pass
        except OSError as exc:
            raise BufferError(f"Failed to create file: {path}") from exc
        text = ""
    lines = _split_lines(text) or [Line()]
    return Buffer(file_path=path, state=state, lines=lines)
import curses
import io

import pytest

from pedit.buffer import Buffer, Line
from pedit.defs import KEY_ESCAPE, CursorStyle, Mode, State, ctrl, cursor_style_sequence
from pedit.editor import Editor, line_number_width, main


class FakeWindow:
    def __init__(self):
        self.calls = []
        self.erased = 0

    def erase(self):
        self.erased += 1
        self.calls.clear()

    def addstr(self, *args):
        self.calls.append(args)


def make_editor(*texts, max_y=10, path=None):
    state = State(max_y=max_y, max_x=80)
    lines = [Line(list(t)) for t in texts] or [Line()]
    buf = Buffer(file_path=path, state=state, lines=lines)
    state.line_size = line_number_width(buf.size)
    out = io.StringIO()
    return Editor(buf, state, out=out), out


@pytest.mark.parametrize("size,width", [(1, 3), (9, 3), (10, 4), (1234, 6)])
def test_line_number_width(size, width):
    assert line_number_width(size) == width


def test_line_number_width_rejects_zero():
    with pytest.raises(ValueError):
        line_number_width(0)


@pytest.mark.parametrize("key", ["j", curses.KEY_DOWN])
def test_normal_move_down(key):
    ed, _ = make_editor("ab", "cd")
    assert ed.handle_normal(key) is False
    assert ed.buffer.cursor_y == 1


@pytest.mark.parametrize("key", ["k", curses.KEY_UP])
def test_normal_move_up(key):
    ed, _ = make_editor("ab", "cd")
    ed.handle_normal("j")
    ed.handle_normal(key)
    assert ed.buffer.cursor_y == 0


def test_normal_move_right_and_left():
    ed, _ = make_editor("abc")
    ed.handle_normal("l")
    assert ed.buffer.cursor_x == 1
    ed.handle_normal("h")
    assert ed.buffer.cursor_x == 0


def test_normal_i_enters_insert_with_bar_cursor():
    ed, out = make_editor("abc")
    ed.handle_normal("i")
    assert ed.state.current_mode == Mode.INSERT
    assert out.getvalue() == cursor_style_sequence(CursorStyle.BAR)


@pytest.mark.parametrize(
    "key,mode", [("a", Mode.INSERT), ("v", Mode.VISUAL), ("/", Mode.SEARCH)]
)
def test_normal_mode_switches(key, mode):
    ed, out = make_editor("abc")
    ed.handle_normal(key)
    assert ed.state.current_mode == mode
    assert out.getvalue() == ""


def test_ctrl_s_saves_and_requests_close(tmp_path):
    target = tmp_path / "out.txt"
    ed, _ = make_editor("ab", "c", path=str(target))
    assert ed.handle_normal(ctrl("s")) is True
    assert target.read_text(encoding="utf-8") == "ab\nc\n"


def test_ctrl_s_failure_sets_message():
    ed, _ = make_editor("ab")
    assert ed.handle_normal(ctrl("s")) is False
    assert ed.info_msg == "Failed to save file!"


def test_insert_into_empty_line():
    ed, _ = make_editor()
    ed.state.current_mode = Mode.INSERT
    ed.handle_key("x")
    assert ed.buffer.lines[0].text == "x"


def test_insert_places_after_cursor_char():
    ed, _ = make_editor("ab")
    ed.handle_insert("x")
    assert ed.buffer.lines[0].text == "axb"
    assert ed.buffer.cursor_x == 1


def test_insert_tab():
    ed, _ = make_editor("")
    ed.handle_insert("\t")
    assert ed.buffer.lines[0].text == "\t"


def test_insert_escape_returns_to_normal():
    ed, out = make_editor("ab")
    ed.state.current_mode = Mode.INSERT
    assert ed.handle_key(KEY_ESCAPE) is False
    assert ed.state.current_mode == Mode.NORMAL
    assert out.getvalue() == cursor_style_sequence(CursorStyle.BLOCK)


def test_insert_enter_adds_line():
    ed, _ = make_editor("ab")
    ed.handle_insert("\n")
    assert ed.buffer.size == 2
    assert ed.buffer.cursor_y == 1
    assert ed.state.line_size == line_number_width(2)


def test_backspace_removes_empty_middle_line():
    ed, _ = make_editor("a", "", "b")
    ed.buffer.cursor_y = 1
    ed.handle_insert(curses.KEY_BACKSPACE)
    assert [line.text for line in ed.buffer.lines] == ["a", "b"]


def test_backspace_deletes_previous_char():
    ed, _ = make_editor("abc")
    ed.buffer.cursor_x = 2
    ed.buffer.render_cursor_x = 2
    ed.handle_insert(curses.KEY_BACKSPACE)
    assert ed.buffer.lines[0].text == "ac"
    assert ed.buffer.cursor_x == 1


def test_backspace_at_line_start_does_nothing():
    ed, _ = make_editor("abc")
    ed.handle_insert(curses.KEY_BACKSPACE)
    assert ed.buffer.lines[0].text == "abc"
    assert ed.buffer.cursor_x == 0


def test_delete_key_removes_char_under_cursor():
    ed, _ = make_editor("abc")
    ed.handle_insert(curses.KEY_DC)
    assert ed.buffer.lines[0].text == "bc"


@pytest.mark.parametrize("mode", [Mode.VISUAL, Mode.SEARCH])
def test_visual_and_search_escape(mode):
    ed, _ = make_editor("abc")
    ed.state.current_mode = mode
    ed.handle_key("x")
    assert ed.state.current_mode == mode
    ed.handle_key(KEY_ESCAPE)
    assert ed.state.current_mode == Mode.NORMAL
    assert ed.buffer.lines[0].text == "abc"


def test_render_draws_numbers_text_and_infobar():
    ed, _ = make_editor("ab", "c", path="f.txt")
    lw, tw, iw = FakeWindow(), FakeWindow(), FakeWindow()
    pos = ed.render(lw, tw, iw)
    assert lw.calls == [(0, 0, "1"), (1, 0, "2")]
    assert tw.calls == [(0, 0, "a"), (0, 1, "b"), (1, 0, "c")]
    assert iw.calls == [("NORMAL @ f.txt\n",)]
    assert pos == (0, ed.state.line_size)


def test_render_shows_info_message():
    ed, _ = make_editor("ab", path="f.txt")
    ed.info_msg = "Failed to save file!"
    iw = FakeWindow()
    ed.render(FakeWindow(), FakeWindow(), iw)
    assert iw.calls[-1] == ("Failed to save file!",)


def test_main_without_arguments_prints_usage(capsys):
    assert main([]) == 1
    assert "Usage:" in capsys.readouterr().out
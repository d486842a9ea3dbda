"""Shared constants, editor modes, cursor styles and editor state."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

MAX_LINE_SIZE = 512
KEY_ESCAPE = 27
KEY_TAB = 9
KEY_ENTER1 = 10


def ctrl(key: str | int) -> int:
    """Return the control-key code for ``key`` (a character or a code point)."""
    code = ord(key) if isinstance(key, str) else int(key)
    return code & 0x1F


class Mode(IntEnum):
    """Editing modes."""

    NORMAL = 0
    INSERT = 1
    VISUAL = 2
    SEARCH = 3


MODE_NAMES = ("NORMAL", "INSERT", "VISUAL", "SEARCH")


def mode_name(mode: int) -> str:
    """Return the display name of ``mode``, or ``"UNKNOWN"`` if it is out of range."""
    index = int(mode)
    if 0 <= index < len(MODE_NAMES):
        return MODE_NAMES[index]
    return "UNKNOWN"


class CursorStyle(IntEnum):
    """Terminal cursor shapes selectable with the DECSCUSR sequence."""

    BLOCK_BLINK_2 = 0
    BLOCK_BLINK = 1
    BLOCK = 2
    UNDERLINE_BLINK = 3
    UNDERLINE = 4
    BAR_BLINK = 5
    BAR = 6


def cursor_style_sequence(style: CursorStyle | int) -> str:
    """Return the escape sequence that switches the terminal cursor to ``style``."""
    return f"\033[{int(style)} q"


@dataclass
class State:
    """Screen geometry and current mode of the editor."""

    line_size: int = 0
    max_y: int = 0
    max_x: int = 0
    current_mode: Mode = Mode.NORMAL
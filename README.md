# pedit

A small modal text editor for the terminal, with vim-like key bindings.
It draws with curses and places the cursor by the display width of each
character, so wide Unicode characters take up two columns.

## Installation

```
pip install .
```

## Usage

```
pedit <filename>
```

The same entry point can be started with `python -m pedit.editor <filename>`.
Without a file name it prints a usage line and exits with status 1.

If the file does not exist, an empty file is created. The screen is split
into a line-number column, the text area and a two-line info bar. The info
bar shows the current mode and the file path, and below it a message such
as `Failed to save file!` when there is one.

## Modes and keys

**NORMAL** (the starting mode)

| Key         | Action                                   |
|-------------|------------------------------------------|
| `h` / Left  | move cursor left                         |
| `j` / Down  | move cursor down, to the start of the line |
| `k` / Up    | move cursor up, to the start of the line |
| `l` / Right | move cursor right                        |
| `i`         | enter INSERT mode and switch to a bar cursor |
| `a`         | enter INSERT mode                        |
| `v`         | enter VISUAL mode                        |
| `/`         | enter SEARCH mode                        |
| `Ctrl-S`    | save the file and quit                   |
| `Ctrl-Q`    | quit without saving                      |

**INSERT**

| Key           | Action                                                        |
|---------------|---------------------------------------------------------------|
| Arrow keys    | move the cursor                                               |
| Esc           | back to NORMAL mode, with a block cursor                      |
| Delete        | delete the character under the cursor                         |
| Backspace     | delete the character before the cursor, or remove an empty line that is neither the first nor the last |
| Tab           | insert a tab character                                        |
| Enter         | insert an empty line below and move onto it                   |
| any other key | insert that character after the one under the cursor          |

`Ctrl-Q` quits from any mode.

Lines are limited to 512 characters; when a file is read, longer lines are
split into pieces of at most 511 characters. Files are read and written as
UTF-8, and every line is written with a trailing newline.

## What it does not do

VISUAL and SEARCH modes only accept Esc, which returns to NORMAL mode: there
is no text selection and no searching. There is no undo, and no way to join
lines or split a line at the cursor.

## Using the buffer from Python

```python
from pedit.buffer import BufferError, open_buffer
from pedit.defs import State

buf = open_buffer("notes.txt", State())
buf.append_char_at_cursor("x")
print(buf.lines[0].text)
try:
    buf.save("notes.txt")
except BufferError as exc:
    print(exc)
```

- `pedit.buffer` holds `Buffer`, `Line`, `open_buffer`, `char_width` and
  `BufferError`, which `open_buffer` and `Buffer.save` raise when a file
  cannot be read, created or written.
- `pedit.defs` holds `Mode`, `CursorStyle`, `State`, `ctrl`, `mode_name`
  and `cursor_style_sequence`.
- `pedit.editor` holds `Editor`, whose `handle_key` applies one key in the
  current mode and returns whether the editor should close, along with
  `line_number_width` and `main`.

## Running the tests

```
pip install ".[test]"
pytest
```
# textedit

The editing core of a text widget. It turns mouse and keyboard input into
changes to the text, the cursor, the selection and the undo history. The text
itself and its layout (line breaks, character widths) are supplied through a
small buffer interface, so the same engine works for single-line fields and
multi-line editors.

## Installation

```
pip install textedit
```

To run the tests:

```
pip install textedit[test]
pytest
```

## Modules

- `textedit.keys`: `Key`, an `IntEnum` of editing commands (`LEFT`, `RIGHT`,
  `UP`, `DOWN`, `PGUP`, `PGDOWN`, `LINESTART`, `LINEEND`, `TEXTSTART`,
  `TEXTEND`, `DELETE`, `BACKSPACE`, `UNDO`, `REDO`, `INSERT`, `WORDLEFT`,
  `WORDRIGHT`, and the secondary `LINESTART2`, `LINEEND2`, `TEXTSTART2`,
  `TEXTEND2`). Or `Key.SHIFT` into a command (or use `Key.LEFT.shifted`) to
  extend the selection. Any other integer is a character's code point.
  `key_to_text(key)` returns the code point a key inserts, or -1 for commands
  and values outside the Unicode range; it also accepts a one-character string.
- `textedit.layout`: `TextBuffer`, the abstract interface for the text being
  edited (`__len__`, `layout_row(start)`, `char_width(line_start, index)`,
  `char_at(index)`, `delete_chars(index, count)`, `insert_chars(index, text)`);
  `Row`, the shape of one displayed row; `MonospaceBuffer`, a ready-made buffer
  with fixed-width characters and one row per line; `is_space(ch)`; and the
  constants `NEWLINE` and `GETWIDTH_NEWLINE`.
- `textedit.undo`: `UndoState`, a bounded undo/redo history
  (99 records and 999 characters by default), made of `UndoRecord` entries.
  It has `can_undo` and `can_redo`, and `undo(buffer)` / `redo(buffer)` return
  the new cursor position or `None`.
- `textedit.editor`: `TextEditState`, the state of one text field, and the
  helpers `locate_coord`, `find_charpos`, `is_word_boundary`, `move_word_left`
  and `move_word_right`, which work on any `TextBuffer`.

## Example

```python
from textedit.editor import TextEditState
from textedit.keys import Key
from textedit.layout import MonospaceBuffer

buffer = MonospaceBuffer("hello\nworld", char_width=8.0, line_height=16.0)
state = TextEditState(single_line=False)

state.click(buffer, 20.0, 4.0)          # cursor lands between "hel" and "lo"
state.key(buffer, Key.LINEEND)          # jump to the end of that line
state.paste(buffer, ", there")
print(str(buffer))                      # "hello, there\nworld"

state.key(buffer, Key.LINESTART | Key.SHIFT)   # select back to the line start
state.cut(buffer)                       # removes "hello, there"
state.undo(buffer)                      # brings it back
```

`TextEditState.key` takes either a `Key` command or a character (an integer
code point or a one-character string). Typing replaces any selection; with
insert mode on (toggled by `Key.INSERT`) a typed character overwrites the one
under the cursor. In a single-line field, newlines are not inserted and
`UP`/`DOWN` act like `LEFT`/`RIGHT`. `PGUP` and `PGDOWN` move by
`row_count_per_page` rows, which must be set to a positive number for them to
move. `clear()` resets the field and drops its undo history.

## Writing your own buffer

Subclass `TextBuffer` to edit text held in your own storage with your own
layout. `layout_row(start)` returns a `Row` giving `x0`, `x1`,
`baseline_y_delta`, `ymin`, `ymax` and `num_chars` for the row beginning at
`start`; a row ending in a newline includes it. If `char_width` reports
`GETWIDTH_NEWLINE` for a newline, vertical cursor moves stop at it.
`insert_chars` returns whether the text was accepted; if it returns `False`,
`paste` returns `False` as well.

## What it does not do

The package draws nothing, reads no input devices and has no clipboard access.
To copy, read the selected range (`select_start`, `select_end`) from your
buffer yourself before calling `cut`.
"""Cursor, selection and keyboard handling for an editable text field.

:class:`TextEditState` holds everything about a text field except the text
itself, which lives in a :class:`~textedit.layout.TextBuffer`. Mouse and
keyboard input are mapped onto insertions and deletions in the buffer,
together with updates to the cursor, the selection and the undo history.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass

from .keys import Key, key_to_text
from .layout import GETWIDTH_NEWLINE, NEWLINE, Row, TextBuffer, is_space
from .undo import UndoState

__all__ = [
    "FindState",
    "TextEditState",
    "locate_coord",
    "find_charpos",
    "is_word_boundary",
    "move_word_left",
    "move_word_right",
]


@dataclass
class FindState:
    """Where a character sits in the layout.

    ``x`` and ``y`` locate the character, ``height`` is the height of its
    row, ``first_char`` and ``length`` describe the row, and ``prev_first``
    is the first character of the row before it.
    """

    x: float = 0.0
    y: float = 0.0
    height: float = 0.0
    first_char: int = 0
    length: int = 0
    prev_first: int = 0


def locate_coord(buffer: TextBuffer, x: float, y: float) -> int:
    """Return the cursor position nearest to the display point ``(x, y)``."""
    n = len(buffer)
    base_y = 0.0
    i = 0
    r = Row()

    while i < n:
        r = buffer.layout_row(i)
        if r.num_chars <= 0:
            return n
        if i == 0 and y < base_y + r.ymin:
            return 0
        if y < base_y + r.ymax:
            break
        i += r.num_chars
        base_y += r.baseline_y_delta

    if i >= n:
        return n

    if x < r.x0:
        return i

    if x < r.x1:
        prev_x = r.x0
        for k in range(r.num_chars):
            w = buffer.char_width(i, k)
            if x < prev_x + w:
                return i + k if x < prev_x + w / 2 else i + k + 1
            prev_x += w

    last = i + r.num_chars - 1
    if buffer.char_at(last) == NEWLINE:
        return last
    return i + r.num_chars


def find_charpos(buffer: TextBuffer, n: int, single_line: bool) -> FindState:
    """Locate character ``n`` in the layout of ``buffer``."""
    z = len(buffer)

    if n == z and single_line:
        r = buffer.layout_row(0)
        return FindState(
            x=r.x1, y=0.0, height=r.ymax - r.ymin, first_char=0, length=z
        )

    find = FindState()
    prev_start = 0
    i = 0
    while True:
        r = buffer.layout_row(i)
        if n < i + r.num_chars:
            break
        if i + r.num_chars == z and z > 0 and buffer.char_at(z - 1) != NEWLINE:
            break
        prev_start = i
        i += r.num_chars
        find.y += r.baseline_y_delta
        if i == z:
            break

    first = i
    find.first_char = first
    find.length = r.num_chars
    find.height = r.ymax - r.ymin
    find.prev_first = prev_start

    find.x = r.x0
    for k in range(n - first):
        find.x += buffer.char_width(first, k)
    return find


def is_word_boundary(buffer: TextBuffer, idx: int) -> bool:
    """Whether a word starts at ``idx``: whitespace before, none at it."""
    if idx <= 0:
        return True
    return is_space(buffer.char_at(idx - 1)) and not is_space(buffer.char_at(idx))


def move_word_left(buffer: TextBuffer, c: int) -> int:
    """Position of the start of the word before position ``c``."""
    c -= 1
    while c >= 0 and not is_word_boundary(buffer, c):
        c -= 1
    return max(c, 0)


def move_word_right(buffer: TextBuffer, c: int) -> int:
    """Position of the start of the word after position ``c``."""
    length = len(buffer)
    c += 1
    while c < length and not is_word_boundary(buffer, c):
        c += 1
    return min(c, length)


def _code_points(text: str | Iterable[int]) -> list[int]:
    if isinstance(text, str):
        return [ord(ch) for ch in text]
    return [int(ch) for ch in text]


class TextEditState:
    """Cursor, selection, insert mode and undo history of one text field.

    ``select_start`` and ``select_end`` are equal when nothing is selected;
    otherwise ``select_start`` may lie on either side of ``select_end``.
    ``row_count_per_page`` must be positive for page up and page down to
    move in a multi-line field.
    """

    def __init__(self, single_line: bool = False) -> None:
        self.undostate = UndoState()
        self.clear(single_line)

    def clear(self, single_line: bool = False) -> None:
        """Reset the field to its initial state, dropping undo history."""
        self.undostate.reset()
        self.cursor = 0
        self.select_start = 0
        self.select_end = 0
        self.insert_mode = False
        self.row_count_per_page = 0
        self.cursor_at_end_of_line = False
        self.initialized = True
        self.has_preferred_x = False
        self.preferred_x = 0.0
        self.single_line = bool(single_line)

    def has_selection(self) -> bool:
        """Whether any text is selected."""
        return self.select_start != self.select_end

    # Mouse input

    def _flatten_y(self, buffer: TextBuffer, y: float) -> float:
        # A single line keeps tracking the mouse above or below the text.
        if self.single_line:
            return buffer.layout_row(0).ymin
        return y

    def click(self, buffer: TextBuffer, x: float, y: float) -> None:
        """Move the cursor to a mouse-down point and clear the selection."""
        y = self._flatten_y(buffer, y)
        self.cursor = locate_coord(buffer, x, y)
        self.select_start = self.cursor
        self.select_end = self.cursor
        self.has_preferred_x = False

    def drag(self, buffer: TextBuffer, x: float, y: float) -> None:
        """Move the cursor and selection end to a mouse-drag point."""
        y = self._flatten_y(buffer, y)
        if self.select_start == self.select_end:
            self.select_start = self.cursor
        self.cursor = self.select_end = locate_coord(buffer, x, y)

    # Selection helpers

    def clamp(self, buffer: TextBuffer) -> None:
        """Keep the cursor and selection inside the buffer."""
        n = len(buffer)
        if self.has_selection():
            self.select_start = min(self.select_start, n)
            self.select_end = min(self.select_end, n)
            if self.select_start == self.select_end:
                self.cursor = self.select_start
        self.cursor = min(self.cursor, n)

    def sort_selection(self) -> None:
        """Order the selection so that its start is not after its end."""
        if self.select_end < self.select_start:
            self.select_start, self.select_end = self.select_end, self.select_start

    def _delete(self, buffer: TextBuffer, where: int, length: int) -> None:
        self.undostate.make_delete(buffer, where, length)
        buffer.delete_chars(where, length)
        self.has_preferred_x = False

    def delete_selection(self, buffer: TextBuffer) -> None:
        """Delete the selected text, if any, and collapse the selection."""
        self.clamp(buffer)
        if not self.has_selection():
            return
        if self.select_start < self.select_end:
            self._delete(buffer, self.select_start, self.select_end - self.select_start)
            self.select_end = self.cursor = self.select_start
        else:
            self._delete(buffer, self.select_end, self.select_start - self.select_end)
            self.select_start = self.cursor = self.select_end
        self.has_preferred_x = False

    def _move_to_first(self) -> None:
        if self.has_selection():
            self.sort_selection()
            self.cursor = self.select_start
            self.select_end = self.select_start
            self.has_preferred_x = False

    def _move_to_last(self, buffer: TextBuffer) -> None:
        if self.has_selection():
            self.sort_selection()
            self.clamp(buffer)
            self.cursor = self.select_end
            self.select_start = self.select_end
            self.has_preferred_x = False

    def _prep_selection_at_cursor(self) -> None:
        if not self.has_selection():
            self.select_start = self.select_end = self.cursor
        else:
            self.cursor = self.select_end

    # Editing API

    def cut(self, buffer: TextBuffer) -> bool:
        """Delete the selection; return whether there was one."""
        if self.has_selection():
            self.delete_selection(buffer)
            self.has_preferred_x = False
            return True
        return False

    def paste(self, buffer: TextBuffer, text: str | Iterable[int]) -> bool:
        """Insert ``text`` at the cursor, replacing any selection.

        Returns whether the buffer accepted the text. If it did not, the
        selection stays deleted; undo restores it.
        """
        chars = _code_points(text)
        self.clamp(buffer)
        self.delete_selection(buffer)
        if buffer.insert_chars(self.cursor, chars):
            self.undostate.make_insert(self.cursor, len(chars))
            self.cursor += len(chars)
            self.has_preferred_x = False
            return True
        return False

    def undo(self, buffer: TextBuffer) -> bool:
        """Undo the latest edit; return whether anything was undone."""
        cursor = self.undostate.undo(buffer)
        self.has_preferred_x = False
        if cursor is None:
            return False
        self.cursor = cursor
        return True

    def redo(self, buffer: TextBuffer) -> bool:
        """Redo the latest undone edit; return whether anything was redone."""
        cursor = self.undostate.redo(buffer)
        self.has_preferred_x = False
        if cursor is None:
            return False
        self.cursor = cursor
        return True

    def key(self, buffer: TextBuffer, key: int | str) -> None:
        """Process one keyboard input: a character or a :class:`Key` command."""
        if isinstance(key, str):
            key = key_to_text(key)
        key = int(key)
        shift = bool(key & Key.SHIFT)
        try:
            command: Key | None = Key(key & ~Key.SHIFT)
        except ValueError:
            command = None
        handler = _COMMANDS.get((command, shift)) if command is not None else None
        if handler is None:
            self._type(buffer, key)
        else:
            handler(self, buffer)

    # Key handlers

    def _type(self, buffer: TextBuffer, key: int) -> None:
        c = key_to_text(key)
        if c <= 0:
            return
        if c == NEWLINE and self.single_line:
            return
        if self.insert_mode and not self.has_selection() and self.cursor < len(buffer):
            self.undostate.make_replace(buffer, self.cursor, 1, 1)
            buffer.delete_chars(self.cursor, 1)
            if buffer.insert_chars(self.cursor, [c]):
                self.cursor += 1
                self.has_preferred_x = False
        else:
            self.delete_selection(buffer)
            if buffer.insert_chars(self.cursor, [c]):
                self.undostate.make_insert(self.cursor, 1)
                self.cursor += 1
                self.has_preferred_x = False

    def _toggle_insert(self, buffer: TextBuffer) -> None:
        self.insert_mode = not self.insert_mode

    def _left(self, buffer: TextBuffer) -> None:
        if self.has_selection():
            self._move_to_first()
        elif self.cursor > 0:
            self.cursor -= 1
        self.has_preferred_x = False

    def _right(self, buffer: TextBuffer) -> None:
        if self.has_selection():
            self._move_to_last(buffer)
        else:
            self.cursor += 1
        self.clamp(buffer)
        self.has_preferred_x = False

    def _shift_left(self, buffer: TextBuffer) -> None:
        self.clamp(buffer)
        self._prep_selection_at_cursor()
        if self.select_end > 0:
            self.select_end -= 1
        self.cursor = self.select_end
        self.has_preferred_x = False

    def _shift_right(self, buffer: TextBuffer) -> None:
        self._prep_selection_at_cursor()
        self.select_end += 1
        self.clamp(buffer)
        self.cursor = self.select_end
        self.has_preferred_x = False

    def _word_left(self, buffer: TextBuffer) -> None:
        if self.has_selection():
            self._move_to_first()
        else:
            self.cursor = move_word_left(buffer, self.cursor)
            self.clamp(buffer)

    def _shift_word_left(self, buffer: TextBuffer) -> None:
        if not self.has_selection():
            self._prep_selection_at_cursor()
        self.cursor = move_word_left(buffer, self.cursor)
        self.select_end = self.cursor
        self.clamp(buffer)

    def _word_right(self, buffer: TextBuffer) -> None:
        if self.has_selection():
            self._move_to_last(buffer)
        else:
            self.cursor = move_word_right(buffer, self.cursor)
            self.clamp(buffer)

    def _shift_word_right(self, buffer: TextBuffer) -> None:
        if not self.has_selection():
            self._prep_selection_at_cursor()
        self.cursor = move_word_right(buffer, self.cursor)
        self.select_end = self.cursor
        self.clamp(buffer)

    def _scan_row(self, buffer: TextBuffer, start: int, goal_x: float) -> Row:
        """Put the cursor on the row at ``start`` nearest to ``goal_x``."""
        self.cursor = start
        row = buffer.layout_row(start)
        x = row.x0
        for i in range(row.num_chars):
            dx = buffer.char_width(start, i)
            if dx == GETWIDTH_NEWLINE:
                break
            x += dx
            if x > goal_x:
                break
            self.cursor += 1
        self.clamp(buffer)
        self.has_preferred_x = True
        self.preferred_x = goal_x
        return row

    def _move_down(self, buffer: TextBuffer, select: bool, page: bool) -> None:
        if not page and self.single_line:
            self.key(buffer, Key.RIGHT | (Key.SHIFT if select else 0))
            return
        row_count = self.row_count_per_page if page else 1

        if select:
            self._prep_selection_at_cursor()
        elif self.has_selection():
            self._move_to_last(buffer)

        self.clamp(buffer)
        find = find_charpos(buffer, self.cursor, self.single_line)

        for _ in range(row_count):
            goal_x = self.preferred_x if self.has_preferred_x else find.x
            start = find.first_char + find.length
            if find.length == 0:
                break
            # Moving down from the last line must not jump to its end.
            if buffer.char_at(start - 1) != NEWLINE:
                break
            row = self._scan_row(buffer, start, goal_x)
            if select:
                self.select_end = self.cursor
            find.first_char = start
            find.length = row.num_chars

    def _move_up(self, buffer: TextBuffer, select: bool, page: bool) -> None:
        if not page and self.single_line:
            self.key(buffer, Key.LEFT | (Key.SHIFT if select else 0))
            return
        row_count = self.row_count_per_page if page else 1

        if select:
            self._prep_selection_at_cursor()
        elif self.has_selection():
            self._move_to_first()

        self.clamp(buffer)
        find = find_charpos(buffer, self.cursor, self.single_line)

        for _ in range(row_count):
            goal_x = self.preferred_x if self.has_preferred_x else find.x
            if find.prev_first == find.first_char:
                break
            self._scan_row(buffer, find.prev_first, goal_x)
            if select:
                self.select_end = self.cursor
            prev_scan = find.prev_first - 1 if find.prev_first > 0 else 0
            while prev_scan > 0 and buffer.char_at(prev_scan - 1) != NEWLINE:
                prev_scan -= 1
            find.first_char = find.prev_first
            find.prev_first = prev_scan

    def _delete_forward(self, buffer: TextBuffer) -> None:
        if self.has_selection():
            self.delete_selection(buffer)
        elif self.cursor < len(buffer):
            self._delete(buffer, self.cursor, 1)
        self.has_preferred_x = False

    def _backspace(self, buffer: TextBuffer) -> None:
        if self.has_selection():
            self.delete_selection(buffer)
        else:
            self.clamp(buffer)
            if self.cursor > 0:
                self._delete(buffer, self.cursor - 1, 1)
                self.cursor -= 1
        self.has_preferred_x = False

    def _text_start(self, buffer: TextBuffer) -> None:
        self.cursor = self.select_start = self.select_end = 0
        self.has_preferred_x = False

    def _text_end(self, buffer: TextBuffer) -> None:
        self.cursor = len(buffer)
        self.select_start = self.select_end = 0
        self.has_preferred_x = False

    def _shift_text_start(self, buffer: TextBuffer) -> None:
        self._prep_selection_at_cursor()
        self.cursor = self.select_end = 0
        self.has_preferred_x = False

    def _shift_text_end(self, buffer: TextBuffer) -> None:
        self._prep_selection_at_cursor()
        self.cursor = self.select_end = len(buffer)
        self.has_preferred_x = False

    def _seek_line_start(self, buffer: TextBuffer) -> None:
        if self.single_line:
            self.cursor = 0
            return
        while self.cursor > 0 and buffer.char_at(self.cursor - 1) != NEWLINE:
            self.cursor -= 1

    def _seek_line_end(self, buffer: TextBuffer) -> None:
        n = len(buffer)
        if self.single_line:
            self.cursor = n
            return
        while self.cursor < n and buffer.char_at(self.cursor) != NEWLINE:
            self.cursor += 1

    def _line_start(self, buffer: TextBuffer) -> None:
        self.clamp(buffer)
        self._move_to_first()
        self._seek_line_start(buffer)
        self.has_preferred_x = False

    def _line_end(self, buffer: TextBuffer) -> None:
        self.clamp(buffer)
        self._move_to_first()
        self._seek_line_end(buffer)
        self.has_preferred_x = False

    def _shift_line_start(self, buffer: TextBuffer) -> None:
        self.clamp(buffer)
        self._prep_selection_at_cursor()
        self._seek_line_start(buffer)
        self.select_end = self.cursor
        self.has_preferred_x = False

    def _shift_line_end(self, buffer: TextBuffer) -> None:
        self.clamp(buffer)
        self._prep_selection_at_cursor()
        self._seek_line_end(buffer)
        self.select_end = self.cursor
        self.has_preferred_x = False


_Handler = Callable[[TextEditState, TextBuffer], None]


def _both(handler: _Handler, *commands: Key) -> dict[tuple[Key, bool], _Handler]:
    return {(command, shift): handler for command in commands for shift in (False, True)}


_COMMANDS: dict[tuple[Key, bool], _Handler] = {
    (Key.INSERT, False): TextEditState._toggle_insert,
    (Key.UNDO, False): TextEditState.undo,
    (Key.REDO, False): TextEditState.redo,
    (Key.LEFT, False): TextEditState._left,
    (Key.LEFT, True): TextEditState._shift_left,
    (Key.RIGHT, False): TextEditState._right,
    (Key.RIGHT, True): TextEditState._shift_right,
    (Key.WORDLEFT, False): TextEditState._word_left,
    (Key.WORDLEFT, True): TextEditState._shift_word_left,
    (Key.WORDRIGHT, False): TextEditState._word_right,
    (Key.WORDRIGHT, True): TextEditState._shift_word_right,
    (Key.DOWN, False): lambda s, b: s._move_down(b, False, False),
    (Key.DOWN, True): lambda s, b: s._move_down(b, True, False),
    (Key.PGDOWN, False): lambda s, b: s._move_down(b, False, True),
    (Key.PGDOWN, True): lambda s, b: s._move_down(b, True, True),
    (Key.UP, False): lambda s, b: s._move_up(b, False, False),
    (Key.UP, True): lambda s, b: s._move_up(b, True, False),
    (Key.PGUP, False): lambda s, b: s._move_up(b, False, True),
    (Key.PGUP, True): lambda s, b: s._move_up(b, True, True),
    **_both(TextEditState._delete_forward, Key.DELETE),
    **_both(TextEditState._backspace, Key.BACKSPACE),
    (Key.TEXTSTART, False): TextEditState._text_start,
    (Key.TEXTSTART2, False): TextEditState._text_start,
    (Key.TEXTEND, False): TextEditState._text_end,
    (Key.TEXTEND2, False): TextEditState._text_end,
    (Key.TEXTSTART, True): TextEditState._shift_text_start,
    (Key.TEXTSTART2, True): TextEditState._shift_text_start,
    (Key.TEXTEND, True): TextEditState._shift_text_end,
    (Key.TEXTEND2, True): TextEditState._shift_text_end,
    (Key.LINESTART, False): TextEditState._line_start,
    (Key.LINESTART2, False): TextEditState._line_start,
    (Key.LINEEND, False): TextEditState._line_end,
    (Key.LINEEND2, False): TextEditState._line_end,
    (Key.LINESTART, True): TextEditState._shift_line_start,
    (Key.LINESTART2, True): TextEditState._shift_line_start,
    (Key.LINEEND, True): TextEditState._shift_line_end,
    (Key.LINEEND2, True): TextEditState._shift_line_end,
}
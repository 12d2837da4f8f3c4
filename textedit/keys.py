"""Keyboard input codes understood by the text editor.

A keyboard input is a single integer. Printable input is the Unicode code
point of the character itself. Editing commands carry the ``KEYDOWN`` bit,
which lies above the Unicode range, so they never look like a character.
``SHIFT`` is a separate bit that is or'ed into a command to extend the
selection, e.g. ``Key.LEFT | Key.SHIFT``.
"""

from __future__ import annotations

import sys
from enum import IntEnum

__all__ = ["Key", "key_to_text"]

_KEYDOWN = 0x200000
_SHIFT = 0x400000


class Key(IntEnum):
    """Editing commands and modifier bits."""

    KEYDOWN = _KEYDOWN
    SHIFT = _SHIFT

    LEFT = _KEYDOWN | 1
    RIGHT = _KEYDOWN | 2
    UP = _KEYDOWN | 3
    DOWN = _KEYDOWN | 4
    PGUP = _KEYDOWN | 5
    PGDOWN = _KEYDOWN | 6
    LINESTART = _KEYDOWN | 7
    LINEEND = _KEYDOWN | 8
    TEXTSTART = _KEYDOWN | 9
    TEXTEND = _KEYDOWN | 10
    DELETE = _KEYDOWN | 11
    BACKSPACE = _KEYDOWN | 12
    UNDO = _KEYDOWN | 13
    REDO = _KEYDOWN | 14
    INSERT = _KEYDOWN | 15
    WORDLEFT = _KEYDOWN | 16
    WORDRIGHT = _KEYDOWN | 17
    LINESTART2 = _KEYDOWN | 18
    LINEEND2 = _KEYDOWN | 19
    TEXTSTART2 = _KEYDOWN | 20
    TEXTEND2 = _KEYDOWN | 21

    @property
    def shifted(self) -> int:
        """This command with the shift bit set."""
        return int(self) | _SHIFT


def key_to_text(key: int | str) -> int:
    """Map a keyboard input to the code point it inserts, or -1 if none.

    A one-character string is accepted as a convenience and maps to its
    code point. Commands, modifier bits and values outside the Unicode
    range are not insertable.
    """
    if isinstance(key, str):
        if len(key) != 1:
            raise ValueError(f"expected a single character, got {key!r}")
        key = ord(key)
    key = int(key)
    if key < 0 or key & (_KEYDOWN | _SHIFT) or key > sys.maxunicode:
        return -1
    return key
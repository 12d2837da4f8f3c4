"""Text storage and row layout used by the editor.

The editor never touches text directly. It asks a :class:`TextBuffer` for
characters, for the shape of one displayed row and for the width of each
character, and it edits the text through ``delete_chars`` and
``insert_chars``. Characters are Unicode code points (``int``).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass

__all__ = [
    "NEWLINE",
    "GETWIDTH_NEWLINE",
    "Row",
    "TextBuffer",
    "MonospaceBuffer",
    "is_space",
]

NEWLINE = ord("\n")
"""The character that ends a line."""

GETWIDTH_NEWLINE = -1.0
"""Width reported for a newline; vertical moves stop scanning a row there."""


@dataclass
class Row:
    """Shape of one displayed row of characters.

    ``x0`` and ``x1`` are where the row starts and ends horizontally,
    ``baseline_y_delta`` is the distance from the previous row's baseline,
    ``ymin`` and ``ymax`` are the row's extent around its baseline, and
    ``num_chars`` is how many characters the row consumes.
    """

    x0: float = 0.0
    x1: float = 0.0
    baseline_y_delta: float = 0.0
    ymin: float = 0.0
    ymax: float = 0.0
    num_chars: int = 0


class TextBuffer(ABC):
    """The string being edited, together with its layout."""

    @abstractmethod
    def __len__(self) -> int:
        """Number of characters in the buffer."""

    @abstractmethod
    def layout_row(self, start: int) -> Row:
        """Lay out the row of characters that begins at ``start``."""

    @abstractmethod
    def char_width(self, line_start: int, index: int) -> float:
        """Width of the ``index``-th character of the row at ``line_start``."""

    @abstractmethod
    def char_at(self, index: int) -> int:
        """Code point of the character at ``index``."""

    @abstractmethod
    def delete_chars(self, index: int, count: int) -> None:
        """Remove ``count`` characters starting at ``index``."""

    @abstractmethod
    def insert_chars(self, index: int, text: str | Iterable[int]) -> bool:
        """Insert ``text`` at ``index``; return whether it was inserted."""


def _code_points(text: str | Iterable[int]) -> list[int]:
    if isinstance(text, str):
        return [ord(ch) for ch in text]
    return [int(ch) for ch in text]


class MonospaceBuffer(TextBuffer):
    """A buffer laid out in a fixed-width font, one row per line.

    Every character is ``char_width`` wide except a newline, which ends its
    row and reports :data:`GETWIDTH_NEWLINE`. Rows are ``line_height`` tall,
    extending from 0 to ``line_height`` below the baseline.
    """

    def __init__(
        self,
        text: str | Iterable[int] = "",
        char_width: float = 1.0,
        line_height: float = 1.0,
    ) -> None:
        if char_width <= 0:
            raise ValueError("char_width must be positive")
        if line_height <= 0:
            raise ValueError("line_height must be positive")
        self._chars = _code_points(text)
        self._char_width = float(char_width)
        self._line_height = float(line_height)

    def __len__(self) -> int:
        return len(self._chars)

    def __str__(self) -> str:
        return "".join(map(chr, self._chars))

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}({str(self)!r}, "
            f"char_width={self._char_width}, line_height={self._line_height})"
        )

    def layout_row(self, start: int) -> Row:
        if not 0 <= start <= len(self._chars):
            raise IndexError(f"row start {start} out of range")
        try:
            end = self._chars.index(NEWLINE, start)
            visible = end - start
            num_chars = visible + 1
        except ValueError:
            visible = num_chars = len(self._chars) - start
        return Row(
            x0=0.0,
            x1=visible * self._char_width,
            baseline_y_delta=self._line_height,
            ymin=0.0,
            ymax=self._line_height,
            num_chars=num_chars,
        )

    def char_width(self, line_start: int, index: int) -> float:
        if self.char_at(line_start + index) == NEWLINE:
            return GETWIDTH_NEWLINE
        return self._char_width

    def char_at(self, index: int) -> int:
        if not 0 <= index < len(self._chars):
            raise IndexError(f"character index {index} out of range")
        return self._chars[index]

    def delete_chars(self, index: int, count: int) -> None:
        if count < 0 or index < 0 or index + count > len(self._chars):
            raise IndexError(f"cannot delete {count} characters at {index}")
        del self._chars[index : index + count]

    def insert_chars(self, index: int, text: str | Iterable[int]) -> bool:
        if not 0 <= index <= len(self._chars):
            raise IndexError(f"insert position {index} out of range")
        self._chars[index:index] = _code_points(text)
        return True


def is_space(ch: int | str) -> bool:
    """Whether a character, given as a code point or a string, is whitespace."""
    if isinstance(ch, str):
        if len(ch) != 1:
            raise ValueError(f"expected a single character, got {ch!r}")
        return ch.isspace()
    if ch < 0:
        return False
    return chr(ch).isspace()
"""Undo and redo history for the text editor.

Undo and redo records share one fixed-size table. Undo records grow up from
the start and redo records grow down from the end. Their characters share
one fixed-size character store in the same way. When space runs out the
oldest undo records, or the oldest redo records, are dropped.

A record says that at ``where``, ``delete_length`` characters are to be
removed and ``insert_length`` characters, kept in the character store from
``char_storage`` on, are to be put back in their place. ``char_storage`` is
-1 when the record keeps no characters.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from .layout import TextBuffer

__all__ = [
    "DEFAULT_STATE_COUNT",
    "DEFAULT_CHAR_COUNT",
    "UndoRecord",
    "UndoState",
]

DEFAULT_STATE_COUNT = 99
"""Default number of undo and redo records kept."""

DEFAULT_CHAR_COUNT = 999
"""Default number of characters the undo and redo records can keep."""


@dataclass
class UndoRecord:
    """One step of undo or redo history."""

    where: int = 0
    insert_length: int = 0
    delete_length: int = 0
    char_storage: int = -1


class UndoState:
    """Bounded undo and redo history of a single text field."""

    def __init__(
        self,
        state_count: int = DEFAULT_STATE_COUNT,
        char_count: int = DEFAULT_CHAR_COUNT,
    ) -> None:
        if state_count <= 0:
            raise ValueError("state_count must be positive")
        if char_count <= 0:
            raise ValueError("char_count must be positive")
        self.state_count = state_count
        self.char_count = char_count
        self.records = [UndoRecord() for _ in range(state_count)]
        self.chars = [0] * char_count
        self.reset()

    def reset(self) -> None:
        """Forget all undo and redo history."""
        self.undo_point = 0
        self.undo_char_point = 0
        self.redo_point = self.state_count
        self.redo_char_point = self.char_count

    @property
    def can_undo(self) -> bool:
        """Whether there is a step to undo."""
        return self.undo_point > 0

    @property
    def can_redo(self) -> bool:
        """Whether there is a step to redo."""
        return self.redo_point < self.state_count

    def flush_redo(self) -> None:
        """Drop every redo record."""
        self.redo_point = self.state_count
        self.redo_char_point = self.char_count

    def discard_undo(self) -> None:
        """Drop the oldest undo record, releasing its characters."""
        if self.undo_point <= 0:
            return
        oldest = self.records[0]
        if oldest.char_storage >= 0:
            n = oldest.insert_length
            self.undo_char_point -= n
            kept = self.undo_char_point
            self.chars[0:kept] = self.chars[n : n + kept]
            for record in self.records[: self.undo_point]:
                if record.char_storage >= 0:
                    record.char_storage -= n
        # The slot freed at the top keeps a copy of what was there.
        stale = replace(self.records[self.undo_point - 1])
        self.undo_point -= 1
        del self.records[0]
        self.records.insert(self.undo_point, stale)

    def discard_redo(self) -> None:
        """Drop the oldest redo record, releasing its characters."""
        k = self.state_count - 1
        if self.redo_point > k:
            return
        oldest = self.records[k]
        if oldest.char_storage >= 0:
            n = oldest.insert_length
            self.redo_char_point += n
            start = self.redo_char_point
            count = self.char_count
            self.chars[start:count] = self.chars[start - n : count - n]
            for record in self.records[self.redo_point : k]:
                if record.char_storage >= 0:
                    record.char_storage += n
        # The slot freed at the bottom keeps a copy of what was there.
        stale = replace(self.records[self.redo_point])
        del self.records[k]
        self.records.insert(self.redo_point, stale)
        self.redo_point += 1

    def _create_record(self, numchars: int) -> UndoRecord | None:
        self.flush_redo()
        if self.undo_point == self.state_count:
            self.discard_undo()
        if numchars > self.char_count:
            self.undo_point = 0
            self.undo_char_point = 0
            return None
        while self.undo_char_point + numchars > self.char_count:
            self.discard_undo()
        record = self.records[self.undo_point]
        self.undo_point += 1
        return record

    def create_undo(
        self, where: int, insert_length: int, delete_length: int
    ) -> UndoRecord | None:
        """Add an undo record and reserve room for its characters.

        Any redo history is dropped. Returns the new record, whose
        ``char_storage`` is where its ``insert_length`` characters go
        (-1 if it keeps none), or None if the characters can never fit,
        in which case all undo history is dropped as well.
        """
        record = self._create_record(insert_length)
        if record is None:
            return None
        record.where = where
        record.insert_length = insert_length
        record.delete_length = delete_length
        if insert_length == 0:
            record.char_storage = -1
        else:
            record.char_storage = self.undo_char_point
            self.undo_char_point += insert_length
        return record

    def make_insert(self, where: int, length: int) -> None:
        """Record that ``length`` characters are about to be inserted at ``where``."""
        self.create_undo(where, 0, length)

    def _save(self, record: UndoRecord | None, buffer: TextBuffer, count: int) -> None:
        if record is None or record.char_storage < 0:
            return
        base = record.char_storage
        for offset in range(count):
            self.chars[base + offset] = buffer.char_at(record.where + offset)

    def make_delete(self, buffer: TextBuffer, where: int, length: int) -> None:
        """Record that ``length`` characters of ``buffer`` at ``where`` are about to go."""
        self._save(self.create_undo(where, length, 0), buffer, length)

    def make_replace(
        self, buffer: TextBuffer, where: int, old_length: int, new_length: int
    ) -> None:
        """Record that ``old_length`` characters at ``where`` are about to be
        replaced by ``new_length`` new ones."""
        self._save(self.create_undo(where, old_length, new_length), buffer, old_length)

    def undo(self, buffer: TextBuffer) -> int | None:
        """Undo the latest step in ``buffer``.

        Returns the cursor position after the step, or None if nothing
        was undone.
        """
        if self.undo_point == 0:
            return None

        u = replace(self.records[self.undo_point - 1])
        r = self.records[self.redo_point - 1]
        r.char_storage = -1
        r.insert_length = u.delete_length
        r.delete_length = u.insert_length
        r.where = u.where

        if u.delete_length:
            if self.undo_char_point + u.delete_length >= self.char_count:
                # No room to keep the characters for redo.
                r.insert_length = 0
            else:
                while self.undo_char_point + u.delete_length > self.redo_char_point:
                    if self.redo_point == self.state_count:
                        return None
                    self.discard_redo()
                r = self.records[self.redo_point - 1]
                self.redo_char_point -= u.delete_length
                r.char_storage = self.redo_char_point
                for offset in range(u.delete_length):
                    self.chars[r.char_storage + offset] = buffer.char_at(u.where + offset)
            buffer.delete_chars(u.where, u.delete_length)

        if u.insert_length:
            start = u.char_storage
            buffer.insert_chars(u.where, self.chars[start : start + u.insert_length])
            self.undo_char_point -= u.insert_length

        self.undo_point -= 1
        self.redo_point -= 1
        return u.where + u.insert_length

    def redo(self, buffer: TextBuffer) -> int | None:
        """Redo the latest undone step in ``buffer``.

        Returns the cursor position after the step, or None if nothing
        was redone.
        """
        if self.redo_point == self.state_count:
            return None

        u = self.records[self.undo_point]
        r = replace(self.records[self.redo_point])
        u.delete_length = r.insert_length
        u.insert_length = r.delete_length
        u.where = r.where
        u.char_storage = -1

        if r.delete_length:
            if self.undo_char_point + u.insert_length > self.redo_char_point:
                u.insert_length = 0
                u.delete_length = 0
            else:
                u.char_storage = self.undo_char_point
                self.undo_char_point += u.insert_length
                for offset in range(u.insert_length):
                    self.chars[u.char_storage + offset] = buffer.char_at(u.where + offset)
            buffer.delete_chars(r.where, r.delete_length)

        if r.insert_length:
            start = r.char_storage
            buffer.insert_chars(r.where, self.chars[start : start + r.insert_length])
            self.redo_char_point += r.insert_length

        self.undo_point += 1
        self.redo_point += 1
        return r.where + r.insert_length
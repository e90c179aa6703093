"""Bounded undo and redo history for the text editor.

Undo records grow up from the start of a fixed table and redo records grow
down from its end. The characters they need share one fixed buffer in the
same way, so the history never uses more than the configured space. When
space runs out, the oldest entries are dropped.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

from wowstudio.textedit.layout import TextBuffer

DEFAULT_STATE_COUNT = 99
DEFAULT_CHAR_COUNT = 999
_EMPTY_CHAR = "\0"


@dataclass
class UndoRecord:
    """One step of history.

    Applying it deletes ``delete_length`` characters at ``where`` and then
    inserts the ``insert_length`` characters kept at ``char_storage``.
    A ``char_storage`` of -1 means that no characters are kept.
    """

    where: int = 0
    insert_length: int = 0
    delete_length: int = 0
    char_storage: int = -1


class UndoState:
    """Undo and redo history with a fixed number of records and characters."""

    def __init__(
        self,
        state_count: int = DEFAULT_STATE_COUNT,
        char_count: int = DEFAULT_CHAR_COUNT,
    ) -> None:
        if state_count < 1:
            raise ValueError("at least one undo record is required")
        if char_count < 0:
            raise ValueError("character storage must not be negative")
        self.state_count = state_count
        self.char_count = char_count
        self.records = [UndoRecord() for _ in range(state_count)]
        self.chars = [_EMPTY_CHAR] * char_count
        self.undo_point = 0
        self.redo_point = state_count
        self.undo_char_point = 0
        self.redo_char_point = char_count

    @property
    def can_undo(self) -> bool:
        return self.undo_point > 0

    @property
    def can_redo(self) -> bool:
        return self.redo_point < self.state_count

    def clear(self) -> None:
        """Forget all history."""
        self.undo_point = 0
        self.undo_char_point = 0
        self.redo_point = self.state_count
        self.redo_char_point = self.char_count

    def flush_redo(self) -> None:
        """Forget all redo records."""
        self.redo_point = self.state_count
        self.redo_char_point = self.char_count

    def _stored(self, start: int, length: int) -> str:
        return "".join(self.chars[start : start + length])

    def discard_undo(self) -> None:
        """Drop the oldest undo record."""
        if self.undo_point <= 0:
            return
        oldest = self.records[0]
        if oldest.char_storage >= 0:
            n = oldest.insert_length
            self.undo_char_point -= n
            self.chars[0 : self.undo_char_point] = self.chars[n : n + self.undo_char_point]
            for record in self.records[: self.undo_point]:
                if record.char_storage >= 0:
                    record.char_storage -= n
        self.undo_point -= 1
        shifted = [replace(r) for r in self.records[1 : self.undo_point + 1]]
        self.records[0 : self.undo_point] = shifted

    def discard_redo(self) -> None:
        """Drop the oldest redo record."""
        k = self.state_count - 1
        if self.redo_point > k:
            return
        last = self.records[k]
        if last.char_storage >= 0:
            n = last.insert_length
            self.redo_char_point += n
            count = self.char_count - self.redo_char_point
            src = self.redo_char_point - n
            self.chars[self.redo_char_point : self.redo_char_point + count] = self.chars[
                src : src + count
            ]
            for record in self.records[self.redo_point : k]:
                if record.char_storage >= 0:
                    record.char_storage += n
        start = self.redo_point
        shifted = [replace(r) for r in self.records[start:k]]
        self.records[start + 1 : k + 1] = shifted
        self.redo_point += 1

    def _create_record(self, numchars: int) -> Optional[UndoRecord]:
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

    def create_undo(self, pos: int, insert_len: int, delete_len: int) -> Optional[int]:
        """Add an undo record and reserve room for ``insert_len`` characters.

        Returns the index in ``chars`` where the characters belong, or None
        when no characters are to be kept or they cannot fit.
        """
        record = self._create_record(insert_len)
        if record is None:
            return None

        record.where = pos
        record.insert_length = insert_len
        record.delete_length = delete_len

        if insert_len == 0:
            record.char_storage = -1
            return None
        record.char_storage = self.undo_char_point
        self.undo_char_point += insert_len
        return record.char_storage

    def _save(self, buffer: TextBuffer, storage: int, where: int, length: int) -> None:
        for offset in range(length):
            self.chars[storage + offset] = buffer.get_char(where + offset)

    def make_undo_insert(self, where: int, length: int) -> None:
        """Record that ``length`` characters were inserted at ``where``."""
        self.create_undo(where, 0, length)

    def make_undo_delete(self, buffer: TextBuffer, where: int, length: int) -> None:
        """Record the ``length`` characters at ``where`` before they are deleted."""
        storage = self.create_undo(where, length, 0)
        if storage is not None:
            self._save(buffer, storage, where, length)

    def make_undo_replace(
        self, buffer: TextBuffer, where: int, old_length: int, new_length: int
    ) -> None:
        """Record the ``old_length`` characters at ``where`` before they are replaced."""
        storage = self.create_undo(where, old_length, new_length)
        if storage is not None:
            self._save(buffer, storage, where, old_length)

    def undo(self, buffer: TextBuffer) -> Optional[int]:
        """Undo the latest step in ``buffer``.

        Returns the new cursor position, or None when nothing was undone.
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
                r.insert_length = 0
            else:
                while self.undo_char_point + u.delete_length > self.redo_char_point:
                    if self.redo_point == self.state_count:
                        return None
                    self.discard_redo()
                r = self.records[self.redo_point - 1]
                r.char_storage = self.redo_char_point - u.delete_length
                self.redo_char_point -= u.delete_length
                self._save(buffer, r.char_storage, u.where, u.delete_length)

            buffer.delete_chars(u.where, u.delete_length)

        if u.insert_length:
            buffer.insert_chars(u.where, self._stored(u.char_storage, u.insert_length))
            self.undo_char_point -= u.insert_length

        self.undo_point -= 1
        self.redo_point -= 1
        return u.where + u.insert_length

    def redo(self, buffer: TextBuffer) -> Optional[int]:
        """Redo the latest undone step in ``buffer``.

        Returns the new cursor position, or None when nothing was redone.
        """
        if self.redo_point == self.state_count:
            return None

        r = replace(self.records[self.redo_point])
        u = self.records[self.undo_point]
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
                self._save(buffer, u.char_storage, u.where, u.insert_length)

            buffer.delete_chars(r.where, r.delete_length)

        if r.insert_length:
            buffer.insert_chars(r.where, self._stored(r.char_storage, r.insert_length))
            self.redo_char_point += r.insert_length

        self.undo_point += 1
        self.redo_point += 1
        return r.where + r.insert_length
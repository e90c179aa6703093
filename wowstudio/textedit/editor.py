"""Editing state of a text field: cursor, selection, key handling and undo."""

from __future__ import annotations

from enum import IntEnum
from typing import Union

from wowstudio.textedit.layout import NEWLINE, TextBuffer, find_charpos, locate_coord
from wowstudio.textedit.undo import UndoState

_KEY_BASE = 0x200000
_MAX_CODEPOINT = 0x110000


class Key(IntEnum):
    """Editing keys. ``SHIFT`` may be or'd into any of them to extend the selection."""

    LEFT = _KEY_BASE
    RIGHT = _KEY_BASE + 1
    UP = _KEY_BASE + 2
    DOWN = _KEY_BASE + 3
    PGUP = _KEY_BASE + 4
    PGDOWN = _KEY_BASE + 5
    LINESTART = _KEY_BASE + 6
    LINEEND = _KEY_BASE + 7
    TEXTSTART = _KEY_BASE + 8
    TEXTEND = _KEY_BASE + 9
    DELETE = _KEY_BASE + 10
    BACKSPACE = _KEY_BASE + 11
    UNDO = _KEY_BASE + 12
    REDO = _KEY_BASE + 13
    INSERT = _KEY_BASE + 14
    WORDLEFT = _KEY_BASE + 15
    WORDRIGHT = _KEY_BASE + 16
    SHIFT = 0x400000


def _is_space(ch: str) -> bool:
    return ch.isspace()


def _is_word_boundary(buffer: TextBuffer, idx: int) -> bool:
    if idx <= 0:
        return True
    return _is_space(buffer.get_char(idx - 1)) and not _is_space(buffer.get_char(idx))


def _move_word_left(buffer: TextBuffer, c: int) -> int:
    c -= 1
    while c >= 0 and not _is_word_boundary(buffer, c):
        c -= 1
    return max(c, 0)


def _move_word_right(buffer: TextBuffer, c: int) -> int:
    length = len(buffer)
    c += 1
    while c < length and not _is_word_boundary(buffer, c):
        c += 1
    return min(c, length)


class TextEditState:
    """Cursor, selection and undo history of one text field.

    The string itself lives in a ``TextBuffer``; every operation takes the
    buffer it works on. The selection runs between ``select_start`` and
    ``select_end`` in either order; when they are equal there is none.
    """

    def __init__(self, single_line: bool = False) -> None:
        self.undostate = UndoState()
        self.clear(single_line)

    def clear(self, single_line: bool = False) -> None:
        """Reset cursor, selection, modes and history."""
        self.undostate.clear()
        self.select_start = 0
        self.select_end = 0
        self.cursor = 0
        self.has_preferred_x = False
        self.preferred_x = 0.0
        self.cursor_at_end_of_line = False
        self.initialized = True
        self.single_line = bool(single_line)
        self.insert_mode = False
        self.row_count_per_page = 0

    def has_selection(self) -> bool:
        return self.select_start != self.select_end

    # Mouse input

    def _single_line_y(self, buffer: TextBuffer, y: float) -> float:
        return buffer.layout_row(0).ymin if self.single_line else y

    def click(self, buffer: TextBuffer, x: float, y: float) -> None:
        """Move the cursor to the clicked point and drop the selection."""
        y = self._single_line_y(buffer, y)
        self.cursor = locate_coord(buffer, x, y)
        self.select_start = self.cursor
        self.select_end = self.cursor
        self.has_preferred_x = False

    def drag(self, buffer: TextBuffer, x: float, y: float) -> None:
        """Move the cursor and the selection end to the dragged point."""
        y = self._single_line_y(buffer, y)
        if self.select_start == self.select_end:
            self.select_start = self.cursor
        p = locate_coord(buffer, x, y)
        self.cursor = self.select_end = p

    # Selection helpers

    def _clamp(self, buffer: TextBuffer) -> None:
        n = len(buffer)
        if self.has_selection():
            self.select_start = min(self.select_start, n)
            self.select_end = min(self.select_end, n)
            if self.select_start == self.select_end:
                self.cursor = self.select_start
        self.cursor = min(self.cursor, n)

    def _delete(self, buffer: TextBuffer, where: int, length: int) -> None:
        self.undostate.make_undo_delete(buffer, where, length)
        buffer.delete_chars(where, length)
        self.has_preferred_x = False

    def _delete_selection(self, buffer: TextBuffer) -> None:
        self._clamp(buffer)
        if not self.has_selection():
            return
        if self.select_start < self.select_end:
            self._delete(buffer, self.select_start, self.select_end - self.select_start)
            self.select_end = self.cursor = self.select_start
        else:
            self._delete(buffer, self.select_end, self.select_start - self.select_end)
            self.select_start = self.cursor = self.select_end
        self.has_preferred_x = False

    def _sort_selection(self) -> None:
        if self.select_end < self.select_start:
            self.select_start, self.select_end = self.select_end, self.select_start

    def _move_to_first(self) -> None:
        if self.has_selection():
            self._sort_selection()
            self.cursor = self.select_start
            self.select_end = self.select_start
            self.has_preferred_x = False

    def _move_to_last(self, buffer: TextBuffer) -> None:
        if self.has_selection():
            self._sort_selection()
            self._clamp(buffer)
            self.cursor = self.select_end
            self.select_start = self.select_end
            self.has_preferred_x = False

    def _prep_selection_at_cursor(self) -> None:
        if not self.has_selection():
            self.select_start = self.select_end = self.cursor
        else:
            self.cursor = self.select_end

    # Editing

    def cut(self, buffer: TextBuffer) -> bool:
        """Delete the selection; returns whether there was one."""
        if self.has_selection():
            self._delete_selection(buffer)
            self.has_preferred_x = False
            return True
        return False

    def paste(self, buffer: TextBuffer, text: str) -> bool:
        """Insert ``text`` at the cursor, replacing any selection."""
        self._clamp(buffer)
        self._delete_selection(buffer)
        if buffer.insert_chars(self.cursor, text):
            self.undostate.make_undo_insert(self.cursor, len(text))
            self.cursor += len(text)
            self.has_preferred_x = False
            return True
        return False

    def text(self, buffer: TextBuffer, text: str) -> None:
        """Type ``text`` at the cursor, honouring insert mode and the selection."""
        if text[:1] == NEWLINE and self.single_line:
            return

        if self.insert_mode and not self.has_selection() and self.cursor < len(buffer):
            self.undostate.make_undo_replace(buffer, self.cursor, 1, 1)
            buffer.delete_chars(self.cursor, 1)
            if buffer.insert_chars(self.cursor, text):
                self.cursor += len(text)
                self.has_preferred_x = False
        else:
            self._delete_selection(buffer)
            if buffer.insert_chars(self.cursor, text):
                self.undostate.make_undo_insert(self.cursor, len(text))
                self.cursor += len(text)
                self.has_preferred_x = False

    def _line_start(self, buffer: TextBuffer) -> None:
        if self.single_line:
            self.cursor = 0
        else:
            while self.cursor > 0 and buffer.get_char(self.cursor - 1) != NEWLINE:
                self.cursor -= 1

    def _line_end(self, buffer: TextBuffer) -> None:
        n = len(buffer)
        if self.single_line:
            self.cursor = n
        else:
            while self.cursor < n and buffer.get_char(self.cursor) != NEWLINE:
                self.cursor += 1

    def _seek_in_row(self, buffer: TextBuffer, start: int, goal_x: float) -> int:
        row = buffer.layout_row(start)
        x = row.x0
        for i in range(row.num_chars):
            x += buffer.get_width(start, i)
            if x > goal_x:
                break
            self.cursor += 1
        return row.num_chars

    def _key_down(self, buffer: TextBuffer, key: int) -> None:
        shift = key & Key.SHIFT
        sel = bool(shift)
        is_page = (key & ~Key.SHIFT) == Key.PGDOWN
        row_count = self.row_count_per_page if is_page else 1

        if not is_page and self.single_line:
            self.key(buffer, Key.RIGHT | shift)
            return

        if sel:
            self._prep_selection_at_cursor()
        elif self.has_selection():
            self._move_to_last(buffer)

        self._clamp(buffer)
        find = find_charpos(buffer, self.cursor, self.single_line)

        for _ in range(row_count):
            goal_x = self.preferred_x if self.has_preferred_x else find.x
            start = find.first_char + find.length

            if find.length == 0:
                break
            if buffer.get_char(find.first_char + find.length - 1) != NEWLINE:
                break

            self.cursor = start
            num_chars = self._seek_in_row(buffer, start, goal_x)
            self._clamp(buffer)

            self.has_preferred_x = True
            self.preferred_x = goal_x
            if sel:
                self.select_end = self.cursor

            find.first_char = find.first_char + find.length
            find.length = num_chars

    def _key_up(self, buffer: TextBuffer, key: int) -> None:
        shift = key & Key.SHIFT
        sel = bool(shift)
        is_page = (key & ~Key.SHIFT) == Key.PGUP
        row_count = self.row_count_per_page if is_page else 1

        if not is_page and self.single_line:
            self.key(buffer, Key.LEFT | shift)
            return

        if sel:
            self._prep_selection_at_cursor()
        elif self.has_selection():
            self._move_to_first()

        self._clamp(buffer)
        find = find_charpos(buffer, self.cursor, self.single_line)

        for _ in range(row_count):
            goal_x = self.preferred_x if self.has_preferred_x else find.x

            if find.prev_first == find.first_char:
                break

            self.cursor = find.prev_first
            self._seek_in_row(buffer, find.prev_first, goal_x)
            self._clamp(buffer)

            self.has_preferred_x = True
            self.preferred_x = goal_x
            if sel:
                self.select_end = self.cursor

            prev_scan = find.prev_first - 1 if find.prev_first > 0 else 0
            while prev_scan > 0 and buffer.get_char(prev_scan - 1) != NEWLINE:
                prev_scan -= 1
            find.first_char = find.prev_first
            find.prev_first = prev_scan

    def key(self, buffer: TextBuffer, key: Union[int, str]) -> None:
        """Apply one key press.

        ``key`` is a ``Key`` (optionally or'd with ``Key.SHIFT``), a character
        code, or a string to type.
        """
        if isinstance(key, str):
            if key:
                self.text(buffer, key)
            return

        shift = Key.SHIFT

        if key == Key.INSERT:
            self.insert_mode = not self.insert_mode

        elif key == Key.UNDO:
            position = self.undostate.undo(buffer)
            if position is not None:
                self.cursor = position
            self.has_preferred_x = False

        elif key == Key.REDO:
            position = self.undostate.redo(buffer)
            if position is not None:
                self.cursor = position
            self.has_preferred_x = False

        elif key == Key.LEFT:
            if self.has_selection():
                self._move_to_first()
            elif self.cursor > 0:
                self.cursor -= 1
            self.has_preferred_x = False

        elif key == Key.RIGHT:
            if self.has_selection():
                self._move_to_last(buffer)
            else:
                self.cursor += 1
            self._clamp(buffer)
            self.has_preferred_x = False

        elif key == Key.LEFT | shift:
            self._clamp(buffer)
            self._prep_selection_at_cursor()
            if self.select_end > 0:
                self.select_end -= 1
            self.cursor = self.select_end
            self.has_preferred_x = False

        elif key == Key.WORDLEFT:
            if self.has_selection():
                self._move_to_first()
            else:
                self.cursor = _move_word_left(buffer, self.cursor)
                self._clamp(buffer)

        elif key == Key.WORDLEFT | shift:
            if not self.has_selection():
                self._prep_selection_at_cursor()
            self.cursor = _move_word_left(buffer, self.cursor)
            self.select_end = self.cursor
            self._clamp(buffer)

        elif key == Key.WORDRIGHT:
            if self.has_selection():
                self._move_to_last(buffer)
            else:
                self.cursor = _move_word_right(buffer, self.cursor)
                self._clamp(buffer)

        elif key == Key.WORDRIGHT | shift:
            if not self.has_selection():
                self._prep_selection_at_cursor()
            self.cursor = _move_word_right(buffer, self.cursor)
            self.select_end = self.cursor
            self._clamp(buffer)

        elif key == Key.RIGHT | shift:
            self._prep_selection_at_cursor()
            self.select_end += 1
            self._clamp(buffer)
            self.cursor = self.select_end
            self.has_preferred_x = False

        elif key in (Key.DOWN, Key.DOWN | shift, Key.PGDOWN, Key.PGDOWN | shift):
            self._key_down(buffer, key)

        elif key in (Key.UP, Key.UP | shift, Key.PGUP, Key.PGUP | shift):
            self._key_up(buffer, key)

        elif key in (Key.DELETE, Key.DELETE | shift):
            if self.has_selection():
                self._delete_selection(buffer)
            elif self.cursor < len(buffer):
                self._delete(buffer, self.cursor, 1)
            self.has_preferred_x = False

        elif key in (Key.BACKSPACE, Key.BACKSPACE | shift):
            if self.has_selection():
                self._delete_selection(buffer)
            else:
                self._clamp(buffer)
                if self.cursor > 0:
                    prev = self.cursor - 1
                    self._delete(buffer, prev, self.cursor - prev)
                    self.cursor = prev
            self.has_preferred_x = False

        elif key == Key.TEXTSTART:
            self.cursor = self.select_start = self.select_end = 0
            self.has_preferred_x = False

        elif key == Key.TEXTEND:
            self.cursor = len(buffer)
            self.select_start = self.select_end = 0
            self.has_preferred_x = False

        elif key == Key.TEXTSTART | shift:
            self._prep_selection_at_cursor()
            self.cursor = self.select_end = 0
            self.has_preferred_x = False

        elif key == Key.TEXTEND | shift:
            self._prep_selection_at_cursor()
            self.cursor = self.select_end = len(buffer)
            self.has_preferred_x = False

        elif key == Key.LINESTART:
            self._clamp(buffer)
            self._move_to_first()
            self._line_start(buffer)
            self.has_preferred_x = False

        elif key == Key.LINEEND:
            self._clamp(buffer)
            self._move_to_first()
            self._line_end(buffer)
            self.has_preferred_x = False

        elif key == Key.LINESTART | shift:
            self._clamp(buffer)
            self._prep_selection_at_cursor()
            self._line_start(buffer)
            self.select_end = self.cursor
            self.has_preferred_x = False

        elif key == Key.LINEEND | shift:
            self._clamp(buffer)
            self._prep_selection_at_cursor()
            self._line_end(buffer)
            self.select_end = self.cursor
            self.has_preferred_x = False

        elif 0 < key < _MAX_CODEPOINT:
            self.text(buffer, chr(key))
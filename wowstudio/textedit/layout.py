"""Text layout queries used by the text editor: row layout, hit testing and caret positions."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Protocol

NEWLINE = "\n"


@dataclass(frozen=True)
class TextRow:
    """Shape of one laid-out row of characters.

    ``x0`` and ``x1`` are the start and end x of the row, ``baseline_y_delta``
    the distance from the previous row's baseline, ``ymin`` and ``ymax`` the
    extent of the row around its baseline.
    """

    x0: float = 0.0
    x1: float = 0.0
    baseline_y_delta: float = 0.0
    ymin: float = 0.0
    ymax: float = 0.0
    num_chars: int = 0


@dataclass
class FindState:
    """Where a character sits: its position, its row and the row before it."""

    x: float = 0.0
    y: float = 0.0
    height: float = 0.0
    first_char: int = 0
    length: int = 0
    prev_first: int = 0


class TextBuffer(Protocol):
    """A string being edited, together with its layout."""

    def __len__(self) -> int: ...

    def get_char(self, index: int) -> str: ...

    def layout_row(self, start: int) -> TextRow: ...

    def get_width(self, line_start: int, index: int) -> float: ...

    def delete_chars(self, pos: int, count: int) -> None: ...

    def insert_chars(self, pos: int, chars: str) -> bool: ...


class MonospaceBuffer:
    """A text buffer laid out with fixed-width characters, one row per line.

    A row runs up to and including its newline. Every character, the newline
    included, is ``char_width`` wide; the row's ``x1`` excludes the newline.
    """

    def __init__(self, text: str = "", char_width: float = 1.0, line_height: float = 1.0) -> None:
        if char_width <= 0:
            raise ValueError("character width must be positive")
        if line_height <= 0:
            raise ValueError("line height must be positive")
        self._text = text
        self.char_width = char_width
        self.line_height = line_height

    @property
    def text(self) -> str:
        return self._text

    def __len__(self) -> int:
        return len(self._text)

    def __str__(self) -> str:
        return self._text

    def get_char(self, index: int) -> str:
        if not 0 <= index < len(self._text):
            raise IndexError(f"character index {index} is out of range")
        return self._text[index]

    def layout_row(self, start: int) -> TextRow:
        """Lay out the row that begins at character ``start``."""
        if start < 0:
            raise IndexError(f"row start {start} is out of range")
        if start >= len(self._text):
            return TextRow(baseline_y_delta=self.line_height, ymax=self.line_height)
        end = self._text.find(NEWLINE, start)
        count = end - start + 1 if end >= 0 else len(self._text) - start
        visible = count - 1 if end >= 0 else count
        return TextRow(
            x0=0.0,
            x1=visible * self.char_width,
            baseline_y_delta=self.line_height,
            ymin=0.0,
            ymax=self.line_height,
            num_chars=count,
        )

    def get_width(self, line_start: int, index: int) -> float:
        """Width of the character ``index`` places into the row at ``line_start``."""
        self.get_char(line_start + index)
        return self.char_width

    def delete_chars(self, pos: int, count: int) -> None:
        if pos < 0 or count < 0 or pos + count > len(self._text):
            raise IndexError("deletion range lies outside the text")
        self._text = self._text[:pos] + self._text[pos + count :]

    def insert_chars(self, pos: int, chars: str) -> bool:
        if not 0 <= pos <= len(self._text):
            raise IndexError(f"insert position {pos} is out of range")
        self._text = self._text[:pos] + chars + self._text[pos:]
        return True


def locate_coord(buffer: TextBuffer, x: float, y: float) -> int:
    """Return the character index nearest to the point ``(x, y)``."""
    n = len(buffer)
    base_y = 0.0
    i = 0
    row = TextRow()

    while i < n:
        row = buffer.layout_row(i)
        if row.num_chars <= 0:
            return n
        if i == 0 and y < base_y + row.ymin:
            return 0
        if y < base_y + row.ymax:
            break
        i += row.num_chars
        base_y += row.baseline_y_delta

    if i >= n:
        return n

    if x < row.x0:
        return i

    if x < row.x1:
        prev_x = row.x0
        for k in range(row.num_chars):
            width = buffer.get_width(i, k)
            if x < prev_x + width:
                return i + k if x < prev_x + width / 2 else i + k + 1
            prev_x += width

    last = i + row.num_chars - 1
    if buffer.get_char(last) == NEWLINE:
        return last
    return i + row.num_chars


def find_charpos(buffer: TextBuffer, n: int, single_line: bool = False) -> FindState:
    """Find the position of character ``n`` and the rows around it."""
    z = len(buffer)

    if n == z and single_line:
        row = buffer.layout_row(0)
        return FindState(x=row.x1, y=0.0, height=row.ymax - row.ymin, first_char=0, length=z)

    y = 0.0
    prev_start = 0
    i = 0
    while True:
        row = buffer.layout_row(i)
        if n < i + row.num_chars:
            break
        if i + row.num_chars == z and z > 0 and buffer.get_char(z - 1) != NEWLINE:
            break
        prev_start = i
        i += row.num_chars
        y += row.baseline_y_delta
        if i == z:
            row = replace(row, num_chars=0)
            break

    first = i
    x = row.x0
    for offset in range(n - first):
        x += buffer.get_width(first, offset)

    return FindState(
        x=x,
        y=y,
        height=row.ymax - row.ymin,
        first_char=first,
        length=row.num_chars,
        prev_first=prev_start,
    )
"""Skyline bottom-left rectangle packing."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, Optional

MAX_COORD = 0x7FFFFFFF
_FAR = 1 << 30


class Heuristic(IntEnum):
    """How the packer picks a position for each rectangle."""

    SKYLINE_DEFAULT = 0
    SKYLINE_BL_SORT_HEIGHT = 0
    SKYLINE_BF_SORT_HEIGHT = 1


@dataclass
class PackRect:
    """A rectangle to pack; ``x``, ``y`` and ``was_packed`` are filled in.

    A rectangle that did not fit has both coordinates set to ``MAX_COORD``.
    """

    id: int
    w: int
    h: int
    x: int = 0
    y: int = 0
    was_packed: bool = False


class _Node:
    __slots__ = ("x", "y", "next")

    def __init__(self, x: int = 0, y: int = 0, next: Optional["_Node"] = None) -> None:
        self.x = x
        self.y = y
        self.next = next


class RectPacker:
    """Packs rectangles into a ``width`` by ``height`` target.

    ``num_nodes`` bounds the working storage of the skyline. Unless
    out-of-memory is allowed, widths are rounded up so that the nodes
    always suffice.
    """

    def __init__(self, width: int, height: int, num_nodes: Optional[int] = None) -> None:
        if num_nodes is None:
            num_nodes = width
        if num_nodes < 1:
            raise ValueError("at least one node is required")
        if width <= 0 or height <= 0:
            raise ValueError("target dimensions must be positive")
        self.width = width
        self.height = height
        self.num_nodes = num_nodes
        self.heuristic = Heuristic.SKYLINE_DEFAULT

        free: Optional[_Node] = None
        for _ in range(num_nodes):
            free = _Node(next=free)
        self._free_head = free

        # The head node only links to the first skyline node; the last node
        # is a sentinel at the full width.
        sentinel = _Node(width, _FAR)
        self._head = _Node(next=_Node(0, 0, sentinel))
        self.align = 1
        self.setup_allow_out_of_mem(False)

    def setup_allow_out_of_mem(self, allow_out_of_mem: bool) -> None:
        """Choose between exact widths (may run out of nodes) and quantised ones."""
        if allow_out_of_mem:
            self.align = 1
        else:
            self.align = (self.width + self.num_nodes - 1) // self.num_nodes

    def setup_heuristic(self, heuristic: int) -> None:
        try:
            self.heuristic = Heuristic(heuristic)
        except ValueError:
            raise ValueError(f"unknown packing heuristic {heuristic!r}") from None

    def _find_min_y(self, first: _Node, x0: int, width: int) -> tuple[int, int]:
        node = first
        x1 = x0 + width
        min_y = 0
        waste_area = 0
        visited_width = 0
        while node.x < x1:
            assert node.next is not None
            if node.y > min_y:
                waste_area += visited_width * (node.y - min_y)
                min_y = node.y
                if node.x < x0:
                    visited_width += node.next.x - x0
                else:
                    visited_width += node.next.x - node.x
            else:
                under_width = node.next.x - node.x
                if under_width + visited_width > width:
                    under_width = width - visited_width
                waste_area += under_width * (min_y - node.y)
                visited_width += under_width
            node = node.next
        return min_y, waste_area

    def _find_best_pos(self, width: int, height: int) -> tuple[Optional[_Node], int, int]:
        width = width + self.align - 1
        width -= width % self.align

        if width > self.width or height > self.height:
            return None, 0, 0

        best_waste = _FAR
        best_y = _FAR
        best: Optional[_Node] = None

        prev = self._head
        node = prev.next
        assert node is not None
        while node.x + width <= self.width:
            y, waste = self._find_min_y(node, node.x, width)
            if self.heuristic == Heuristic.SKYLINE_BL_SORT_HEIGHT:
                if y < best_y:
                    best_y = y
                    best = prev
            elif y + height <= self.height:
                if y < best_y or (y == best_y and waste < best_waste):
                    best_y = y
                    best_waste = waste
                    best = prev
            prev = node
            node = node.next
            assert node is not None

        best_x = best.next.x if best is not None and best.next is not None else 0

        if self.heuristic == Heuristic.SKYLINE_BF_SORT_HEIGHT:
            prev = self._head
            node = prev.next
            tail = prev.next
            while tail is not None and tail.x < width:
                tail = tail.next
            while tail is not None:
                xpos = tail.x - width
                assert node is not None and node.next is not None
                while node.next.x <= xpos:
                    prev = node
                    node = node.next
                    assert node.next is not None
                y, waste = self._find_min_y(node, xpos, width)
                if y + height <= self.height and y <= best_y:
                    if y < best_y or waste < best_waste or (waste == best_waste and xpos < best_x):
                        best_x = xpos
                        best_y = y
                        best_waste = waste
                        best = prev
                tail = tail.next

        return best, best_x, best_y

    def _pack_rectangle(self, width: int, height: int) -> Optional[tuple[int, int]]:
        best, res_x, res_y = self._find_best_pos(width, height)
        if best is None or res_y + height > self.height or self._free_head is None:
            return None

        node = self._free_head
        node.x = res_x
        node.y = res_y + height
        self._free_head = node.next

        cur = best.next
        assert cur is not None
        if cur.x < res_x:
            following = cur.next
            cur.next = node
            cur = following
            assert cur is not None
        else:
            best.next = node

        while cur.next is not None and cur.next.x <= res_x + width:
            following = cur.next
            cur.next = self._free_head
            self._free_head = cur
            cur = following

        node.next = cur
        if cur.x < res_x + width:
            cur.x = res_x + width

        return res_x, res_y

    def pack_rects(self, rects: Iterable[PackRect]) -> bool:
        """Place ``rects`` in the target, tallest first.

        Each rectangle is updated in place. Returns whether all of them fit.
        Packing can be continued with further calls.
        """
        ordered = sorted(rects, key=lambda r: (-r.h, -r.w))
        all_packed = True
        for rect in ordered:
            if rect.w == 0 or rect.h == 0:
                rect.x = rect.y = 0
            else:
                position = self._pack_rectangle(rect.w, rect.h)
                if position is None:
                    rect.x = rect.y = MAX_COORD
                else:
                    rect.x, rect.y = position
            rect.was_packed = not (rect.x == MAX_COORD and rect.y == MAX_COORD)
            if not rect.was_packed:
                all_packed = False
        return all_packed
"""A thread-safe queue whose consumers can be released on demand."""

from __future__ import annotations

import queue
import threading
from collections import deque
from typing import Generic, Iterator, TypeVar

T = TypeVar("T")


class SafeQueue(Generic[T]):
    """Thread-safe container; items are produced and consumed at the front.

    The most recently produced item is consumed first. ``consume`` and
    ``consume_wait`` raise ``queue.Empty`` when there is nothing to take.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._available = threading.Condition(self._lock)
        self._drained = threading.Condition(self._lock)
        self._items: deque[T] = deque()
        self._finishing = False
        self._waiting = 0

    def produce(self, item: T) -> None:
        with self._lock:
            self._items.appendleft(item)
            self._available.notify()

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def consume(self) -> T:
        """Take the front item without waiting."""
        with self._lock:
            if not self._items:
                raise queue.Empty
            return self._items.popleft()

    def consume_wait(self) -> T:
        """Block until an item arrives or ``finish`` is called."""
        with self._lock:
            self._waiting += 1
            try:
                self._available.wait_for(lambda: bool(self._items) or self._finishing)
                if not self._items:
                    raise queue.Empty
                return self._items.popleft()
            finally:
                self._waiting -= 1
                if self._waiting == 0:
                    self._drained.notify_all()

    def finish(self) -> None:
        """Wake every waiting consumer and wait until all have returned."""
        with self._lock:
            self._finishing = True
            self._available.notify_all()
            self._drained.wait_for(lambda: self._waiting == 0)
            self._finishing = False

    def front(self) -> T:
        with self._lock:
            return self._items[0]

    def back(self) -> T:
        with self._lock:
            return self._items[-1]

    def __iter__(self) -> Iterator[T]:
        with self._lock:
            snapshot = list(self._items)
        return iter(snapshot)
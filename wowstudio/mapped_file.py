"""Memory-mapped file access with a read/write cursor."""

from __future__ import annotations

import mmap
import os
from enum import Enum
from types import TracebackType

_SMALL_GROWTH = 1024
_LARGE_GROWTH = 1024 * 1024


class MappedFileMode(Enum):
    """Access requested for the mapping."""

    READ = 0
    WRITE = 1
    BOTH = 2


class MappedFileOpenMode(Enum):
    """How the underlying file is opened or created."""

    CREATE_NEW = 0
    CREATE_ALWAYS = 1
    OPEN_EXISTING = 2
    OPEN_ALWAYS = 3


_OPEN_FLAGS = {
    MappedFileOpenMode.CREATE_NEW: os.O_CREAT | os.O_EXCL,
    MappedFileOpenMode.CREATE_ALWAYS: os.O_CREAT | os.O_TRUNC,
    MappedFileOpenMode.OPEN_EXISTING: 0,
    MappedFileOpenMode.OPEN_ALWAYS: os.O_CREAT,
}


class MappedFile:
    """A file mapped into memory.

    ``read`` and ``write`` share one cursor; passing an explicit offset moves
    the cursor to just past the accessed range. Writes past the end grow the
    file by 1 KiB steps, or 1 MiB steps for writes larger than 1 KiB.
    """

    def __init__(
        self,
        filename: str | os.PathLike[str],
        mode: MappedFileMode = MappedFileMode.READ,
        open_mode: MappedFileOpenMode = MappedFileOpenMode.OPEN_EXISTING,
        file_size: int = 0,
    ) -> None:
        self.filename = os.fspath(filename)
        self.mode = mode
        self._position = 0
        self._open = False

        flags = os.O_RDONLY if mode is MappedFileMode.READ else os.O_RDWR
        flags |= _OPEN_FLAGS[open_mode] | getattr(os, "O_BINARY", 0)
        existed = os.path.exists(self.filename)
        self._fd = os.open(self.filename, flags, 0o666)
        try:
            current = os.fstat(self._fd).st_size
            if file_size == 0:
                file_size = current
            elif self.writable and current < file_size:
                os.ftruncate(self._fd, file_size)
            if file_size <= 0:
                raise ValueError(f"cannot map empty file {self.filename!r}")
            self._map = mmap.mmap(self._fd, file_size, access=self._access)
        except BaseException:
            os.close(self._fd)
            if not existed and os.path.exists(self.filename):
                os.remove(self.filename)
            raise
        self._size = file_size
        self._open = True

    @property
    def writable(self) -> bool:
        return self.mode is not MappedFileMode.READ

    @property
    def position(self) -> int:
        return self._position

    @property
    def _access(self) -> int:
        return mmap.ACCESS_WRITE if self.writable else mmap.ACCESS_READ

    def _check_open(self) -> None:
        if not self._open:
            raise ValueError(f"mapped file {self.filename!r} is closed")

    def _check_writable(self) -> None:
        if not self.writable:
            raise PermissionError(f"mapped file {self.filename!r} is read-only")

    def data(self) -> bytes:
        """Return a snapshot of the mapped contents."""
        self._check_open()
        return bytes(self._map)

    def size(self) -> int:
        """Return the size of the mapping in bytes."""
        return self._size

    def is_open(self) -> bool:
        return self._open

    def close(self) -> None:
        """Unmap and close the file; closing twice is harmless."""
        if not self._open:
            return
        self._map.close()
        os.close(self._fd)
        self._open = False

    def flush(self, offset: int = 0, size: int = 0) -> None:
        """Write changes in ``[offset, offset + size)`` back to disk.

        A size of zero flushes from ``offset`` to the end of the mapping.
        """
        self._check_open()
        if offset < 0 or size < 0 or offset + size > self._size:
            raise ValueError("flush range lies outside the mapping")
        if offset == 0 and size == 0:
            self._map.flush()
            return
        if size == 0:
            size = self._size - offset
        start = offset - offset % mmap.ALLOCATIONGRANULARITY
        self._map.flush(start, size + (offset - start))

    def resize(self, new_size: int) -> None:
        """Change the size of the file and its mapping."""
        self._check_open()
        self._check_writable()
        if new_size <= 0:
            raise ValueError("new size must be positive")
        self._map.close()
        os.ftruncate(self._fd, new_size)
        self._map = mmap.mmap(self._fd, new_size, access=self._access)
        self._size = new_size

    def _advance(self, length: int, offset: int | None) -> int:
        start = self._position if offset is None else offset
        if start < 0 or length < 0:
            raise ValueError("offset and size must not be negative")
        self._position = start + length
        return start

    def read(self, size: int = 1, offset: int | None = None) -> bytes:
        """Read ``size`` bytes at ``offset``, or at the cursor if none is given."""
        self._check_open()
        start = offset if offset is not None else self._position
        if start < 0 or size < 0 or start + size > self._size:
            raise ValueError("read range lies outside the mapping")
        self._advance(size, offset)
        return bytes(self._map[start : start + size])

    def write(self, data: bytes | bytearray | memoryview, offset: int | None = None) -> None:
        """Write ``data`` at ``offset``, or at the cursor, growing the file as needed."""
        self._check_open()
        self._check_writable()
        payload = bytes(data)
        start = self._advance(len(payload), offset)
        end = start + len(payload)
        step = _LARGE_GROWTH if len(payload) > _SMALL_GROWTH else _SMALL_GROWTH
        while end > self._size:
            self.resize(self._size + step)
        self._map[start:end] = payload

    def __enter__(self) -> MappedFile:
        return self

    def __exit__(
        self,
        *args: type[BaseException] | BaseException | TracebackType | None,
    ) -> None:
        self.close()
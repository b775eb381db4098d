"""A byte queue that holds data read from a device before the caller asks for it."""

from __future__ import annotations


class ReadBuffer:
    """First-in, first-out store of received bytes."""

    def __init__(self) -> None:
        self._data = bytearray()

    def __len__(self) -> int:
        return len(self._data)

    def __bool__(self) -> bool:
        return bool(self._data)

    def clear(self) -> None:
        """Drop everything held."""
        self._data.clear()

    def append(self, data: bytes) -> None:
        """Add bytes at the end of the queue."""
        self._data += data

    def read(self, size: int) -> bytes:
        """Take up to ``size`` bytes from the front."""
        count = max(0, min(size, len(self._data)))
        chunk = bytes(self._data[:count])
        del self._data[:count]
        return chunk

    def chop(self, size: int) -> None:
        """Drop ``size`` bytes from the end; dropping at least everything empties it."""
        if size >= len(self._data):
            self.clear()
        elif size > 0:
            del self._data[-size:]

    def read_all(self) -> bytes:
        """Take everything held."""
        chunk = bytes(self._data)
        self.clear()
        return chunk

    def read_line(self, size: int) -> bytes:
        """Take bytes up to and including the first newline, at most ``size`` of them."""
        count = max(0, min(size, len(self._data)))
        end = self._data.find(b"\n", 0, count)
        if end != -1:
            count = end + 1
        return self.read(count)

    def can_read_line(self) -> bool:
        """Tell whether a complete line is held."""
        return b"\n" in self._data
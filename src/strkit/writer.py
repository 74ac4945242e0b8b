"""Bounded, cursor-tracking writes into a pre-sized buffer.

`BoundedWriter` replaces manual offset arithmetic: every write is checked
against the writer's capacity before a single byte of the buffer is touched,
and an oversized write raises `BufferOverflowError` instead of spilling past
the end.
"""

from __future__ import annotations

from strkit.errors import BufferOverflowError, InvalidArgumentError
from strkit.view import TEXT_ENCODING, TextView

__all__ = ["BoundedWriter"]


class BoundedWriter:
    """Append-only writer over ``buffer[start:start + capacity]``.

    The underlying buffer is never resized; writes overwrite bytes in place.

    Args:
        buffer: Pre-sized target storage.
        start: Offset of the first writable byte.
        capacity: Number of writable bytes from ``start``. Defaults to the rest
            of the buffer.
    """

    def __init__(self, buffer: bytearray, start: int = 0, capacity: int | None = None) -> None:
        if capacity is None:
            capacity = len(buffer) - start
        if start < 0 or capacity < 0 or start + capacity > len(buffer):
            raise InvalidArgumentError(
                "writer bounds",
                f"[{start}, {start + capacity}) outside buffer of {len(buffer)}",
            )
        self._buffer = buffer
        self._start = start
        self._capacity = capacity
        self._position = 0

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def position(self) -> int:
        """Number of bytes written so far (relative to ``start``)."""
        return self._position

    @property
    def remaining(self) -> int:
        return self._capacity - self._position

    def write(self, data: bytes | bytearray | memoryview | str) -> int:
        """Write ``data`` at the cursor and advance it.

        Returns:
            The number of bytes written.

        Raises:
            BufferOverflowError: If ``data`` does not fit in the remaining capacity.
        """
        written = self.write_at(self._position, data)
        self._position += written
        return written

    def write_at(self, offset: int, data: bytes | bytearray | memoryview | str) -> int:
        """Write ``data`` at ``offset`` without moving the cursor.

        Raises:
            BufferOverflowError: If the write would end past the capacity.
        """
        if isinstance(data, str):
            data = data.encode(TEXT_ENCODING)
        size = len(data)
        if offset < 0 or offset + size > self._capacity:
            raise BufferOverflowError(size, max(0, self._capacity - offset))
        begin = self._start + offset
        self._buffer[begin : begin + size] = data
        return size

    def truncate(self, position: int) -> None:
        """Move the cursor back to ``position``, dropping later bytes from the view."""
        if not 0 <= position <= self._position:
            raise InvalidArgumentError(
                "position", f"{position} outside written range [0, {self._position}]"
            )
        self._position = position

    def view(self) -> TextView:
        """Return a view over everything written so far."""
        return TextView(self._buffer, self._start, self._position)

"""Non-owning views over single-byte text storage.

A `TextView` narrows an existing buffer to a ``[start, start + length)``
window without copying it. It never owns its storage: when the underlying
buffer is rewritten, the view shows the new content. Callers that need to keep
a value across such a rewrite take a snapshot with ``str(view)`` or
``bytes(view)``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, overload

from strkit.errors import InvalidArgumentError

if TYPE_CHECKING:
    from collections.abc import Buffer

__all__ = ["TextView"]

TEXT_ENCODING = "latin-1"


class TextView:
    """A window over a contiguous run of single-byte characters."""

    __slots__ = ("_mv", "_start")
    __hash__ = None  # type: ignore[assignment]

    def __init__(self, buffer: Buffer, start: int = 0, length: int | None = None) -> None:
        mv = buffer if isinstance(buffer, memoryview) else memoryview(buffer)
        if mv.ndim != 1 or mv.itemsize != 1:
            mv = mv.cast("B")
        size = len(mv)
        if length is None:
            length = size - start
        if start < 0 or length < 0 or start + length > size:
            raise InvalidArgumentError(
                "view bounds", f"[{start}, {start + length}) outside buffer of {size}"
            )
        self._mv = mv[start : start + length]
        self._start = start

    @property
    def start(self) -> int:
        """Offset of the view inside the buffer it was created from."""
        return self._start

    def tobytes(self) -> bytes:
        """Return a copy of the viewed bytes."""
        return self._mv.tobytes()

    def decode(self, encoding: str = TEXT_ENCODING) -> str:
        """Return a copy of the viewed bytes decoded as text."""
        return self._mv.tobytes().decode(encoding)

    def __len__(self) -> int:
        return len(self._mv)

    def __bool__(self) -> bool:
        return len(self._mv) > 0

    def __bytes__(self) -> bytes:
        return self.tobytes()

    def __str__(self) -> str:
        return self.decode()

    def __repr__(self) -> str:
        return f"TextView({self.decode()!r}, start={self._start})"

    @overload
    def __getitem__(self, index: int) -> int: ...

    @overload
    def __getitem__(self, index: slice) -> TextView: ...

    def __getitem__(self, index: int | slice) -> int | TextView:
        if isinstance(index, slice):
            begin, end, step = index.indices(len(self._mv))
            if step != 1:
                raise InvalidArgumentError("slice", "views are contiguous; step must be 1")
            view = TextView(self._mv, begin, max(0, end - begin))
            view._start += self._start  # pylint: disable=protected-access
            return view
        return self._mv[index]

    def __eq__(self, other: object) -> bool:
        if isinstance(other, TextView):
            return self._mv == other._mv
        if isinstance(other, str):
            try:
                return self.tobytes() == other.encode(TEXT_ENCODING)
            except UnicodeEncodeError:
                return False
        if isinstance(other, (bytes, bytearray, memoryview)):
            return self._mv == other
        return NotImplemented

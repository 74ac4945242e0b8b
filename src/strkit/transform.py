"""In-place and copy-producing transforms over single-byte text.

Mutators (`trim`, `lowercase`, `uppercase`, `dedup_chars`, `terminate`) take a
``bytearray`` and rewrite it in place, only ever shrinking its length
(``terminate`` may append one byte). Each copy-producing variant accepts
``str``, ``bytes`` or ``bytearray``, runs the matching mutator on a private
``bytearray`` copy and hands back a value of the type it was given.

``str`` arguments must only contain Latin-1 characters.
"""

from __future__ import annotations

import enum
from typing import TypeVar

from strkit.errors import InvalidArgumentError
from strkit.predicates import Char, byte_value, is_lower, is_non_space, is_upper
from strkit.view import TEXT_ENCODING, TextView

__all__ = [
    "Trim",
    "trim",
    "trimmed",
    "trimmed_view",
    "lowercase",
    "uppercase",
    "to_lower",
    "to_upper",
    "is_all_lower",
    "is_all_upper",
    "dedup_chars",
    "deduplicated",
    "terminate",
    "sparsed_string",
]

T = TypeVar("T", str, bytes, bytearray)


class Trim(enum.Flag):
    """Which ends of a sequence are candidates for whitespace removal."""

    NONE = 0
    LEFT = enum.auto()
    RIGHT = enum.auto()
    ALL = LEFT | RIGHT


_LOWER_TABLE = bytes(c | 0x20 if is_upper(c) else c for c in range(256))
_UPPER_TABLE = bytes(c & ~0x20 if is_lower(c) else c for c in range(256))


# ============================================================================
#                           Copy helpers
# ============================================================================


def _to_buffer(text: str | bytes | bytearray, operation: str) -> bytearray:
    if isinstance(text, str):
        try:
            return bytearray(text, TEXT_ENCODING)
        except UnicodeEncodeError as e:
            raise InvalidArgumentError(
                "text", "contains characters outside Latin-1", operation
            ) from e
    if isinstance(text, (bytes, bytearray, memoryview)):
        return bytearray(text)
    raise InvalidArgumentError("text", f"unsupported type {type(text).__name__}", operation)


def _from_buffer(buffer: bytearray, like: T) -> T:
    if isinstance(like, str):
        return buffer.decode(TEXT_ENCODING)
    if isinstance(like, bytearray):
        return buffer
    return bytes(buffer)


def _find_bounds(data: bytes | bytearray | memoryview, selector: Trim) -> tuple[int, int]:
    """Return ``(begin, end)`` of the range kept after trimming ``data``.

    ``begin == len(data)`` signals that a left scan found only whitespace.
    """
    size = len(data)
    begin, end = 0, size
    if Trim.LEFT in selector:
        begin = next((i for i in range(size) if is_non_space(data[i])), size)
        if begin == size:
            return size, size
    if Trim.RIGHT in selector:
        end = next((i + 1 for i in range(size - 1, begin - 1, -1) if is_non_space(data[i])), begin)
    return begin, end


# ============================================================================
#                               Trim
# ============================================================================


def trim(text: bytearray, selector: Trim = Trim.ALL) -> bytearray:
    """Strip whitespace from the ends of ``text`` selected by ``selector``.

    The kept range is moved down to offset 0 with one copy when the left edge
    moves. Interior whitespace is never touched.

    Args:
        text: Sequence to rewrite in place.
        selector: Ends to strip.

    Returns:
        ``text`` itself, for chaining.
    """
    if not text or not selector:
        return text
    begin, end = _find_bounds(text, selector)
    if begin == len(text):
        text.clear()  # nothing but whitespace
        return text
    new_size = end - begin
    if new_size != len(text):
        if begin:
            text[:new_size] = text[begin:end]
        del text[new_size:]
    return text


def trimmed(text: T, selector: Trim = Trim.ALL) -> T:
    """Return a copy of ``text`` trimmed per ``selector``."""
    buffer = _to_buffer(text, "trimmed")
    return _from_buffer(trim(buffer, selector), text)


def trimmed_view(
    data: bytes | bytearray | memoryview | TextView, selector: Trim = Trim.ALL
) -> TextView:
    """Return a narrowed view of ``data`` without copying it.

    All-whitespace input yields a zero-length view anchored at the original start.
    """
    view = data if isinstance(data, TextView) else TextView(data)
    if not view or not selector:
        return view
    begin, end = _find_bounds(view, selector)
    if begin == len(view):
        return view[0:0]
    return view[begin:end]


# ============================================================================
#                               Case
# ============================================================================


def lowercase(text: bytearray) -> bytearray:
    """Replace every uppercase letter of ``text`` with its lowercase form in place."""
    text[:] = text.translate(_LOWER_TABLE)
    return text


def uppercase(text: bytearray) -> bytearray:
    """Replace every lowercase letter of ``text`` with its uppercase form in place."""
    text[:] = text.translate(_UPPER_TABLE)
    return text


def to_lower(text: T) -> T:
    """Return a copy of ``text`` with uppercase letters lowered."""
    return _from_buffer(lowercase(_to_buffer(text, "to_lower")), text)


def to_upper(text: T) -> T:
    """Return a copy of ``text`` with lowercase letters raised."""
    return _from_buffer(uppercase(_to_buffer(text, "to_upper")), text)


def is_all_lower(text: str | bytes | bytearray | TextView) -> bool:
    """Return True if every character of ``text`` is a lowercase letter.

    Empty input is trivially lowercased.
    """
    if isinstance(text, str):
        return all(ord(c) <= 0xFF and is_lower(c) for c in text)
    return all(is_lower(c) for c in bytes(text))


def is_all_upper(text: str | bytes | bytearray | TextView) -> bool:
    """Return True if every character of ``text`` is an uppercase letter.

    Empty input is trivially uppercased.
    """
    if isinstance(text, str):
        return all(ord(c) <= 0xFF and is_upper(c) for c in text)
    return all(is_upper(c) for c in bytes(text))


# ============================================================================
#                           Duplicate elimination
# ============================================================================


def dedup_chars(text: bytearray) -> bytearray:
    """Keep only the first occurrence of every byte value of ``text``, in place.

    First-seen order is preserved; later repeats are compacted out while the
    logical end shrinks, so removed slots are never scanned again. Quadratic in
    the worst case, which is fine for the short tag and flag strings this is
    meant for.

    Example:
        ``bytearray(b"banana")`` becomes ``bytearray(b"ban")``.
    """
    new_size = len(text)
    i = 0
    while i < new_size:
        ch = text[i]
        write = i + 1
        for read in range(i + 1, new_size):
            if text[read] != ch:
                text[write] = text[read]
                write += 1
        new_size = write
        i += 1
    del text[new_size:]
    return text


def deduplicated(text: T) -> T:
    """Return a copy of ``text`` with duplicate characters eliminated."""
    return _from_buffer(dedup_chars(_to_buffer(text, "deduplicated")), text)


# ============================================================================
#                               Misc
# ============================================================================


def terminate(text: bytearray, c: Char) -> bytearray:
    """Append ``c`` to ``text`` unless it already ends with it.

    Effects:
        ``text[-1] == byte_value(c)``.
    """
    value = byte_value(c)
    if not text or text[-1] != value:
        text.append(value)
    return text


def sparsed_string(text: str | bytes | bytearray, delimiter: str = "") -> str:
    """Return ``text`` with ``delimiter`` inserted between adjacent characters.

    Both ``text`` and ``delimiter`` must be single-byte (Latin-1) text.

    Example:
        ``sparsed_string("abc", "-") == "a-b-c"``

    Raises:
        InvalidArgumentError: If either argument is not Latin-1 text.
    """
    chars = _to_buffer(text, "sparsed_string").decode(TEXT_ENCODING)
    if not isinstance(delimiter, str):
        raise InvalidArgumentError(
            "delimiter", f"unsupported type {type(delimiter).__name__}", "sparsed_string"
        )
    try:
        delimiter.encode(TEXT_ENCODING)
    except UnicodeEncodeError as e:
        raise InvalidArgumentError(
            "delimiter", "contains characters outside Latin-1", "sparsed_string"
        ) from e
    return delimiter.join(chars)

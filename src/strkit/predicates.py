"""Character classification helpers.

All predicates operate on single-byte characters using the "C" locale tables.
A character may be given as an integer byte value or as a one-character
``str``/``bytes``. Integers are reduced to their unsigned byte value first, so
``-1`` is classified as ``0xFF`` rather than as a negative index.
"""

from __future__ import annotations

from strkit.errors import InvalidArgumentError

__all__ = ["Char", "byte_value", "is_space", "is_non_space", "is_upper", "is_lower"]

Char = int | str | bytes

# \t \n \v \f \r and ' '
SPACE_BYTES = frozenset(b"\t\n\x0b\x0c\r ")


def byte_value(c: Char) -> int:
    """Return the unsigned byte value of ``c``.

    Raises:
        InvalidArgumentError: If ``c`` is not exactly one character, or is a
            ``str`` character outside Latin-1.
    """
    if isinstance(c, int):
        return c & 0xFF
    if len(c) != 1:
        raise InvalidArgumentError("character", f"expected one character, got {c!r}")
    value = ord(c)
    if value > 0xFF:
        raise InvalidArgumentError("character", f"{c!r} is not a single-byte character")
    return value


def is_space(c: Char) -> bool:
    """Return True if ``c`` is a whitespace character."""
    return byte_value(c) in SPACE_BYTES


def is_non_space(c: Char) -> bool:
    """Return True if ``c`` is not a whitespace character."""
    return not is_space(c)


def is_upper(c: Char) -> bool:
    """Return True if ``c`` is an uppercase ASCII letter."""
    return 0x41 <= byte_value(c) <= 0x5A


def is_lower(c: Char) -> bool:
    """Return True if ``c`` is a lowercase ASCII letter."""
    return 0x61 <= byte_value(c) <= 0x7A

"""Byte-to-text encoding.

`encode_bytes` renders every input byte as one text unit and joins the units
with an optional separator:

- `ByteFormat.RAW`: one character per byte, identical to the byte (Latin-1).
- `ByteFormat.HEX`: two lowercase hex digits per byte, high nibble first.

Malformed arguments are programmer errors and raise `InvalidArgumentError`.
"""

from __future__ import annotations

import logging
from enum import Enum

from strkit.errors import InvalidArgumentError
from strkit.logging import diagnostic
from strkit.view import TEXT_ENCODING
from strkit.writer import BoundedWriter

__all__ = ["ByteFormat", "encode_bytes", "to_string"]

logger = logging.getLogger(__name__)

OPERATION = "encode_bytes"
HEX_DIGITS = b"0123456789abcdef"


class ByteFormat(Enum):
    """How each input byte maps to output text."""

    RAW = "raw"
    HEX = "hex"

    @property
    def elem_size(self) -> int:
        """Number of output characters produced per input byte."""
        return 2 if self is ByteFormat.HEX else 1


def _coerce_format(fmt: ByteFormat | str) -> ByteFormat:
    if isinstance(fmt, ByteFormat):
        return fmt
    try:
        return ByteFormat(fmt)
    except ValueError as e:
        raise InvalidArgumentError("format", f"unsupported format {fmt!r}", OPERATION) from e


def _render_unit(byte: int, fmt: ByteFormat) -> bytes:
    if fmt is ByteFormat.HEX:
        return bytes((HEX_DIGITS[byte >> 4], HEX_DIGITS[byte & 0x0F]))
    return bytes((byte,))


def encode_bytes(
    data: bytes | bytearray | memoryview,
    fmt: ByteFormat | str = ByteFormat.RAW,
    separator: str = "",
) -> str:
    """Render ``data`` as text per ``fmt`` with ``separator`` between units.

    Args:
        data: Bytes to render.
        fmt: Output format for each byte. Plain strings (``"hex"``) are accepted.
        separator: Text placed between consecutive units; never trailing.

    Returns:
        The rendered text, exactly ``n*elem_size + (n-1)*len(separator)``
        characters long for ``n > 0`` input bytes, and ``""`` for empty input.

    Raises:
        InvalidArgumentError: If ``data`` is not bytes-like, ``separator`` is
            not a single-byte string, or ``fmt`` is not a `ByteFormat`.
    """
    if data is None or isinstance(data, str):
        raise InvalidArgumentError("input", "expected a bytes-like object", OPERATION)
    try:
        data = memoryview(data).cast("B")
    except TypeError as e:
        raise InvalidArgumentError("input", "expected a bytes-like object", OPERATION) from e
    if not isinstance(separator, str):
        raise InvalidArgumentError("separator", "expected a string", OPERATION)
    try:
        sep = separator.encode(TEXT_ENCODING)
    except UnicodeEncodeError as e:
        raise InvalidArgumentError(
            "separator", "contains characters outside Latin-1", OPERATION
        ) from e
    fmt = _coerce_format(fmt)

    if not data:
        return ""

    if fmt is ByteFormat.RAW and not sep:
        return data.tobytes().decode(TEXT_ENCODING)

    # One spare separator keeps every iteration identical; it is cut below.
    stride = fmt.elem_size + len(sep)
    result = bytearray(len(data) * stride)
    writer = BoundedWriter(result)
    for byte in data:
        writer.write(_render_unit(byte, fmt))
        writer.write(sep)
    writer.truncate(writer.position - len(sep))
    logger.debug(
        "Encoded as %s (%d chars)",
        fmt.value,
        writer.position,
        extra=diagnostic("encode_bytes", size=len(data)),
    )
    return writer.view().decode()


to_string = encode_bytes

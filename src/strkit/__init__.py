"""strkit

A small toolkit for single-byte text: in-place and copy-producing string
transforms, a raw/hex byte encoder, and a timestamp formatter that renders into
a reusable per-thread scratch buffer.
"""

from strkit.encoding import ByteFormat, encode_bytes, to_string
from strkit.errors import (
    BufferOverflowError,
    ConfigurationError,
    InvalidArgumentError,
    StrkitError,
)
from strkit.logging import capture_diagnostics
from strkit.timefmt import (
    TimeFormatter,
    format_time,
    format_time_iso8601,
    format_time_with_microseconds,
    now,
    now_iso8601,
    now_with_microseconds,
)
from strkit.transform import (
    Trim,
    dedup_chars,
    deduplicated,
    is_all_lower,
    is_all_upper,
    lowercase,
    sparsed_string,
    terminate,
    to_lower,
    to_upper,
    trim,
    trimmed,
    trimmed_view,
    uppercase,
)
from strkit.view import TextView

__all__ = [
    "__version__",
    "BufferOverflowError",
    "ByteFormat",
    "ConfigurationError",
    "InvalidArgumentError",
    "StrkitError",
    "TextView",
    "TimeFormatter",
    "Trim",
    "capture_diagnostics",
    "dedup_chars",
    "deduplicated",
    "encode_bytes",
    "format_time",
    "format_time_iso8601",
    "format_time_with_microseconds",
    "is_all_lower",
    "is_all_upper",
    "lowercase",
    "now",
    "now_iso8601",
    "now_with_microseconds",
    "sparsed_string",
    "terminate",
    "to_lower",
    "to_string",
    "to_upper",
    "trim",
    "trimmed",
    "trimmed_view",
    "uppercase",
]
__version__ = "0.1.0"

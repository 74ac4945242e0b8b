"""Timestamp formatting into a reusable per-thread scratch buffer.

A `TimeFormatter` owns one `ScratchTimeBuffer` and renders time points into it
with C-style ``strftime`` patterns. Every call returns a `TextView` over the
scratch buffer, so a returned view is only valid until the next call on the
same formatter. Take a snapshot (``str(view)``) before formatting again.

The module-level functions route through `get_formatter`, which keeps one
formatter per thread. Different threads never share a buffer.

Failures never raise. When the rendered text does not fit in the buffer, or
the time point cannot be converted, the result is an empty view, which
callers must read as "unavailable".

Typical usage
-------------
    from datetime import datetime, timezone
    from strkit import timefmt

    stamp = str(timefmt.format_time_iso8601(datetime.now(timezone.utc)))
    # e.g. "2024-05-01T14:03:07+02:00"
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from datetime import datetime, timedelta, timezone

from strkit.config import get_time_buffer_size
from strkit.errors import BufferOverflowError
from strkit.logging import diagnostic
from strkit.view import TEXT_ENCODING, TextView
from strkit.writer import BoundedWriter

__all__ = [
    "TimePoint",
    "ScratchTimeBuffer",
    "TimeFormatter",
    "default_clock",
    "get_formatter",
    "format_time",
    "format_time_iso8601",
    "format_time_with_microseconds",
    "now",
    "now_iso8601",
    "now_with_microseconds",
]

logger = logging.getLogger(__name__)

TimePoint = datetime | int | float
Clock = Callable[[], TimePoint]

DEFAULT_PATTERN = "%Y-%m-%dT%H:%M:%S%z"
ISO8601_PATTERN = "%Y-%m-%dT%H:%M:%S%z:"
SECONDS_PATTERN = "%Y-%m-%dT%H:%M:%S"
MICROSECOND_DIGITS = 6

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_MICROSECOND = timedelta(microseconds=1)


def default_clock() -> datetime:
    """Return the current wall-clock time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def _split_epoch(tp: TimePoint) -> tuple[int, int]:
    """Return ``(whole_seconds, microseconds)`` since the epoch for ``tp``.

    The remainder is floor-modulo one second, so it is never negative. Floats
    are first rounded to whole microseconds so that binary representation error
    (``0.000007`` stored as ``0.0000069999...``) does not lose a microsecond,
    matching `datetime.fromtimestamp`.
    """
    if isinstance(tp, datetime):
        if tp.tzinfo is None:
            tp = tp.astimezone()  # naive means local time
        total_us = (tp - _EPOCH) // _ONE_MICROSECOND
        return divmod(total_us, 1_000_000)
    if isinstance(tp, int):
        return tp, 0
    return divmod(round(tp * 1_000_000), 1_000_000)


class ScratchTimeBuffer:
    """Fixed-capacity character buffer plus the last calendar breakdown.

    Args:
        capacity: Size of the buffer in bytes. Defaults to the configured
            `STRKIT_TIME_BUFFER_SIZE` (128).
    """

    def __init__(self, capacity: int | None = None) -> None:
        self.data = bytearray(capacity if capacity is not None else get_time_buffer_size())
        self.tm: time.struct_time | None = None

    @property
    def capacity(self) -> int:
        return len(self.data)

    def empty(self) -> TextView:
        """Reset the buffer to an empty string and return an empty view over it."""
        if self.data:
            self.data[0] = 0
        return TextView(self.data, 0, 0)


class TimeFormatter:
    """Renders time points into one scratch buffer.

    A formatter is not safe for concurrent use; give each thread its own
    (see `get_formatter`).

    Args:
        buffer: Scratch storage to reuse. A fresh one is allocated when omitted.
        clock: Source of "now" for the ``now*`` helpers.
    """

    def __init__(
        self, buffer: ScratchTimeBuffer | None = None, clock: Clock = default_clock
    ) -> None:
        self.buffer = buffer if buffer is not None else ScratchTimeBuffer()
        self.clock = clock

    def format(self, tp: TimePoint, pattern: str) -> TextView:
        """Render ``tp`` in local time through ``pattern``.

        Returns:
            A view over the rendered text, or an empty view on failure.
        """
        buf = self.buffer
        if hasattr(time, "tzset"):
            time.tzset()
        try:
            seconds, _ = _split_epoch(tp)
            buf.tm = time.localtime(seconds)
            rendered = time.strftime(pattern, buf.tm).encode(TEXT_ENCODING)
        except (ValueError, OverflowError, OSError, UnicodeEncodeError) as e:
            logger.debug(
                "Cannot format %r: %s", tp, e, extra=diagnostic("format_time", pattern=pattern)
            )
            return buf.empty()
        # strftime reports failure as zero length and needs room for the NUL
        if not rendered or len(rendered) >= buf.capacity:
            logger.debug(
                "Formatted time does not fit",
                extra=diagnostic("format_time", pattern=pattern, capacity=buf.capacity),
            )
            return buf.empty()
        writer = BoundedWriter(buf.data)
        writer.write(rendered)
        buf.data[writer.position] = 0
        return writer.view()

    def format_iso8601(self, tp: TimePoint) -> TextView:
        """Render ``tp`` as ``YYYY-MM-DDTHH:MM:SS±HH:MM``.

        The numeric offset is made colon-separated by rotating the last three
        bytes in place (``"+0200:"`` becomes ``"+02:00"``).
        """
        result = self.format(tp, ISO8601_PATTERN)
        size = len(result)
        if size < 3:
            return result
        data = self.buffer.data
        data[size - 3 : size] = data[size - 1 : size] + data[size - 3 : size - 1]
        return result

    def format_with_microseconds(self, tp: TimePoint) -> TextView:
        """Render ``tp`` as ``YYYY-MM-DDTHH:MM:SS.ffffff``.

        The sub-second part is always six zero-padded digits, so 500 µs renders
        as ``.000500``.
        """
        result = self.format(tp, SECONDS_PATTERN)
        if not (dt_length := len(result)):
            return result
        _, micros = _split_epoch(tp)
        # keep one byte for the terminating NUL, like the whole-second part
        writer = BoundedWriter(self.buffer.data, dt_length, self.buffer.capacity - dt_length - 1)
        try:
            writer.write(f".{micros:0{MICROSECOND_DIGITS}d}")
        except BufferOverflowError as e:
            logger.debug(
                "No room for microseconds",
                extra=diagnostic(
                    "format_with_microseconds", requested=e.requested, remaining=e.remaining
                ),
            )
            return self.buffer.empty()
        end = dt_length + writer.position
        self.buffer.data[end] = 0
        return TextView(self.buffer.data, 0, end)

    def now(self, pattern: str = DEFAULT_PATTERN) -> TextView:
        """Return `format` of the current time."""
        return self.format(self.clock(), pattern)

    def now_iso8601(self) -> TextView:
        """Return `format_iso8601` of the current time."""
        return self.format_iso8601(self.clock())

    def now_with_microseconds(self) -> TextView:
        """Return `format_with_microseconds` of the current time."""
        return self.format_with_microseconds(self.clock())


# ============================================================================
#                       Per-thread default formatter
# ============================================================================

_local = threading.local()


def get_formatter() -> TimeFormatter:
    """Return this thread's formatter, creating it on first use."""
    if (formatter := getattr(_local, "formatter", None)) is None:
        formatter = _local.formatter = TimeFormatter()
    return formatter


def format_time(tp: TimePoint, pattern: str) -> TextView:
    """`TimeFormatter.format` on this thread's formatter."""
    return get_formatter().format(tp, pattern)


def format_time_iso8601(tp: TimePoint) -> TextView:
    """`TimeFormatter.format_iso8601` on this thread's formatter."""
    return get_formatter().format_iso8601(tp)


def format_time_with_microseconds(tp: TimePoint) -> TextView:
    """`TimeFormatter.format_with_microseconds` on this thread's formatter."""
    return get_formatter().format_with_microseconds(tp)


def now(pattern: str = DEFAULT_PATTERN, clock: Clock = default_clock) -> TextView:
    """Format ``clock()`` through ``pattern`` on this thread's formatter."""
    return get_formatter().format(clock(), pattern)


def now_iso8601(clock: Clock = default_clock) -> TextView:
    """Format ``clock()`` as ISO 8601 with a ``±HH:MM`` offset."""
    return get_formatter().format_iso8601(clock())


def now_with_microseconds(clock: Clock = default_clock) -> TextView:
    """Format ``clock()`` as ``YYYY-MM-DDTHH:MM:SS.ffffff``."""
    return get_formatter().format_with_microseconds(clock())

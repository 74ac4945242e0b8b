"""Unit tests for strkit.timefmt.

Timezones are pinned with the `local_tz` fixture (POSIX ``TZ`` strings: the
sign is inverted, so ``"UTC-02"`` is two hours *east* of UTC, ``+0200``).
Returned views share the formatter's scratch buffer, so every expectation is
checked against a snapshot taken before the next call.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

import pytest

from strkit import timefmt
from strkit.timefmt import ScratchTimeBuffer, TimeFormatter
from strkit.view import TextView
from tests.conftest import requires_tzset

# pylint: disable=magic-value-comparison, redefined-outer-name

pytestmark = [requires_tzset]

NOON = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def formatter() -> TimeFormatter:
    """A formatter with its own default-sized buffer."""
    return TimeFormatter()


@pytest.fixture
def utc(local_tz) -> None:
    """Run the test with local time equal to UTC."""
    local_tz("UTC0")


# ============================================================================
#                               format
# ============================================================================


@pytest.mark.usefixtures("utc")
class TestFormat:
    """Tests for TimeFormatter.format."""

    @staticmethod
    def test_pattern_is_applied(formatter: TimeFormatter):
        """The pattern is rendered through strftime in local time."""
        out = formatter.format(NOON, "%Y-%m-%d %H:%M:%S")
        assert isinstance(out, TextView)
        assert str(out) == "2024-05-01 12:00:00"

    @staticmethod
    def test_posix_seconds(formatter: TimeFormatter):
        """Integers and floats are seconds since the epoch."""
        assert str(formatter.format(0, "%Y-%m-%dT%H:%M:%S")) == "1970-01-01T00:00:00"
        assert str(formatter.format(86400.75, "%d %H")) == "02 00"

    @staticmethod
    def test_naive_datetime_is_local(formatter: TimeFormatter):
        """Naive datetimes are read as local time, like datetime.timestamp()."""
        assert str(formatter.format(datetime(2024, 5, 1, 8, 30), "%H:%M")) == "08:30"

    @staticmethod
    def test_other_zones_are_converted(formatter: TimeFormatter):
        """Aware datetimes in any zone are shown in the process-local zone."""
        tokyo = NOON.astimezone(timezone(timedelta(hours=9)))
        assert str(formatter.format(tokyo, "%H:%M")) == "12:00"

    @staticmethod
    def test_overflow_returns_empty(formatter: TimeFormatter):
        """Output that does not fit the scratch buffer yields an empty view."""
        out = formatter.format(NOON, "%Y" * 40)
        assert len(out) == 0
        assert not out

    @staticmethod
    def test_output_must_leave_room_for_nul():
        """Like C strftime, a result of exactly the capacity does not fit."""
        formatter = TimeFormatter(ScratchTimeBuffer(capacity=32))
        assert len(formatter.format(NOON, "x" * 31)) == 31
        assert len(formatter.format(NOON, "x" * 32)) == 0

    @staticmethod
    def test_empty_pattern_returns_empty(formatter: TimeFormatter):
        """An empty rendering is indistinguishable from failure."""
        assert len(formatter.format(NOON, "")) == 0

    @staticmethod
    def test_unconvertible_time_returns_empty(formatter: TimeFormatter, caplog):
        """A time point outside the platform range is reported as empty, not raised."""
        with caplog.at_level(logging.DEBUG, logger="strkit.timefmt"):
            out = formatter.format(10**20, "%Y")
        assert len(out) == 0
        assert "Cannot format" in caplog.text

    @staticmethod
    def test_views_share_the_scratch_buffer(formatter: TimeFormatter):
        """A second call overwrites what an earlier view points at."""
        first = formatter.format(NOON, "%Y")
        snapshot = str(first)
        second = formatter.format(NOON.replace(year=2031), "%Y")
        assert snapshot == "2024"
        assert str(second) == "2031"
        assert str(first) == "2031"

    @staticmethod
    def test_buffer_records_calendar_breakdown(formatter: TimeFormatter):
        """The last local breakdown is kept next to the characters."""
        formatter.format(NOON, "%Y")
        assert formatter.buffer.tm is not None
        assert formatter.buffer.tm.tm_hour == 12


# ============================================================================
#                               format_iso8601
# ============================================================================


class TestIso8601:
    """Tests for TimeFormatter.format_iso8601."""

    @staticmethod
    def test_offset_is_colon_separated(formatter: TimeFormatter, local_tz):
        """A +0200 offset is rewritten as +02:00."""
        local_tz("UTC-02")
        out = str(formatter.format_iso8601(NOON))
        assert out == "2024-05-01T14:00:00+02:00"
        assert not out.endswith("+0200")

    @staticmethod
    def test_negative_offset(formatter: TimeFormatter, local_tz):
        """Western offsets keep their sign."""
        local_tz("EST5")
        assert str(formatter.format_iso8601(NOON)) == "2024-05-01T07:00:00-05:00"

    @staticmethod
    def test_half_hour_offset(formatter: TimeFormatter, local_tz):
        """Minutes of the offset move behind the colon."""
        local_tz("IST-05:30")
        assert str(formatter.format_iso8601(NOON)) == "2024-05-01T17:30:00+05:30"

    @staticmethod
    def test_utc(formatter: TimeFormatter, local_tz):
        """UTC renders as +00:00."""
        local_tz("UTC0")
        assert str(formatter.format_iso8601(NOON)) == "2024-05-01T12:00:00+00:00"

    @staticmethod
    def test_failure_stays_empty(local_tz):
        """When the base format fails there is nothing to rotate."""
        local_tz("UTC0")
        formatter = TimeFormatter(ScratchTimeBuffer(capacity=32))
        assert len(formatter.format_iso8601(10**20)) == 0


# ============================================================================
#                       format_with_microseconds
# ============================================================================


@pytest.mark.usefixtures("utc")
class TestMicroseconds:
    """Tests for TimeFormatter.format_with_microseconds."""

    @staticmethod
    @pytest.mark.parametrize(
        "micros, suffix",
        [(500, ".000500"), (0, ".000000"), (5, ".000005"), (999_999, ".999999"), (123_456, ".123456")],
    )
    def test_six_digit_zero_padding(formatter: TimeFormatter, micros, suffix):
        """The sub-second part is always six zero-padded digits."""
        tp = NOON.replace(microsecond=micros)
        assert str(formatter.format_with_microseconds(tp)) == "2024-05-01T12:00:00" + suffix

    @staticmethod
    def test_posix_float(formatter: TimeFormatter):
        """Fractional seconds of a float become microseconds."""
        assert str(formatter.format_with_microseconds(0.25)) == "1970-01-01T00:00:00.250000"

    @staticmethod
    @pytest.mark.parametrize(
        "tp, expected",
        [
            (1714564800.000007, "2024-05-01T12:00:00.000007"),
            (1714564800.000001, "2024-05-01T12:00:00.000001"),
            (-0.25, "1969-12-31T23:59:59.750000"),
        ],
    )
    def test_posix_float_rounds_to_nearest_microsecond(formatter: TimeFormatter, tp, expected):
        """A float just below a microsecond boundary is not floored to the previous one."""
        assert str(formatter.format_with_microseconds(tp)) == expected

    @staticmethod
    def test_before_epoch(formatter: TimeFormatter):
        """The remainder is floored, so it pairs with the earlier whole second."""
        tp = datetime(1969, 12, 31, 23, 59, 59, 750_000, tzinfo=timezone.utc)
        assert str(formatter.format_with_microseconds(tp)) == "1969-12-31T23:59:59.750000"

    @staticmethod
    def test_no_room_for_microseconds_returns_empty():
        """The appended part is bounds-checked against the remaining capacity."""
        formatter = TimeFormatter(ScratchTimeBuffer(capacity=24))
        assert len(formatter.format(NOON, timefmt.SECONDS_PATTERN)) == 19
        assert len(formatter.format_with_microseconds(NOON)) == 0

    @staticmethod
    def test_base_failure_skips_microseconds(formatter: TimeFormatter):
        """An empty whole-second result is returned as is."""
        assert len(formatter.format_with_microseconds(10**20)) == 0


# ============================================================================
#                               now
# ============================================================================


@pytest.mark.usefixtures("utc")
class TestNow:
    """Tests for the now* helpers."""

    @staticmethod
    def test_formatter_uses_its_clock():
        """now* format whatever the injected clock reports."""
        formatter = TimeFormatter(clock=lambda: NOON.replace(microsecond=42))
        assert str(formatter.now()) == "2024-05-01T12:00:00+0000"
        assert str(formatter.now("%H")) == "12"
        assert str(formatter.now_iso8601()) == "2024-05-01T12:00:00+00:00"
        assert str(formatter.now_with_microseconds()) == "2024-05-01T12:00:00.000042"

    @staticmethod
    def test_module_helpers_accept_a_clock():
        """The per-thread helpers take the clock as an argument."""
        assert str(timefmt.now("%Y", clock=lambda: NOON)) == "2024"
        assert str(timefmt.now_iso8601(clock=lambda: NOON)).endswith("+00:00")
        assert str(timefmt.now_with_microseconds(clock=lambda: NOON)).endswith(".000000")

    @staticmethod
    def test_default_clock_is_current_time():
        """The default clock reads the wall clock."""
        before = datetime.now(timezone.utc)
        out = str(timefmt.now("%Y"))
        assert out in {str(before.year), str(before.year + 1)}


# ============================================================================
#                       Module-level helpers
# ============================================================================


@pytest.mark.usefixtures("utc")
def test_module_helpers_share_the_thread_formatter():
    """format_time* all write into the calling thread's scratch buffer."""
    formatter = timefmt.get_formatter()
    assert timefmt.get_formatter() is formatter

    out = timefmt.format_time(NOON, "%Y")
    assert str(out) == "2024"
    assert str(timefmt.format_time_iso8601(NOON)) == "2024-05-01T12:00:00+00:00"
    assert (
        str(timefmt.format_time_with_microseconds(NOON.replace(microsecond=500)))
        == "2024-05-01T12:00:00.000500"
    )
    # the first view now shows the start of the latest rendering
    assert str(out) == "2024"
    assert formatter.buffer.data.startswith(b"2024-05-01T12:00:00.000500\x00")


def test_scratch_buffer_capacity_from_environment(monkeypatch):
    """New scratch buffers take their size from STRKIT_TIME_BUFFER_SIZE."""
    monkeypatch.setenv("STRKIT_TIME_BUFFER_SIZE", "64")
    assert ScratchTimeBuffer().capacity == 64
    monkeypatch.delenv("STRKIT_TIME_BUFFER_SIZE")
    assert ScratchTimeBuffer().capacity == 128

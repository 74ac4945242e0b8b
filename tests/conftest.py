"""Global pytest fixtures for strkit."""

from __future__ import annotations

import time
from collections.abc import Callable, Iterator

import pytest

requires_tzset = pytest.mark.skipif(
    not hasattr(time, "tzset"), reason="time.tzset() is only available on Unix"
)


@pytest.fixture
def local_tz(monkeypatch: pytest.MonkeyPatch) -> Iterator[Callable[[str], None]]:
    """Pin the process-local timezone for the duration of a test.

    Example:
        ```py
        def test_offset(local_tz):
            local_tz("UTC-02")  # POSIX TZ: two hours east of UTC, "+0200"
            ...
        ```
    """

    def _set(tz: str) -> None:
        monkeypatch.setenv("TZ", tz)
        time.tzset()

    yield _set

    monkeypatch.undo()
    time.tzset()

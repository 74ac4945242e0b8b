"""Diagnostics logging for strkit.

strkit never raises from the timestamp formatter: a timestamp that cannot be
rendered comes back as an empty view and the reason is logged at DEBUG on the
``strkit`` logger. Every such record carries structured context passed as
``extra`` (see `diagnostic`): the operation that produced it and, where known,
the pattern and the buffer capacity involved.

Importing strkit attaches a `logging.NullHandler` to the package logger and
nothing else. To see why a timestamp came back empty, attach the Rich console
handler for the duration of a block:

    with capture_diagnostics():
        timefmt.format_time(tp, "%Y" * 100)
    # DEBUG  [format_time] Formatted time does not fit  capacity=128 pattern='%Y%Y...'
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, TextIO

from rich.console import Console
from rich.logging import RichHandler

# pylint: disable=too-few-public-methods

PACKAGE_LOGGER = "strkit"
CONTEXT_FIELDS = ("capacity", "pattern", "requested", "remaining", "size")
NO_OPERATION = "-"

logging.getLogger(PACKAGE_LOGGER).addHandler(logging.NullHandler())


def diagnostic(operation: str, **context: Any) -> dict[str, Any]:
    """Build the ``extra`` mapping for a strkit diagnostic record.

    Args:
        operation: Public operation that emitted the record (e.g. ``"format_time"``).
        **context: Any of `CONTEXT_FIELDS`; unknown keys are rejected so typos
            do not silently vanish from the rendered line.

    Returns:
        A dict suitable for ``logger.debug(..., extra=...)``.
    """
    if unknown := set(context) - set(CONTEXT_FIELDS):
        raise KeyError(f"Unknown diagnostic fields: {sorted(unknown)}")
    return {"operation": operation, **context}


class DiagnosticContextFilter(logging.Filter):
    """Render the structured context of strkit records into ``record.context``.

    Records without an ``operation`` (third-party code, or strkit records
    logged without `diagnostic`) get `NO_OPERATION` and an empty context. The
    filter always returns True.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "operation"):
            record.operation = NO_OPERATION
        record.context = " ".join(
            f"{name}={getattr(record, name)!r}"
            for name in CONTEXT_FIELDS
            if hasattr(record, name)
        )
        return True


def config_console_handler(
    level: int = logging.DEBUG, color: bool = True, file: TextIO | None = None
) -> RichHandler:
    """Configure and return a RichHandler that shows strkit diagnostics.

    Args:
        level: Minimum level for console output.
        color: Enable color output when True.
        file: Stream to write to. Defaults to stderr.

    Returns:
        RichHandler: Handler formatting ``[operation] message  context``.
    """
    console = Console(
        color_system="auto" if color else None,
        file=file,
        stderr=file is None,
    )
    handler = RichHandler(
        level=level,
        console=console,
        show_time=False,
        show_path=False,
        markup=False,
    )
    handler.setFormatter(logging.Formatter(fmt="[%(operation)s] %(message)s  %(context)s"))
    handler.addFilter(DiagnosticContextFilter())
    return handler


@contextmanager
def capture_diagnostics(
    handler: logging.Handler | None = None, level: int = logging.DEBUG
) -> Iterator[logging.Handler]:
    """Attach ``handler`` to the ``strkit`` logger for the duration of the block.

    The logger's previous level is restored on exit.

    Args:
        handler: Handler to attach. Defaults to `config_console_handler`.
        level: Level the package logger is lowered to while attached.

    Yields:
        The attached handler.
    """
    if handler is None:
        handler = config_console_handler(level=level)
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    previous_level = package_logger.level
    package_logger.addHandler(handler)
    package_logger.setLevel(level)
    try:
        yield handler
    finally:
        package_logger.removeHandler(handler)
        package_logger.setLevel(previous_level)

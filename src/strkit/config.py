"""Configuration utilities for strkit.

This module centralizes small helpers and constants related to runtime configuration.
"""

import os

from strkit.errors import ConfigurationError

TIME_BUFFER_SIZE_ENV = "STRKIT_TIME_BUFFER_SIZE"
DEFAULT_TIME_BUFFER_SIZE = 128
MIN_TIME_BUFFER_SIZE = 32


def get_time_buffer_size() -> int:
    """Get the scratch time buffer capacity from the environment.

    Returns:
        The value of `STRKIT_TIME_BUFFER_SIZE` as an integer, or
        `DEFAULT_TIME_BUFFER_SIZE` when the variable is unset or empty.

    Raises:
        ConfigurationError: If the value is not an integer or is smaller than
            `MIN_TIME_BUFFER_SIZE`.
    """
    if not (raw := os.environ.get(TIME_BUFFER_SIZE_ENV, "").strip()):
        return DEFAULT_TIME_BUFFER_SIZE
    try:
        size = int(raw)
    except ValueError as e:
        raise ConfigurationError(TIME_BUFFER_SIZE_ENV, raw, "expected an integer") from e
    if size < MIN_TIME_BUFFER_SIZE:
        raise ConfigurationError(
            TIME_BUFFER_SIZE_ENV, raw, f"must be at least {MIN_TIME_BUFFER_SIZE}"
        )
    return size

"""Error definitions for strkit."""

# ============================================================================
#                           General errors
# ============================================================================


class StrkitError(Exception):
    """Base class for strkit errors."""


class InvalidArgumentError(StrkitError, ValueError):
    """Raised when a caller passes a malformed or unsupported argument."""

    def __init__(self, argument: str, reason: str, operation: str | None = None) -> None:
        where = f" for {operation}" if operation else ""
        super().__init__(f"invalid {argument}{where}: {reason}")
        self.argument = argument
        self.reason = reason
        self.operation = operation


# ============================================================================
#                           Buffer errors
# ============================================================================


class BufferOverflowError(StrkitError):
    """Raised when a write would run past the capacity of a bounded buffer."""

    def __init__(self, requested: int, remaining: int) -> None:
        super().__init__(
            f"Write of {requested} bytes exceeds remaining capacity of {remaining} bytes."
        )
        self.requested = requested
        self.remaining = remaining


# ============================================================================
#                           Configuration errors
# ============================================================================


class ConfigurationError(StrkitError):
    """Raised when an environment setting holds an unusable value."""

    def __init__(self, name: str, value: str, reason: str) -> None:
        super().__init__(f"{name}={value!r} is not valid: {reason}")
        self.name = name
        self.value = value
        self.reason = reason

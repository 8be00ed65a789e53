"""Exception hierarchy shared by the publisher, field resolver, and sinks."""

from __future__ import annotations


class PiperError(Exception):
    """Base class for every error that aborts a piper run."""


class ConfigError(PiperError):
    """Invalid command-line or programmatic configuration."""


class AlreadyRunningError(PiperError):
    """Raised when ``run`` is invoked on a publisher that is already running."""

    def __init__(self, message: str = "already running") -> None:
        super().__init__(message)


class InputReadError(PiperError):
    """The input stream failed while being read."""


class FieldCompileError(PiperError):
    """A ``jp:`` field specification is not a valid JMESPath expression."""

    def __init__(self, field_name: str, expression: str, reason: str) -> None:
        super().__init__(f"invalid expression for field {field_name!r} ({expression!r}): {reason}")
        self.field_name = field_name
        self.expression = expression


class FieldEvalError(PiperError):
    """A field could not be evaluated or converted for a record."""


class LineParseError(PiperError):
    """A line had to be queried but is not valid JSON."""


class SinkError(PiperError):
    """The downstream system rejected a batch or could not be reached."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        failed_entries: int | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.failed_entries = failed_entries


__all__ = [
    "PiperError",
    "ConfigError",
    "AlreadyRunningError",
    "InputReadError",
    "FieldCompileError",
    "FieldEvalError",
    "LineParseError",
    "SinkError",
]

"""Errors raised by the log client."""


class LogClientError(Exception):
    """Base class for log client errors."""
    pass


class NetworkUnavailableError(LogClientError):
    """Raised when the log server times out, is unreachable, or answers with a non-success status."""
    pass


class LogValidationError(LogClientError):
    """Raised when a new log is missing a required field or the server rejects it."""
    pass

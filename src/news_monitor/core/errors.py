"""Domain exceptions."""

from typing import Optional


class NewsMonitorError(Exception):
    """Base class for pipeline errors."""


class TransportFailure(NewsMonitorError):
    """Network error, timeout or non-2xx response."""


class ParseFailure(NewsMonitorError):
    """Feed payload was empty, malformed or carried no items."""


class ExhaustedSourcesFailure(NewsMonitorError):
    """Every fallback tier failed.

    Args:
        message: Human readable summary
        last_error: The error raised by the last attempted tier
    """

    def __init__(self, message: str, last_error: Optional[BaseException] = None) -> None:
        if last_error is not None:
            message = f"{message}. Last error: {last_error}"
        super().__init__(message)
        self.last_error = last_error


class ScorerFailure(NewsMonitorError):
    """External scoring call failed or returned malformed data."""


class CacheFailure(NewsMonitorError):
    """Cache store could not be read or written."""

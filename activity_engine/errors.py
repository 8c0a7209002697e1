"""
Error types raised by the activity pipeline.

Missing step counts are not errors. These cover input that breaks the dense
5-minute grid every stage relies on, and profile lookups with nothing behind
them.
"""
from typing import Optional


class ActivityDataError(Exception):
    """Base class for activity pipeline failures."""


class FormatError(ActivityDataError, ValueError):
    """Malformed row or header in the activity source."""

    def __init__(self, message: str, line: Optional[int] = None):
        self.line = line
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)


class InsufficientDataError(ActivityDataError, LookupError):
    """An interval has no observed step counts to average over."""

    def __init__(self, interval: Optional[int] = None, message: Optional[str] = None):
        self.interval = interval
        super().__init__(message or f"No observed step counts for interval {interval}")

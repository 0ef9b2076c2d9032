# src/hnbrate/domain/errors.py
"""
Domain Errors - Business Logic Exceptions

This module defines the exceptions raised across the rate cache:
source failures (transport and format), cache lifecycle errors and
conversion errors.

Files that USE this module:
- hnbrate.adapters.providers.hnb_format (raises SourceFormatError)
- hnbrate.adapters.providers.hnb (raises SourceUnavailableError)
- hnbrate.application.cache_updater (raises CacheClosedError, SnapshotUnavailableError)
- hnbrate.application.conversion_service (raises ConversionError subclasses)
- hnbrate.adapters.http.api (maps errors to HTTP status codes)
"""
from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for domain errors."""
    pass


class SourceError(DomainError):
    """Raised when the remote exchange list cannot be turned into a snapshot."""
    pass


class SourceUnavailableError(SourceError):
    """Raised when the remote source is unreachable, times out or answers non-200."""
    pass


class SourceFormatError(SourceError):
    """
    Raised when a payload line violates the exchange list grammar.

    Attributes:
        reason: Short description of what is wrong
        line_no: 1-based line number in the payload (None for payload-level errors)
        line: The offending line as received
    """

    def __init__(self, reason: str, line_no: Optional[int] = None, line: Optional[str] = None):
        self.reason = reason
        self.line_no = line_no
        self.line = line
        if line_no is None:
            message = reason
        else:
            message = f"{reason} at line {line_no}: {line!r}"
        super().__init__(message)


class CacheError(DomainError):
    """Base exception for errors returned by the rate cache to its readers."""
    pass


class CacheClosedError(CacheError):
    """Raised when the rate cache is read after it has been closed."""

    def __init__(self, message: str = "rate cache is closed"):
        super().__init__(message)


class SnapshotUnavailableError(CacheError):
    """Raised when no exchange snapshot has been fetched successfully yet."""

    def __init__(self, last_error: Optional[BaseException] = None):
        self.last_error = last_error
        message = "exchange rates are not available yet"
        if last_error is not None:
            message = f"{message} (last error: {last_error})"
        super().__init__(message)


class ConversionError(DomainError):
    """Base exception for invalid conversion requests."""
    pass


class UnknownCurrencyError(ConversionError):
    """Raised when the requested currency is not in the exchange snapshot."""
    pass


class InvalidRateTypeError(ConversionError):
    """Raised when the requested rate type is not buy, middle or sell."""
    pass

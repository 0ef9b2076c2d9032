# src/hnbrate/domain/__init__.py
"""
Domain Layer - Pure Business Objects

This package contains domain models and errors.
No dependencies on infrastructure or external systems.
"""

from hnbrate.domain.models import (
    Conversion,
    ExchangeSnapshot,
    Rate,
    RateType,
)
from hnbrate.domain.errors import (
    CacheClosedError,
    CacheError,
    ConversionError,
    DomainError,
    InvalidRateTypeError,
    SnapshotUnavailableError,
    SourceError,
    SourceFormatError,
    SourceUnavailableError,
    UnknownCurrencyError,
)

__all__ = [
    "Rate",
    "RateType",
    "ExchangeSnapshot",
    "Conversion",
    "DomainError",
    "SourceError",
    "SourceUnavailableError",
    "SourceFormatError",
    "CacheError",
    "CacheClosedError",
    "SnapshotUnavailableError",
    "ConversionError",
    "UnknownCurrencyError",
    "InvalidRateTypeError",
]

# src/hnbrate/application/__init__.py
"""
Application Layer - Use Cases and Services

This package contains the rate cache updater and the conversion service.
Remote access goes through the ExchangeSource interface.
"""

from hnbrate.application.cache_updater import RateCacheUpdater, RefreshRequest, UpdaterStatus
from hnbrate.application.conversion_service import ConversionService, convert, parse_rate_type

__all__ = [
    "RateCacheUpdater",
    "RefreshRequest",
    "UpdaterStatus",
    "ConversionService",
    "convert",
    "parse_rate_type",
]

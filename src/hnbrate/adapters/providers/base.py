# src/hnbrate/adapters/providers/base.py
"""
Base Source Interface for Exchange Lists

This module defines the abstract base class for exchange list sources.
The rate cache updater depends only on this contract, so tests can
replace the remote source with an in-memory one.

Files that USE this module:
- hnbrate.adapters.providers.hnb (HnbSource implements ExchangeSource)
- hnbrate.application.cache_updater (RateCacheUpdater fetches through ExchangeSource)
- tests.test_cache_updater (fake sources)

Files that this module USES:
- hnbrate.domain.models (ExchangeSnapshot)
"""
from abc import ABC, abstractmethod

from hnbrate.domain.models import ExchangeSnapshot


class ExchangeSource(ABC):
    # Upper bound in seconds of a single fetch
    timeout: float = 10.0

    @abstractmethod
    def fetch(self) -> ExchangeSnapshot:
        """Return a complete snapshot or raise a SourceError."""
        raise NotImplementedError

# src/hnbrate/domain/models.py
"""
Domain Models - Pure Business Objects

This module contains domain models representing core business concepts:
- Exchange rates of a single currency (buy, middle, sell)
- Exchange snapshots (all rates valid for one application date)
- Conversion results

All models are immutable. A refresh of the rate cache builds a new
ExchangeSnapshot instead of changing an existing one, so a snapshot handed
to a reader stays internally consistent forever.

Files that USE this module:
- hnbrate.adapters.providers.* (the parser builds snapshots)
- hnbrate.application.* (the updater publishes snapshots, conversion reads them)
- hnbrate.adapters.formatting.formatter (serializes snapshots)
- tests.* (tests use domain models for test data)

Files that this module USES:
- None (pure domain layer, no external dependencies)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from types import MappingProxyType
from typing import Mapping


class RateType(str, Enum):
    """Which of the three published rates to use."""
    BUY = "buy"
    MIDDLE = "middle"
    SELL = "sell"


@dataclass(frozen=True)
class Rate:
    """
    Exchange rates for one unit of a foreign currency.

    Attributes:
        buy: Bank buying rate
        middle: Middle rate
        sell: Bank selling rate

    Note:
        buy <= middle <= sell is not enforced, values are kept as published.
    """
    buy: Decimal
    middle: Decimal
    sell: Decimal

    def get(self, rate_type: RateType) -> Decimal:
        """Return the value of the given rate type."""
        return getattr(self, RateType(rate_type).value)


@dataclass(frozen=True)
class ExchangeSnapshot:
    """
    Exchange rates valid for one application date.

    Attributes:
        application_date: Date the rates are officially valid for
        rates: Read-only mapping of 3-letter currency code to Rate
    """
    application_date: date
    rates: Mapping[str, Rate] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Private copy behind a read-only view; callers keep no handle to mutate it
        object.__setattr__(self, "rates", MappingProxyType(dict(self.rates)))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ExchangeSnapshot):
            return NotImplemented
        return (
            self.application_date == other.application_date
            and dict(self.rates) == dict(other.rates)
        )

    def __hash__(self) -> int:
        return hash((self.application_date, frozenset(self.rates.items())))

    @property
    def currencies(self) -> list[str]:
        """Currency codes in the snapshot, sorted."""
        return sorted(self.rates)


@dataclass(frozen=True)
class Conversion:
    """
    Result of converting an amount with a published rate.

    Attributes:
        application_date: Date of the snapshot used
        currency: Currency code the rate belongs to
        rate_type: Which rate was applied
        rate: Rate value per one unit
        amount: Amount that was converted
        result: amount multiplied by rate
    """
    application_date: date
    currency: str
    rate_type: RateType
    rate: Decimal
    amount: Decimal
    result: Decimal

# src/hnbrate/application/conversion_service.py
"""
Conversion Service - Amount Conversion with Published Rates

Converts an amount using the buy, middle or sell rate of one currency from
the latest exchange snapshot. The result is amount multiplied by the rate
per one unit of the currency.

Files that USE this module:
- hnbrate.adapters.http.api (POST /convert)
- tests.test_conversion_service (unit tests)

Files that this module USES:
- hnbrate.application.cache_updater (RateCacheUpdater for the latest snapshot)
- hnbrate.domain (models and conversion errors)
- hnbrate.shared.validators (currency code validation)
"""
from __future__ import annotations

from decimal import Decimal
from typing import Protocol, Union

from hnbrate.domain.errors import InvalidRateTypeError, UnknownCurrencyError
from hnbrate.domain.models import Conversion, ExchangeSnapshot, RateType
from hnbrate.shared.validators import validate_currency_code


class SnapshotProvider(Protocol):
    """Anything that can hand out the latest snapshot (e.g. RateCacheUpdater)."""
    def latest_snapshot(self) -> ExchangeSnapshot:
        ...


def parse_rate_type(value: Union[str, RateType]) -> RateType:
    """
    Turn 'buy', 'middle' or 'sell' (any case) into a RateType.

    Raises:
        InvalidRateTypeError: For any other value
    """
    if isinstance(value, RateType):
        return value
    try:
        return RateType(str(value).strip().lower())
    except ValueError as e:
        raise InvalidRateTypeError(
            f"unknown rate type {value!r}, expected one of: buy, middle, sell"
        ) from e


def convert(
    snapshot: ExchangeSnapshot,
    amount: Decimal,
    currency: str,
    rate_type: Union[str, RateType],
) -> Conversion:
    """
    Convert amount with the chosen rate of currency.

    Args:
        snapshot: Exchange snapshot to take the rate from
        amount: Amount to convert
        currency: 3-letter currency code (case-insensitive)
        rate_type: 'buy', 'middle' or 'sell'

    Returns:
        Conversion with the applied rate and the result

    Raises:
        UnknownCurrencyError: If the currency is not in the snapshot
        InvalidRateTypeError: If the rate type is not recognised
    """
    kind = parse_rate_type(rate_type)
    code = (currency or "").strip().upper()
    if not validate_currency_code(code) or code not in snapshot.rates:
        raise UnknownCurrencyError(f"no exchange rate for currency {currency!r}")

    amount = Decimal(amount)
    rate = snapshot.rates[code].get(kind)
    return Conversion(
        application_date=snapshot.application_date,
        currency=code,
        rate_type=kind,
        rate=rate,
        amount=amount,
        result=amount * rate,
    )


class ConversionService:
    """Converts amounts with the snapshot currently held by the rate cache."""

    def __init__(self, snapshots: SnapshotProvider):
        self.snapshots = snapshots

    def convert(self, amount: Decimal, currency: str, rate_type: Union[str, RateType]) -> Conversion:
        """
        Convert with the latest snapshot.

        Cache errors (closed, not yet available) propagate to the caller.
        """
        return convert(self.snapshots.latest_snapshot(), amount, currency, rate_type)

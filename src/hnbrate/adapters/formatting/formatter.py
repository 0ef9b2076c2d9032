# src/hnbrate/adapters/formatting/formatter.py
"""
Snapshot Formatter - JSON Documents and Text Listings

This module turns exchange snapshots into their public representations:
- JSON documents for the HTTP API, with every rate as a decimal string
  fixed to 6 fractional digits (never a binary float)
- Plain text listings for the command line

Files that USE this module:
- hnbrate.adapters.http.api (snapshot_document, conversion_document, status_document)
- hnbrate.app (snapshot_lines for --once output)
- tests.test_formatter (unit tests)

Files that this module USES:
- hnbrate.domain.models (ExchangeSnapshot, Rate, Conversion)
- hnbrate.application.cache_updater (UpdaterStatus)
"""
from __future__ import annotations

import json
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Any, Dict

from hnbrate.application.cache_updater import UpdaterStatus
from hnbrate.domain.models import Conversion, ExchangeSnapshot, Rate

RATE_QUANTUM = Decimal("0.000001")
# Wide enough for converted amounts, not only rates
_QUANTIZE_CONTEXT = Context(prec=60)


def fixed(value: Decimal) -> str:
    """
    Format a decimal with exactly 6 fractional digits.

    Args:
        value: Decimal to format (e.g. Decimal('0.06179791'))

    Returns:
        String such as '0.061798' (half-up rounding)
    """
    return str(Decimal(value).quantize(RATE_QUANTUM, rounding=ROUND_HALF_UP, context=_QUANTIZE_CONTEXT))


def rate_document(rate: Rate) -> Dict[str, str]:
    return {
        "buy": fixed(rate.buy),
        "middle": fixed(rate.middle),
        "sell": fixed(rate.sell),
    }


def snapshot_document(snapshot: ExchangeSnapshot) -> Dict[str, Any]:
    """
    Build the JSON-ready document of a snapshot.

    Returns:
        {"date": "YYYY-MM-DD", "rates": {"USD": {"buy": ..., "middle": ..., "sell": ...}}}
        with currencies sorted by code
    """
    return {
        "date": snapshot.application_date.isoformat(),
        "rates": {code: rate_document(snapshot.rates[code]) for code in snapshot.currencies},
    }


def snapshot_json(snapshot: ExchangeSnapshot) -> str:
    return json.dumps(snapshot_document(snapshot))


def conversion_document(conversion: Conversion) -> Dict[str, Any]:
    return {
        "date": conversion.application_date.isoformat(),
        "currency": conversion.currency,
        "rate": conversion.rate_type.value,
        "value": format(conversion.amount, "f"),
        "result": fixed(conversion.result),
    }


def status_document(status: UpdaterStatus) -> Dict[str, Any]:
    return {
        "state": status.state,
        "date": status.application_date.isoformat() if status.application_date else None,
        "currencies": status.currencies,
        "generation": status.generation,
        "failures": status.failures,
        "last_success_at": status.last_success_at.isoformat() if status.last_success_at else None,
        "last_error": status.last_error,
    }


def snapshot_lines(snapshot: ExchangeSnapshot) -> str:
    """
    Format a snapshot as a plain text table.

    One line per currency with buy, middle and sell rate, preceded by the
    application date.
    """
    lines = [f"Exchange rates for {snapshot.application_date.strftime('%d.%m.%Y.')}"]
    lines.append(f"{'':3}  {'buy':>12}  {'middle':>12}  {'sell':>12}")
    for code in snapshot.currencies:
        rate = snapshot.rates[code]
        lines.append(
            f"{code:3}  {fixed(rate.buy):>12}  {fixed(rate.middle):>12}  {fixed(rate.sell):>12}"
        )
    return "\n".join(lines)

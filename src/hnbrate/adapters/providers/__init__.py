# src/hnbrate/adapters/providers/__init__.py
"""
Source Adapters - Remote Exchange List Clients

This package contains the exchange list source and its parser.
Sources implement the ExchangeSource interface.
"""

from hnbrate.adapters.providers.base import ExchangeSource
from hnbrate.adapters.providers.hnb import HnbSource
from hnbrate.adapters.providers.hnb_format import (
    ExchangeHeader,
    ParseOutcome,
    parse_exchange,
    parse_exchange_text,
)

__all__ = [
    "ExchangeSource",
    "HnbSource",
    "ExchangeHeader",
    "ParseOutcome",
    "parse_exchange",
    "parse_exchange_text",
]

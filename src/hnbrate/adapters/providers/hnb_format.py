# src/hnbrate/adapters/providers/hnb_format.py
"""
HNB Exchange List Parser - Fixed-Width Text to Exchange Snapshot

This module parses the fixed-width exchange list published by the Croatian
National Bank into an ExchangeSnapshot with exact Decimal rates.

Payload layout:

    059240320172503201713                      <- header, exactly 21 characters
    840USD001       6,839371       6,859951       6,880531
    392JPY100       6,161252       6,179791       6,198330

Header: exchange number [0:3], creation date [3:11], application date [11:19]
(both DDMMYYYY) and number of currencies that follow [19:21].

Rate line: code block (numeric code [0:3], label [3:6], unit count [6:9])
followed by buy, middle and sell rates. Rates use ',' as the decimal
separator and '.' as the thousands separator, and are quoted per unit
count; they are stored per one unit.

Parsing never returns a partial snapshot: the first bad line fails the
whole payload.

Files that USE this module:
- hnbrate.adapters.providers.hnb (HnbSource streams response lines into parse_exchange)
- tests.test_hnb_format (unit tests)

Files that this module USES:
- hnbrate.domain.models (ExchangeSnapshot, Rate)
- hnbrate.domain.errors (SourceFormatError)
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Context, Decimal, InvalidOperation
from typing import Dict, Iterable, Optional, Tuple

from hnbrate.domain.errors import SourceFormatError
from hnbrate.domain.models import ExchangeSnapshot, Rate

log = logging.getLogger(__name__)

HEADER_LENGTH = 21
CODE_BLOCK_LENGTH = 9

# Enough digits for 8 integer and 6 fractional digits divided by any unit count
DECIMAL_CONTEXT = Context(prec=34)

_NUMBER_RE = re.compile(r"[+-]?[0-9]+(?:\.[0-9]+)?")
_DIGITS_RE = re.compile(r"[0-9]+")
_LABEL_RE = re.compile(r"[A-Za-z]{3}")
_SWAP_SEPARATORS = str.maketrans({",": ".", ".": ","})


@dataclass(frozen=True)
class ExchangeHeader:
    """Parsed header line of an exchange list."""
    exchange_number: str
    application_date: date
    declared_count: Optional[int] = None


@dataclass(frozen=True)
class ParseOutcome:
    """
    Result of parsing a whole payload.

    Exactly one of snapshot and error is set.
    """
    snapshot: Optional[ExchangeSnapshot] = None
    error: Optional[SourceFormatError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> ExchangeSnapshot:
        """Return the snapshot or raise the parse error."""
        if self.error is not None:
            raise self.error
        return self.snapshot  # type: ignore[return-value]


def to_standard_notation(text: str) -> str:
    """
    Convert a locale formatted number to plain decimal notation.

    '1.234,567890' -> '1234.567890'
    """
    return text.translate(_SWAP_SEPARATORS).replace(",", "")


def normalise_rate(text: str, units: int) -> Decimal:
    """
    Parse a locale formatted rate and express it per one currency unit.

    Args:
        text: Rate as published (e.g. '6,179791')
        units: Number of currency units the rate is quoted for (e.g. 100)

    Returns:
        A new Decimal holding the rate per one unit

    Raises:
        ValueError: If the text is not a plain decimal number or units is not positive
    """
    plain = to_standard_notation(text)
    if not _NUMBER_RE.fullmatch(plain):
        raise ValueError(f"invalid decimal number {text!r}")
    if units <= 0:
        raise ValueError(f"unit count must be positive, got {units}")

    try:
        value = DECIMAL_CONTEXT.create_decimal(plain)
    except InvalidOperation as e:
        raise ValueError(f"invalid decimal number {text!r}") from e

    if units != 1:
        value = DECIMAL_CONTEXT.divide(value, Decimal(units))
    return value


def parse_header(line: str, line_no: Optional[int] = None) -> ExchangeHeader:
    """
    Parse the 21 character header line.

    Raises:
        SourceFormatError: If the application date is not a valid DDMMYYYY date
    """
    raw_date = line[11:19]
    if not _DIGITS_RE.fullmatch(raw_date):
        raise SourceFormatError("invalid application date in header", line_no, line)
    try:
        application_date = datetime.strptime(raw_date, "%d%m%Y").date()
    except ValueError as e:
        raise SourceFormatError(f"invalid application date in header ({e})", line_no, line) from e

    raw_count = line[19:21]
    declared_count = int(raw_count) if _DIGITS_RE.fullmatch(raw_count) else None

    return ExchangeHeader(
        exchange_number=line[0:3],
        application_date=application_date,
        declared_count=declared_count,
    )


def parse_rate_line(line: str, line_no: Optional[int] = None) -> Tuple[str, Rate]:
    """
    Parse one currency line into its label and per-unit Rate.

    Raises:
        SourceFormatError: If the line does not follow the rate line layout
    """
    parts = line.split()
    if len(parts) != 4:
        raise SourceFormatError(f"expected 4 fields, got {len(parts)}", line_no, line)

    code_block, buy, middle, sell = parts
    if len(code_block) != CODE_BLOCK_LENGTH:
        raise SourceFormatError("malformed currency code block", line_no, line)

    label = code_block[3:6]
    if not _LABEL_RE.fullmatch(label):
        raise SourceFormatError(f"invalid currency label {label!r}", line_no, line)

    raw_units = code_block[6:9]
    if not _DIGITS_RE.fullmatch(raw_units) or int(raw_units) == 0:
        raise SourceFormatError(f"invalid unit count {raw_units!r}", line_no, line)
    units = int(raw_units)

    try:
        rate = Rate(
            buy=normalise_rate(buy, units),
            middle=normalise_rate(middle, units),
            sell=normalise_rate(sell, units),
        )
    except ValueError as e:
        raise SourceFormatError(f"error while normalising rate ({e})", line_no, line) from e

    return label.upper(), rate


def _parse(lines: Iterable[str]) -> ExchangeSnapshot:
    header: Optional[ExchangeHeader] = None
    rates: Dict[str, Rate] = {}

    for line_no, line in enumerate(lines, start=1):
        if isinstance(line, bytes):
            line = line.decode("ascii", errors="replace")
        line = line.rstrip("\r\n")
        if not line.strip():
            continue

        if len(line) == HEADER_LENGTH:
            header = parse_header(line, line_no)
            continue

        label, rate = parse_rate_line(line, line_no)
        rates[label] = rate

    if header is None:
        raise SourceFormatError("payload has no header line")

    if header.declared_count is not None and header.declared_count != len(rates):
        log.warning(
            "Exchange list %s declares %d currencies but contains %d",
            header.exchange_number, header.declared_count, len(rates),
        )

    return ExchangeSnapshot(application_date=header.application_date, rates=rates)


def parse_exchange(lines: Iterable[str]) -> ParseOutcome:
    """
    Parse a whole exchange list payload.

    Args:
        lines: Payload lines (str, or bytes as yielded by undecoded streams)

    Returns:
        ParseOutcome holding either the complete snapshot or the first format error
    """
    try:
        snapshot = _parse(lines)
    except SourceFormatError as e:
        return ParseOutcome(error=e)
    return ParseOutcome(snapshot=snapshot)


def parse_exchange_text(text: str) -> ParseOutcome:
    """Parse a payload held in memory."""
    return parse_exchange(text.splitlines())

# src/hnbrate/adapters/providers/hnb.py
"""
HNB Source - Remote Exchange List Fetcher

This module implements the HTTP client for the Croatian National Bank
exchange list. One fetch performs a single bounded GET request and streams
the body line by line through the parser, so memory use does not grow with
the payload.

A fetch either returns a complete ExchangeSnapshot or raises; partial
results are never returned.

Files that USE this module:
- hnbrate.application.cache_updater (RateCacheUpdater.from_settings builds an HnbSource)
- hnbrate.app (--once mode fetches directly)
- tests.test_providers (unit tests)

Files that this module USES:
- hnbrate.adapters.providers.base (ExchangeSource interface)
- hnbrate.adapters.providers.hnb_format (parse_exchange)
- hnbrate.config (settings for URL, timeout and encoding)
"""
import logging
import time
from typing import Iterator, Optional

import requests

from hnbrate.adapters.providers.base import ExchangeSource
from hnbrate.adapters.providers.hnb_format import parse_exchange
from hnbrate.config import settings
from hnbrate.domain.errors import SourceUnavailableError
from hnbrate.domain.models import ExchangeSnapshot

log = logging.getLogger(__name__)


class HnbSource(ExchangeSource):
    def __init__(
        self,
        url: Optional[str] = None,
        timeout: Optional[float] = None,
        encoding: Optional[str] = None,
    ):
        """
        Initialize HNB exchange list source.

        Args:
            url: Optional custom exchange list URL (defaults to settings.source_url)
            timeout: Optional HTTP timeout in seconds (defaults to settings.http_timeout_seconds)
            encoding: Charset used when the response declares none (defaults to settings.source_encoding)
        """
        self.url = url or settings.source_url
        self.timeout = timeout or settings.http_timeout_seconds
        self.encoding = encoding or settings.source_encoding

    def _open(self) -> requests.Response:
        """
        Send the GET request and check the status.

        Raises:
            SourceUnavailableError: On timeout, connection error or any status other than 200
        """
        try:
            resp = requests.get(self.url, timeout=self.timeout, stream=True)
        except requests.exceptions.Timeout as e:
            log.warning("HNB exchange list timeout after %s seconds (%s)", self.timeout, self.url)
            raise SourceUnavailableError(f"HNB request timeout after {self.timeout}s") from e
        except requests.exceptions.RequestException as e:
            log.warning("HNB exchange list request failed for %s: %s", self.url, e)
            raise SourceUnavailableError(f"HNB request failed for {self.url}: {e}") from e

        if resp.status_code != 200:
            resp.close()
            log.warning("HNB exchange list returned HTTP %d (%s)", resp.status_code, self.url)
            raise SourceUnavailableError(f"HNB returned HTTP {resp.status_code} for {self.url}")

        return resp

    def _lines(self, resp: requests.Response, deadline: float) -> Iterator[str]:
        """
        Yield body lines until the fetch deadline passes.

        The requests timeout only bounds connect and each socket read, so a
        remote trickling lines would otherwise hold the fetch open.
        """
        for line in resp.iter_lines(decode_unicode=True):
            if time.monotonic() > deadline:
                log.warning("HNB exchange list took longer than %s seconds (%s)", self.timeout, self.url)
                raise SourceUnavailableError(f"HNB response exceeded {self.timeout}s")
            yield line

    def fetch(self) -> ExchangeSnapshot:
        """
        Fetch and parse the current exchange list.

        Returns:
            ExchangeSnapshot with all published currencies

        Raises:
            SourceUnavailableError: If the remote cannot be read within the timeout
            SourceFormatError: If the payload does not follow the exchange list format
        """
        log.info("Fetching exchange list from %s", self.url)
        deadline = time.monotonic() + self.timeout
        resp = self._open()
        try:
            if resp.encoding is None:
                resp.encoding = self.encoding
            outcome = parse_exchange(self._lines(resp, deadline))
        except requests.exceptions.RequestException as e:
            log.warning("Reading HNB exchange list from %s failed: %s", self.url, e)
            raise SourceUnavailableError(f"HNB response could not be read: {e}") from e
        finally:
            resp.close()

        if not outcome.ok:
            log.error("HNB exchange list rejected: %s", outcome.error)
        snapshot = outcome.unwrap()

        log.info(
            "HNB exchange list parsed: date=%s, currencies=%d",
            snapshot.application_date, len(snapshot.rates),
        )
        return snapshot

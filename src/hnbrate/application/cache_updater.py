# src/hnbrate/application/cache_updater.py
"""
Rate Cache Updater - Background Refresh and Snapshot Hand-off

This module owns the one current ExchangeSnapshot of the service. A single
background thread refreshes it at startup, on a fixed interval and on demand;
any number of reader threads get the latest snapshot without ever waiting
on network I/O.

Hand-off rules:
- Only the background thread fetches and publishes.
- A new snapshot is built completely by the source, then published by
  swapping one reference under a lock. Readers see the old or the new
  snapshot, never a mix.
- A failed refresh (transport or format error) is logged and the previous
  snapshot stays in place.
- close() is terminal: every read afterwards raises CacheClosedError.

Files that USE this module:
- hnbrate.app (creates the updater and closes it on shutdown)
- hnbrate.application.conversion_service (reads snapshots for conversions)
- hnbrate.adapters.http.api (serves snapshots and status)
- tests.test_cache_updater (unit tests)

Files that this module USES:
- hnbrate.adapters.providers.base (ExchangeSource interface)
- hnbrate.adapters.providers.hnb (HnbSource for from_settings)
- hnbrate.config (settings for interval and timeout)
- hnbrate.domain (snapshot model and cache errors)
"""
from __future__ import annotations

import logging
import queue
import threading
import time
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Optional, Union

from hnbrate.adapters.providers.base import ExchangeSource
from hnbrate.domain.errors import (
    CacheClosedError,
    SnapshotUnavailableError,
    SourceError,
)
from hnbrate.domain.models import ExchangeSnapshot

logger = logging.getLogger(__name__)

STATE_RUNNING = "running"
STATE_CLOSED = "closed"


@dataclass
class RefreshRequest:
    """
    A manual refresh request handed to the background thread.

    started is set once the background thread picks the request up;
    completed is set when the attempt has finished, whatever its outcome.
    """
    reason: str = "manual"
    started: threading.Event = field(default_factory=threading.Event)
    completed: threading.Event = field(default_factory=threading.Event)
    succeeded: Optional[bool] = None


@dataclass(frozen=True)
class UpdaterStatus:
    """Point-in-time view of the updater for health reporting."""
    state: str
    application_date: Optional[date]
    currencies: int
    generation: int
    failures: int
    last_success_at: Optional[datetime]
    last_error: Optional[str]

    @property
    def has_snapshot(self) -> bool:
        return self.application_date is not None


_STOP = object()


class RateCacheUpdater:
    """Holds the latest exchange snapshot and keeps it fresh in the background."""

    def __init__(
        self,
        source: ExchangeSource,
        refresh_interval: float = 3600.0,
        startup_timeout: Optional[float] = None,
    ):
        """
        Start the background refresh thread and wait for the first fetch.

        Args:
            source: Exchange list source to refresh from
            refresh_interval: Seconds between scheduled refreshes
            startup_timeout: Upper bound in seconds on waiting for the initial fetch
                (defaults to the source timeout plus one second)

        Note:
            A failed or slow initial fetch does not fail construction; reads raise
            SnapshotUnavailableError until a refresh succeeds.
        """
        if refresh_interval <= 0:
            raise ValueError("refresh_interval must be positive")

        self._source = source
        self._interval = float(refresh_interval)

        self._lock = threading.Lock()
        self._snapshot: Optional[ExchangeSnapshot] = None
        self._generation = 0
        self._failures = 0
        self._last_success_at: Optional[datetime] = None
        self._last_error: Optional[BaseException] = None

        self._closed = threading.Event()
        self._initial_attempt = threading.Event()
        self._requests: "queue.Queue[Union[RefreshRequest, object]]" = queue.Queue()

        self._thread = threading.Thread(
            target=self._run,
            name=f"rate-cache-updater-{id(self):x}",
            daemon=True,
        )
        self._thread.start()

        if startup_timeout is None:
            startup_timeout = float(source.timeout) + 1.0
        if not self._initial_attempt.wait(startup_timeout):
            logger.warning(
                "Initial exchange list fetch still running after %.1fs, continuing startup",
                startup_timeout,
            )

    @classmethod
    def from_settings(cls, cfg=None) -> "RateCacheUpdater":
        """Build an updater for the configured HNB source."""
        from hnbrate.adapters.providers.hnb import HnbSource
        from hnbrate.config import settings

        cfg = cfg or settings
        source = HnbSource(
            url=cfg.source_url,
            timeout=cfg.http_timeout_seconds,
            encoding=cfg.source_encoding,
        )
        return cls(source, refresh_interval=cfg.refresh_interval_seconds)

    # ------------------------------------------------------------------ readers

    def latest_snapshot(self) -> ExchangeSnapshot:
        """
        Return the most recently fetched snapshot.

        Never performs network I/O.

        Raises:
            CacheClosedError: If the updater has been closed
            SnapshotUnavailableError: If no fetch has succeeded yet
        """
        if self._closed.is_set():
            raise CacheClosedError()
        with self._lock:
            snapshot = self._snapshot
            last_error = self._last_error
        if snapshot is None:
            raise SnapshotUnavailableError(last_error)
        return snapshot

    def status(self) -> UpdaterStatus:
        """Return a consistent view of the updater state."""
        with self._lock:
            snapshot = self._snapshot
            return UpdaterStatus(
                state=STATE_CLOSED if self._closed.is_set() else STATE_RUNNING,
                application_date=snapshot.application_date if snapshot else None,
                currencies=len(snapshot.rates) if snapshot else 0,
                generation=self._generation,
                failures=self._failures,
                last_success_at=self._last_success_at,
                last_error=str(self._last_error) if self._last_error else None,
            )

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    # ------------------------------------------------------------------ control

    def trigger_refresh(self, timeout: float = 1.0) -> RefreshRequest:
        """
        Ask the background thread to refresh now.

        Waits up to timeout seconds for the request to be picked up, not for
        it to finish. Use the returned request's completed event to wait for
        the outcome.

        Raises:
            CacheClosedError: If the updater has been closed
        """
        if self._closed.is_set():
            raise CacheClosedError()

        request = RefreshRequest()
        self._requests.put(request)
        if not request.started.wait(timeout):
            # Queued after the loop drained its queue on close
            if self._closed.is_set():
                raise CacheClosedError()
            logger.warning("Refresh request not picked up within %.1fs", timeout)
        return request

    def close(self, timeout: Optional[float] = None) -> None:
        """
        Stop the background thread. Reads fail from this point on.

        An in-flight fetch is not interrupted; its result is discarded.

        Args:
            timeout: Seconds to wait for the thread to exit (defaults to the source timeout plus one second)
        """
        if self._closed.is_set():
            return
        self._closed.set()
        self._requests.put(_STOP)

        if threading.current_thread() is self._thread:
            return
        if timeout is None:
            timeout = float(self._source.timeout) + 1.0
        self._thread.join(timeout)
        if self._thread.is_alive():
            logger.warning("Rate cache updater thread still busy after %.1fs, abandoning it", timeout)
        else:
            logger.info("Rate cache updater closed")

    def __enter__(self) -> "RateCacheUpdater":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # ------------------------------------------------------------------ background thread

    def _run(self) -> None:
        logger.info("Rate cache updater started (interval=%.0fs)", self._interval)
        try:
            self._refresh("startup")
        finally:
            self._initial_attempt.set()

        next_due = time.monotonic() + self._interval
        while not self._closed.is_set():
            wait = max(0.0, next_due - time.monotonic())
            try:
                item = self._requests.get(timeout=wait)
            except queue.Empty:
                self._refresh("scheduled")
                # Skip ticks missed while a slow fetch was running
                next_due += self._interval
                if next_due <= time.monotonic():
                    next_due = time.monotonic() + self._interval
                continue

            if item is _STOP:
                break

            request = item  # type: RefreshRequest
            request.started.set()
            try:
                request.succeeded = self._refresh(request.reason)
            finally:
                request.completed.set()

        self._release_pending()
        logger.info("Rate cache updater stopped")

    def _release_pending(self) -> None:
        # Wake up callers whose requests will never run
        while True:
            try:
                item = self._requests.get_nowait()
            except queue.Empty:
                return
            if isinstance(item, RefreshRequest):
                item.succeeded = False
                item.started.set()
                item.completed.set()

    def _refresh(self, reason: str) -> bool:
        """Fetch once and publish on success. Returns True if a snapshot was published."""
        try:
            snapshot = self._source.fetch()
        except SourceError as e:
            logger.warning("Exchange list refresh (%s) failed, keeping previous rates: %s", reason, e)
            self._record_failure(e)
            return False
        except Exception as e:
            logger.exception("Unexpected error during exchange list refresh (%s): %s", reason, e)
            self._record_failure(e)
            return False

        if self._closed.is_set():
            logger.info("Rate cache closed during refresh (%s), discarding result", reason)
            return False

        with self._lock:
            self._snapshot = snapshot
            self._generation += 1
            self._last_success_at = datetime.now(timezone.utc)
            self._last_error = None
            generation = self._generation

        logger.info(
            "Exchange rates updated (%s): date=%s, currencies=%d, generation=%d",
            reason, snapshot.application_date, len(snapshot.rates), generation,
        )
        return True

    def _record_failure(self, error: BaseException) -> None:
        with self._lock:
            self._failures += 1
            self._last_error = error

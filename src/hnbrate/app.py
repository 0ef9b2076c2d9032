# src/hnbrate/app.py
"""
Application Entry Point - Service Initialization and Startup

This module serves as the composition root of the service.
It wires settings, logging, the rate cache updater and the HTTP API.

Usage:
    python -m hnbrate                 # serve the JSON API
    python -m hnbrate --port 8080     # serve on another port
    python -m hnbrate --once          # print current rates and exit

Files that USE this module:
- python -m hnbrate (module entry point)
- hnbrate console script

Files that this module USES:
- hnbrate.shared.logging_conf (setup_logging for logging configuration)
- hnbrate.config (settings for configuration management)
- hnbrate.application.cache_updater (RateCacheUpdater)
- hnbrate.adapters.http.api (create_app)
- hnbrate.adapters.providers.hnb (HnbSource for --once)
- hnbrate.adapters.formatting.formatter (snapshot_lines for --once)
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

import uvicorn

from hnbrate.adapters.formatting.formatter import snapshot_lines
from hnbrate.adapters.http.api import create_app
from hnbrate.adapters.providers.hnb import HnbSource
from hnbrate.application.cache_updater import RateCacheUpdater
from hnbrate.config import settings
from hnbrate.domain.errors import SourceError
from hnbrate.shared.logging_conf import setup_logging

logger = logging.getLogger(__name__)


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="hnbrate", description="HNB exchange rates JSON service")
    parser.add_argument("--once", action="store_true", help="fetch once, print all rates and exit")
    parser.add_argument("--host", default=None, help=f"listen address (default: {settings.api_host})")
    parser.add_argument("--port", type=int, default=None, help=f"listen port (default: {settings.api_port})")
    return parser.parse_args(argv)


def print_rates() -> int:
    """Fetch the exchange list once and print every currency. Returns the exit status."""
    source = HnbSource()
    try:
        snapshot = source.fetch()
    except SourceError as e:
        logger.error("Could not fetch exchange rates: %s", e)
        return 1
    print(snapshot_lines(snapshot))
    return 0


def serve(host: str, port: int) -> None:
    """Run the updater and the HTTP API until the server stops."""
    updater = RateCacheUpdater.from_settings(settings)
    try:
        logger.info(
            "Starting API on %s:%d, source=%s, refresh every %d minutes",
            host, port, settings.source_url, settings.refresh_interval_minutes,
        )
        uvicorn.run(create_app(updater), host=host, port=port, log_config=None)
    finally:
        updater.close()


def main(argv: Optional[Sequence[str]] = None) -> None:
    """
    Initialize logging and run the requested mode.

    This function:
    1. Parses command line arguments
    2. Sets up logging from settings
    3. Either prints the current rates once or serves the API
    """
    args = _parse_args(argv)

    setup_logging(
        level=settings.log_level_value,
        log_file=settings.log_file,
        log_stdout=settings.log_stdout,
        max_bytes=settings.log_max_bytes,
        backup_count=settings.log_backup_count,
    )

    if args.once:
        sys.exit(print_rates())

    try:
        serve(args.host or settings.api_host, args.port or settings.api_port)
    except KeyboardInterrupt:
        logger.info("Service stopped by user (KeyboardInterrupt)")


if __name__ == "__main__":
    main()

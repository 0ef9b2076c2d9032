# src/hnbrate/shared/validators.py
"""
Input Validation Utilities - Configuration and Request Validation

This module provides validation functions for configuration values and
conversion requests: the remote source URL, currency codes and log levels.

Files that USE this module:
- hnbrate.config.settings (uses validation functions in Settings field validators)
- hnbrate.application.conversion_service (validates requested currency codes)

Files that this module USES:
- None (pure utility functions)
"""
import logging
import re
from urllib.parse import urlparse


def validate_source_url(url: str) -> bool:
    """
    Validate the remote exchange list URL.

    Args:
        url: URL to validate

    Returns:
        True if it is an absolute http(s) URL with a host, False otherwise
    """
    if not url:
        return False

    parsed = urlparse(url)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def validate_currency_code(code: str) -> bool:
    """
    Validate a 3-letter currency code (e.g. USD, EUR).

    Args:
        code: Currency code to validate (case-sensitive, uppercase expected)

    Returns:
        True if valid, False otherwise
    """
    if not code:
        return False

    return bool(re.fullmatch(r'[A-Z]{3}', code))


def validate_log_level(level: str) -> bool:
    """Check that level is a standard logging level name."""
    if not level:
        return False

    return level.upper() in ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def log_level_value(level: str) -> int:
    """Translate a level name such as 'info' to its logging constant."""
    return logging.getLevelName(level.upper())

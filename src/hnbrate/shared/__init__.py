# src/hnbrate/shared/__init__.py
"""
Shared Utilities - Cross-cutting Concerns

This package contains shared utilities used across all layers:
- Validation
- Logging configuration
"""

from hnbrate.shared.validators import (
    log_level_value,
    validate_currency_code,
    validate_log_level,
    validate_source_url,
)
from hnbrate.shared.logging_conf import setup_logging

__all__ = [
    "validate_source_url",
    "validate_currency_code",
    "validate_log_level",
    "log_level_value",
    "setup_logging",
]

# src/hnbrate/adapters/formatting/__init__.py
"""
Formatting Adapters - Output Representation

This package contains serialization of snapshots for the API and the CLI.
"""

from hnbrate.adapters.formatting.formatter import (
    conversion_document,
    fixed,
    rate_document,
    snapshot_document,
    snapshot_json,
    snapshot_lines,
    status_document,
)

__all__ = [
    "fixed",
    "rate_document",
    "snapshot_document",
    "snapshot_json",
    "snapshot_lines",
    "conversion_document",
    "status_document",
]

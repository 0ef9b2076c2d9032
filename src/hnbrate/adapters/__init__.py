# src/hnbrate/adapters/__init__.py
"""
Adapters Layer - External Interfaces

This package contains all adapters for external systems:
- Providers (remote exchange list and its parser)
- Formatting (JSON and text output)
- HTTP (JSON API)
"""

__all__ = []

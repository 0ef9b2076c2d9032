# src/hnbrate/adapters/http/__init__.py
"""
HTTP Adapters - JSON API

This package contains the FastAPI application serving the rate cache.
"""

from hnbrate.adapters.http.api import ConversionRequest, create_app

__all__ = ["ConversionRequest", "create_app"]

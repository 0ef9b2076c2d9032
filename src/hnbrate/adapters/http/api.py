# src/hnbrate/adapters/http/api.py
"""
HTTP API - JSON Endpoints for Exchange Rates

FastAPI application exposing the rate cache:
- GET /, GET /rates: latest exchange snapshot
- POST /convert: convert an amount with a published rate
- GET /health: updater status

The API never fetches rates itself; it only reads what the injected
RateCacheUpdater currently holds.

Files that USE this module:
- hnbrate.app (create_app is served with uvicorn)
- tests.test_api (endpoint tests)

Files that this module USES:
- hnbrate.application (RateCacheUpdater, ConversionService)
- hnbrate.adapters.formatting.formatter (JSON documents)
- hnbrate.domain.errors (error to status mapping)
"""
from __future__ import annotations

import logging
from decimal import Decimal

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from hnbrate import __version__
from hnbrate.adapters.formatting.formatter import (
    conversion_document,
    snapshot_document,
    status_document,
)
from hnbrate.application.cache_updater import STATE_RUNNING, RateCacheUpdater
from hnbrate.application.conversion_service import ConversionService
from hnbrate.domain.errors import CacheError, ConversionError

log = logging.getLogger(__name__)


class ConversionRequest(BaseModel):
    """Body of POST /convert."""
    # Bounded so results always fit the 6-digit output format
    value: Decimal = Field(..., max_digits=30, decimal_places=12, description="Amount to convert")
    currency: str = Field(..., min_length=1, max_length=8, description="3-letter currency code")
    rate: str = Field(default="middle", description="Rate type: buy, middle or sell")


def create_app(updater: RateCacheUpdater) -> FastAPI:
    """
    Build the API around an existing updater.

    Args:
        updater: Running rate cache (its lifecycle stays with the caller)

    Returns:
        FastAPI application
    """
    app = FastAPI(title="HNB exchange rates", version=__version__)
    conversions = ConversionService(updater)

    @app.exception_handler(CacheError)
    async def cache_error_handler(request: Request, exc: CacheError) -> JSONResponse:
        log.warning("Serving %s failed: %s", request.url.path, exc)
        return JSONResponse(status_code=503, content={"detail": str(exc)})

    @app.exception_handler(ConversionError)
    async def conversion_error_handler(request: Request, exc: ConversionError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.get("/")
    @app.get("/rates")
    def exchange_rates():
        return snapshot_document(updater.latest_snapshot())

    @app.post("/convert")
    def convert(body: ConversionRequest):
        conversion = conversions.convert(body.value, body.currency, body.rate)
        return conversion_document(conversion)

    @app.get("/health")
    def health():
        status = updater.status()
        code = 200 if status.has_snapshot and status.state == STATE_RUNNING else 503
        return JSONResponse(status_code=code, content=status_document(status))

    return app

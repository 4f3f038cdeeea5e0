"""Health check endpoint with store validation and caching."""

import secrets
import time
from typing import Any

from fastapi import Depends, FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse
from fastapi.security import APIKeyHeader
from prometheus_fastapi_instrumentator import Instrumentator

from src.research_notes.core.config import get_settings
from src.research_notes.core.exceptions import StoreError

# Health check caching
_health_cache: dict[str, Any] | None = None
_health_cache_time: float = 0


def reset_health_cache() -> None:
    """Reset health cache (for testing)."""
    global _health_cache, _health_cache_time
    _health_cache = None
    _health_cache_time = 0


def setup_health_endpoint(app: FastAPI) -> None:
    """Configure the health check endpoint."""

    @app.get("/health", tags=["health"])
    async def health(request: Request) -> JSONResponse:
        """Health check with store validation and caching."""
        global _health_cache, _health_cache_time

        now = time.time()
        ttl = get_settings().health_cache_ttl

        if _health_cache and (now - _health_cache_time) < ttl:
            cached_response = _health_cache.copy()
            cached_response["cached"] = True
            cached_response["cache_age_seconds"] = round(now - _health_cache_time, 1)
            status_code = 200 if cached_response["status"] == "healthy" else 503
            return JSONResponse(content=cached_response, status_code=status_code)

        health_status: dict[str, Any] = {
            "status": "healthy",
            "database": "unknown",
            "cached": False,
            "timestamp": now,
        }

        try:
            await request.app.state.store.ping()
            health_status["database"] = "healthy"
        except StoreError as e:
            health_status["database"] = f"unhealthy: {e.__cause__!s}"
            health_status["status"] = "unhealthy"

        _health_cache = health_status
        _health_cache_time = now

        status_code = 200 if health_status["status"] == "healthy" else 503
        return JSONResponse(content=health_status, status_code=status_code)


def setup_metrics(app: FastAPI) -> None:
    """Configure Prometheus metrics with optional API key protection."""
    settings = get_settings()
    instrumentator = Instrumentator().instrument(app)

    if settings.metrics_api_key:
        api_key_header = APIKeyHeader(name="X-Metrics-Key", auto_error=False)

        async def verify_metrics_key(
            api_key: str | None = Depends(api_key_header),
        ) -> None:
            if (
                api_key is None
                or settings.metrics_api_key is None
                or not secrets.compare_digest(api_key, settings.metrics_api_key)
            ):
                raise HTTPException(
                    status_code=status.HTTP_401_UNAUTHORIZED,
                    detail="Invalid or missing metrics API key",
                )

        instrumentator.expose(app, endpoint="/metrics", dependencies=[Depends(verify_metrics_key)])
    else:
        instrumentator.expose(app, endpoint="/metrics")

"""Database engine construction."""

from typing import Any

from sqlalchemy import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from src.research_notes.core.config import Settings


def create_engine_from_settings(settings: Settings) -> AsyncEngine:
    """Build the async engine for the configured table store.

    Pool sizing only applies to server databases; SQLite uses its own pool.
    """
    url = make_url(settings.database_url)
    kwargs: dict[str, Any] = {"echo": settings.database_echo, "pool_pre_ping": True}
    if url.get_backend_name() != "sqlite":
        kwargs["pool_size"] = settings.database_pool_size
        kwargs["max_overflow"] = settings.database_max_overflow
    return create_async_engine(url, **kwargs)

"""
Dependency wiring for the FastAPI app.
"""

from __future__ import annotations

from typing import Optional

from fastapi import Header

from service.config import get_settings
from service.db import DbClient, InMemoryDbClient, PostgresDbClient

_db_client: DbClient | None = None


def get_db_client() -> DbClient:
    """
    Return a singleton DB client so quiz and challenge state persists across requests.
    """
    global _db_client
    if _db_client:
        return _db_client

    settings = get_settings()
    if settings.use_in_memory_backends or not settings.database_url:
        _db_client = InMemoryDbClient()
    else:
        _db_client = PostgresDbClient(settings.database_url)
    return _db_client


def get_user_id(x_user_id: Optional[str] = Header(default=None)) -> Optional[str]:
    """Caller id forwarded by the gateway, or None for anonymous calls."""
    return x_user_id or None

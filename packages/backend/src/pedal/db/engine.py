"""Async SQLAlchemy engine for the optional relational store.

Learn: The stores are in memory; Postgres is only probed for liveness
by /health and /admin/stats. With PEDAL_DATABASE_URL unset no engine
is created and the probe reports "not_configured".

create_async_engine doesn't connect until first use, so building the
engine at startup never fails because the database is down.
"""

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from pedal.config import settings


def create_engine(url: Optional[str] = None) -> Optional[AsyncEngine]:
    """Build the engine, or return None when no database is configured."""
    url = url if url is not None else settings.database_url
    if not url:
        return None
    # Small pool: only health probes use it
    return create_async_engine(
        url,
        echo=settings.debug,
        pool_size=2,
        max_overflow=0,
        pool_pre_ping=True,
    )

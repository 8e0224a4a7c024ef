"""Dependency liveness probes.

Learn: Each probe answers "up", "down" or "not_configured" and never
raises. A slow dependency is cut off after a short timeout (2s by
default) — a probe is a status annotation, never a reason to fail
the request that asked for it.
"""

import asyncio
from typing import Optional

import redis.asyncio as aioredis
import structlog
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine

from pedal.cache import get_redis

logger = structlog.get_logger()

UP = "up"
DOWN = "down"
NOT_CONFIGURED = "not_configured"


async def _select_one(engine: AsyncEngine) -> None:
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))


async def ping_database(engine: Optional[AsyncEngine], timeout: float) -> str:
    if engine is None:
        return NOT_CONFIGURED
    try:
        await asyncio.wait_for(_select_one(engine), timeout=timeout)
        return UP
    except Exception as e:
        logger.warning("health.db_down", error=str(e))
        return DOWN


async def ping_cache(client: Optional[aioredis.Redis], timeout: float) -> str:
    if client is None:
        return NOT_CONFIGURED
    try:
        await asyncio.wait_for(client.ping(), timeout=timeout)
        return UP
    except Exception as e:
        logger.warning("health.redis_down", error=str(e))
        return DOWN


def _configured_redis() -> Optional[aioredis.Redis]:
    try:
        return get_redis()
    except RuntimeError:
        return None


async def dependency_status(engine: Optional[AsyncEngine], timeout: float) -> dict:
    """Probe database and cache concurrently."""
    db, cache = await asyncio.gather(
        ping_database(engine, timeout),
        ping_cache(_configured_redis(), timeout),
    )
    return {"db": db, "redis": cache}

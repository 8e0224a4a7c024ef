"""Redis connection — optional cache used by rate limiting and health.

Learn: Redis is optional. With PEDAL_REDIS_URL unset the client is never
created, get_redis() raises, and everything that uses it degrades:
rate limiting is skipped and /health reports "not_configured".

If the URL is set but Redis is down at startup, the client is still
kept — later pings report "down" instead of "not_configured".
"""

from typing import Optional

import redis.asyncio as aioredis

from pedal.config import settings

# Global Redis connection pool (initialized in lifespan)
_redis: Optional[aioredis.Redis] = None


async def init_redis(url: Optional[str] = None) -> Optional[aioredis.Redis]:
    """Create the Redis client and verify it answers a PING.

    Returns None when no URL is configured. Raises if the PING fails
    (the client stays registered so health checks can report it down).
    """
    global _redis
    url = url if url is not None else settings.redis_url
    if not url:
        return None
    _redis = aioredis.from_url(url, encoding="utf-8", decode_responses=True)
    await _redis.ping()
    return _redis


async def close_redis() -> None:
    """Close the Redis connection pool."""
    global _redis
    if _redis:
        await _redis.aclose()
        _redis = None


def get_redis() -> aioredis.Redis:
    """Get the Redis connection (must be initialized first)."""
    if _redis is None:
        raise RuntimeError("Redis not initialized. Set PEDAL_REDIS_URL.")
    return _redis

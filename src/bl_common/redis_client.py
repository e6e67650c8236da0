"""Shared asyncio Redis client. Only the rate limiter talks to Redis;
balances never leave PostgreSQL."""

import redis.asyncio as aioredis

from config.settings import settings

_client: aioredis.Redis | None = None


async def get_redis() -> aioredis.Redis:
    """Lazily build one pooled client per process."""
    global _client  # noqa: PLW0603
    if _client is None:
        _client = aioredis.from_url(
            settings.REDIS_URL,
            decode_responses=True,
            socket_timeout=settings.REDIS_SOCKET_TIMEOUT,
        )
    return _client


async def ping_redis() -> None:
    """Fail fast at startup when rate limiting is on but Redis is unreachable."""
    client = await get_redis()
    await client.ping()


async def close_redis() -> None:
    global _client  # noqa: PLW0603
    if _client is None:
        return
    await _client.aclose()
    _client = None

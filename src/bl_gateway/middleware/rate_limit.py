"""Rate limiting middleware — Redis fixed-window counter per client IP.

Key pattern: "ratelimit:{client_ip}:{epoch_minute}". The first hit in a window
sets a 60s TTL; hits past the limit get a 429 envelope with Retry-After.
/health is never limited.

Exceptions raised inside BaseHTTPMiddleware bypass the app's AppError
handler, so the 429 response is built here directly.
"""

import logging
import time
from collections.abc import Awaitable, Callable

import redis.asyncio as aioredis
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from src.bl_common.errors import RateLimitError
from src.bl_common.redis_client import get_redis
from src.bl_common.response import error_response

logger = logging.getLogger(__name__)

_WINDOW_SECONDS = 60
_EXEMPT_PATHS = frozenset({"/health"})


def _client_ip(request: Request) -> str:
    """First hop of X-Forwarded-For when behind a proxy, else the socket peer."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


class RateLimitMiddleware(BaseHTTPMiddleware):
    def __init__(
        self,
        app: ASGIApp,
        limit_per_minute: int,
        enabled: bool = True,
        redis_factory: Callable[[], Awaitable[aioredis.Redis]] = get_redis,
    ) -> None:
        super().__init__(app)
        self._limit = limit_per_minute
        self._enabled = enabled
        self._redis_factory = redis_factory

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if not self._enabled or request.url.path in _EXEMPT_PATHS:
            return await call_next(request)

        now = int(time.time())
        window = now // _WINDOW_SECONDS
        key = f"ratelimit:{_client_ip(request)}:{window}"

        redis = await self._redis_factory()
        count = await redis.incr(key)
        if count == 1:
            await redis.expire(key, _WINDOW_SECONDS)

        if count > self._limit:
            retry_after = _WINDOW_SECONDS - (now % _WINDOW_SECONDS)
            logger.warning("Rate limit exceeded: key=%s count=%d", key, count)
            err = RateLimitError()
            resp = error_response(err.code, err.message, request)
            return JSONResponse(
                status_code=err.http_status,
                content=resp.model_dump(),
                headers={"Retry-After": str(retry_after)},
            )
        return await call_next(request)

"""FastAPI application entry point.

Run with: uvicorn src.main:app --reload --port 8000
"""

# ruff: noqa: E402  -- uvloop.install() must run before other imports

import uvloop

uvloop.install()

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy import text

from config.settings import settings
from src.bl_bankroll.api.router import router as bankroll_router
from src.bl_common.database import engine
from src.bl_common.errors import AppError, ValidationError
from src.bl_common.redis_client import close_redis, ping_redis
from src.bl_common.response import error_response
from src.bl_gateway.api.router import router as auth_router
from src.bl_gateway.middleware.rate_limit import RateLimitMiddleware
from src.bl_gateway.middleware.request_log import RequestLogMiddleware
from src.bl_query.api.router import router as query_router
from src.bl_wager.api.router import router as wager_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

APP_VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))
    if settings.RATE_LIMIT_ENABLED:
        await ping_redis()
    logger.info("%s %s started", settings.APP_NAME, APP_VERSION)
    yield
    await engine.dispose()
    await close_redis()


app = FastAPI(title=settings.APP_NAME, version=APP_VERSION, lifespan=lifespan)

# Last added runs first: the request log wraps the rate limiter
app.add_middleware(
    RateLimitMiddleware,
    limit_per_minute=settings.RATE_LIMIT_PER_MINUTE,
    enabled=settings.RATE_LIMIT_ENABLED,
)
app.add_middleware(RequestLogMiddleware)


def _envelope(request: Request, exc: AppError) -> JSONResponse:
    body = error_response(exc.code, exc.message, request)
    return JSONResponse(status_code=exc.http_status, content=body.model_dump())


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.http_status >= 500:
        logger.warning("Request failed: code=%d %s", exc.code, exc.message)
    return _envelope(request, exc)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Unparseable bodies and params get the same 2001 envelope as domain validation."""
    errors = exc.errors()
    first = errors[0] if errors else {}
    loc = [str(p) for p in first.get("loc", ()) if p not in ("body", "query", "path")]
    field = ".".join(loc) or "request"
    return _envelope(request, ValidationError(field, first.get("msg", "invalid value")))


for router in (auth_router, bankroll_router, query_router, wager_router):
    app.include_router(router, prefix="/api/v1")


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "version": APP_VERSION}

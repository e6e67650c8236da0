"""Fixtures for the live-database suite (PostgreSQL migrated to head).

The SQLAlchemy engine is created at import time and bound to the first event
loop that uses it, so every fixture and test here runs on the session loop.
"""

import secrets

import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from src.main import app


async def _register_and_login(api: AsyncClient) -> dict[str, str]:
    suffix = secrets.token_hex(4)
    credentials = {"username": f"punter_{suffix}", "password": "Ledger1pass"}
    await api.post(
        "/api/v1/auth/register",
        json={**credentials, "email": f"punter_{suffix}@example.com"},
    )
    login = await api.post("/api/v1/auth/login", json=credentials)
    return {"Authorization": "Bearer " + login.json()["data"]["access_token"]}


@pytest_asyncio.fixture(loop_scope="session", scope="session")
async def client() -> AsyncClient:  # type: ignore[override]
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://ledger") as api:
        yield api


@pytest_asyncio.fixture(loop_scope="session", scope="session")
async def auth_headers(client: AsyncClient) -> dict[str, str]:
    return await _register_and_login(client)


@pytest_asyncio.fixture(loop_scope="session", scope="session")
async def other_auth_headers(client: AsyncClient) -> dict[str, str]:
    """A second, unrelated owner."""
    return await _register_and_login(client)

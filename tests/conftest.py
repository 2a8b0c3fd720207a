"""Pytest configuration and fixtures."""

import asyncio
import os
import sys

# Point the app at a throwaway database and header-based identity before
# config is imported anywhere
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("AUTH_MODE", "header")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import models  # noqa: F401
from auth.identity import HeaderIdentityResolver
from db import Base, enable_sqlite_foreign_keys
from main import app

# Fix Windows asyncio event loop
if sys.platform == "win32":
    asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

# In-memory SQLite unless a real database is supplied
TEST_DATABASE_URL = os.environ.get("TEST_DATABASE_URL", "sqlite+aiosqlite:///:memory:")

USER_A = "user-a"
USER_B = "user-b"


@pytest_asyncio.fixture
async def test_engine():
    """Create a fresh schema for each test."""
    engine_kwargs = {}
    if TEST_DATABASE_URL.startswith("sqlite"):
        # One shared connection so every session sees the same in-memory database
        engine_kwargs["poolclass"] = StaticPool

    engine = create_async_engine(TEST_DATABASE_URL, echo=False, **engine_kwargs)
    enable_sqlite_foreign_keys(engine)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest_asyncio.fixture
async def db_session(session_factory):
    """Create a test database session."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def client(session_factory):
    """
    HTTP client for the app, with a fresh session per request and identity
    taken from the X-User-Id header.
    """
    from api.deps import get_db

    async def _get_db():
        async with session_factory() as session:
            yield session

    previous_state = (app.state.identity_resolver, app.state.rate_limiter)
    app.state.identity_resolver = HeaderIdentityResolver()
    app.state.rate_limiter = None
    app.dependency_overrides[get_db] = _get_db

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as http_client:
        yield http_client

    app.dependency_overrides.clear()
    app.state.identity_resolver, app.state.rate_limiter = previous_state


def make_auth_headers(user_id: str) -> dict:
    """Headers an upstream gateway would set for an authenticated caller."""
    return {"X-User-Id": user_id}


@pytest.fixture
def headers_a():
    return make_auth_headers(USER_A)


@pytest.fixture
def headers_b():
    return make_auth_headers(USER_B)


@pytest.fixture
def create_project_via_api(client):
    """Factory: create a project over HTTP and return its JSON."""
    async def _create(headers, title="Launch", description=None):
        body = {"title": title}
        if description is not None:
            body["description"] = description
        response = await client.post("/api/v1/projects", json=body, headers=headers)
        assert response.status_code == 201, response.text
        return response.json()["data"]["project"]
    return _create


@pytest.fixture
def create_task_via_api(client):
    """Factory: create a task over HTTP and return its JSON."""
    async def _create(headers, project_id, title="Write spec", **fields):
        body = {"title": title, "projectId": project_id, **fields}
        response = await client.post("/api/v1/tasks", json=body, headers=headers)
        assert response.status_code == 201, response.text
        return response.json()["data"]["task"]
    return _create

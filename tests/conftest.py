"""Test fixtures and configuration.

Every test gets its own application, built by ``create_app`` around an
in-memory SQLite database. The lifespan is not run by ``ASGITransport``, so
fixtures create the tables themselves.
"""

import os
from uuid import uuid4

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from movie_api.boot import init_db
from movie_api.config import Settings
from movie_api.context import AppContext
from movie_api.main import create_app
from movie_api.models import User
from movie_api.services import credentials
from tests.factories import ADMIN_PASSWORD, USER_PASSWORD, bearer, make_settings

os.environ["ENVIRONMENT"] = "testing"


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def context(app) -> AppContext:
    return app.state.context


@pytest_asyncio.fixture
async def db_engine(context):
    """Create the schema on the per-test in-memory database."""
    await init_db(context)
    yield context.engine
    await context.dispose()


@pytest_asyncio.fixture
async def db(db_engine, context):
    async with context.session_maker() as session:
        yield session


@pytest_asyncio.fixture
async def test_user(db) -> User:
    """Registered non-admin user."""
    return await credentials.register(
        db,
        name="Test User",
        email=f"test-{uuid4()}@example.com",
        password=USER_PASSWORD,
    )


@pytest_asyncio.fixture
async def admin_user(db) -> User:
    return await credentials.register(
        db,
        name="Test Admin",
        email=f"admin-{uuid4()}@example.com",
        password=ADMIN_PASSWORD,
        is_admin=True,
    )


@pytest.fixture
def user_token(context, test_user) -> str:
    return context.tokens.issue(test_user.id)


@pytest.fixture
def admin_token(context, admin_user) -> str:
    return context.tokens.issue(admin_user.id)


@pytest_asyncio.fixture
async def public_client(app, db_engine):
    """Async test client without auth headers."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def client(app, db_engine, user_token):
    """Async test client authenticated as a non-admin user."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test", headers=bearer(user_token)) as client:
        yield client


@pytest_asyncio.fixture
async def admin_client(app, db_engine, admin_token):
    """Async test client authenticated as an admin."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test", headers=bearer(admin_token)) as client:
        yield client

"""Shared test fixtures for the investor portal API tests.

API tests run against a fresh in-memory store per test; storage contract
tests run against both backends, the SQL one on a throwaway SQLite file.
"""

import os

os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-not-for-production")

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from app.core.database import create_engine, create_session_maker, init_models
from app.main import app
from app.models.user import UserRole
from app.schemas.auth import UserCreate
from app.services.auth import create_access_token, hash_password
from app.storage import DatabaseStorage, MemoryStorage


@pytest.fixture
def storage():
    """In-memory store wired into the app for the duration of one test."""
    store = MemoryStorage()
    app.state.storage = store
    yield store
    del app.state.storage


@pytest_asyncio.fixture(params=["memory", "sqlite"])
async def backend(request, tmp_path):
    """Each storage backend in turn, for contract tests."""
    if request.param == "memory":
        yield MemoryStorage()
        return

    engine = create_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    await init_models(engine)
    store = DatabaseStorage(create_session_maker(engine), engine=engine)
    yield store
    await store.close()


@pytest_asyncio.fixture
async def client(storage):
    """Async HTTP test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


async def make_user(storage, username: str, role: UserRole = UserRole.LEAD, password: str = "testpass123"):
    return await storage.create_user(UserCreate(
        username=username,
        email=f"{username}@example.com",
        password=hash_password(password),
        first_name=username.title(),
        role=role,
    ))


def auth_headers(user) -> dict:
    token = create_access_token(data={"sub": str(user.id), "role": user.role})
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def admin_user(storage):
    return await make_user(storage, "admin", UserRole.ADMIN)


@pytest_asyncio.fixture
async def investor_user(storage):
    return await make_user(storage, "investor", UserRole.INVESTOR)


@pytest.fixture
def admin_headers(admin_user):
    """Bearer header for an admin account."""
    return auth_headers(admin_user)


@pytest.fixture
def investor_headers(investor_user):
    """Bearer header for an investor account."""
    return auth_headers(investor_user)

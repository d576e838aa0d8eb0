"""Shared fixtures: an in-process app backed by a throwaway SQLite file."""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET", "test-secret-for-the-taskboard-suite")

import httpx
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from taskboard.client.api import TaskBoardClient
from taskboard.db.base import Base
from taskboard.db import models  # noqa: F401
from taskboard.db.session import get_db
from taskboard.main import app


@pytest_asyncio.fixture
async def session_factory(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    await engine.dispose()


@pytest_asyncio.fixture
async def transport(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    yield httpx.ASGITransport(app=app)
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(transport):
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as c:
        yield c


async def register_and_login(client, username: str, password: str = "s3cret") -> dict:
    res = await client.post(
        "/api/auth/register",
        json={
            "fullName": username.title(),
            "username": username,
            "email": f"{username}@example.com",
            "password": password,
        },
    )
    assert res.status_code == 201, res.text
    res = await client.post(
        "/api/auth/login", json={"username": username, "password": password}
    )
    assert res.status_code == 200, res.text
    return {"Authorization": f"Bearer {res.json()['token']}"}


@pytest_asyncio.fixture
async def auth_headers(client):
    return await register_and_login(client, "alice")


@pytest_asyncio.fixture
async def other_headers(client):
    return await register_and_login(client, "bob")


@pytest_asyncio.fixture
async def api_client(transport):
    async with TaskBoardClient(base_url="http://testserver/api", transport=transport) as c:
        yield c

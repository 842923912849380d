"""
pytest конфигурация - общие fixtures
"""
import os

os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")

import pytest
from typing import AsyncGenerator
from httpx import ASGITransport, AsyncClient
from sqlalchemy import pool
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from jotter.core.db import Base, create_engine, create_sessionmaker, get_db
from jotter.db.repositories.user_repository import UserRepository
from jotter.domains.identity.entities import User
from jotter.main import app
import jotter.db.models  # noqa: F401


@pytest.fixture
async def engine(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    """Файловая SQLite база на тест: несколько сессий видят одни данные"""
    test_engine = create_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'jotter-test.db'}", poolclass=pool.NullPool
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine) -> async_sessionmaker:
    return create_sessionmaker(engine)


@pytest.fixture
async def session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as db_session:
        yield db_session


async def _create_user(session_factory, external_id: str, email: str, name: str) -> User:
    async with session_factory() as db_session:
        user = await UserRepository(db_session).create(
            User.create_user(external_id=external_id, email=email, name=name)
        )
        await db_session.commit()
        return user


@pytest.fixture
async def owner(session_factory) -> User:
    return await _create_user(session_factory, "owner-sub", "owner@example.com", "Olga Owner")


@pytest.fixture
async def stranger(session_factory) -> User:
    return await _create_user(session_factory, "stranger-sub", "stranger@example.com", "")


@pytest.fixture
async def client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    async def override_get_db():
        async with session_factory() as db_session:
            try:
                yield db_session
            except Exception:
                await db_session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as test_client:
        yield test_client
    app.dependency_overrides.clear()

"""
Pytest fixtures - test DB, client, auth (TDD/BDD support).
Challenge: Isolated tests; no PostgreSQL/Redis needed for the suite.
"""

import os

# Must be set before app modules read settings
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test_app.db")
os.environ.setdefault("CACHE_ENABLED", "false")

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool, StaticPool

from app.db.base import Base
from app.main import app
from app.db.session import discard_after_commit, get_db, run_after_commit
from app.db.models import User
from app.core.security import hash_password
from app.services.auth_service import issue_token

# In-memory SQLite per test: fast and isolated
TEST_DATABASE_URL = "sqlite+aiosqlite://"


def enable_sqlite_savepoints_and_fks(engine: AsyncEngine) -> None:
    """SQLite needs explicit BEGIN for SAVEPOINT to work and PRAGMA for foreign keys."""

    @event.listens_for(engine.sync_engine, "connect")
    def do_connect(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def do_begin(conn):
        conn.exec_driver_sql("BEGIN")


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
    )
    enable_sqlite_savepoints_and_fks(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session(engine) -> AsyncGenerator[AsyncSession, None]:
    async_session = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False
    )
    async with async_session() as s:
        yield s


@pytest_asyncio.fixture
async def client(session: AsyncSession):
    async def override_get_db():
        yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
    app.dependency_overrides.clear()


async def _make_user(session: AsyncSession, username: str, email: str) -> User:
    user = User(
        username=username,
        email=email,
        password_hash=hash_password("password123"),
    )
    session.add(user)
    await session.flush()
    await session.refresh(user)
    return user


@pytest_asyncio.fixture
async def test_user(session: AsyncSession) -> User:
    return await _make_user(session, "alice", "alice@example.com")


@pytest_asyncio.fixture
async def other_user(session: AsyncSession) -> User:
    return await _make_user(session, "bob", "bob@example.com")


@pytest.fixture
def auth_headers(test_user: User) -> dict:
    return {"Authorization": f"Bearer {issue_token(test_user)}"}


@pytest.fixture
def other_headers(other_user: User) -> dict:
    return {"Authorization": f"Bearer {issue_token(other_user)}"}


@pytest.fixture
def bdd_client(tmp_path):
    """Sync TestClient over a file DB with real commit/rollback per request (BDD steps).

    NullPool opens a fresh aiosqlite connection inside TestClient's own event loop.
    """
    db_file = tmp_path / "bdd.db"
    sync_engine = create_engine(f"sqlite:///{db_file}")
    Base.metadata.create_all(sync_engine)
    sync_engine.dispose()

    async_engine = create_async_engine(f"sqlite+aiosqlite:///{db_file}", poolclass=NullPool)
    enable_sqlite_savepoints_and_fks(async_engine)
    session_maker = async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_db():
        async with session_maker() as s:
            try:
                yield s
                await s.commit()
            except Exception:
                await s.rollback()
                discard_after_commit(s)
                raise
            else:
                await run_after_commit(s)

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as tc:
        yield tc
    app.dependency_overrides.clear()

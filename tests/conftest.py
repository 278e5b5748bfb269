"""Test infrastructure — per-test SQLite DB, session, and httpx client fixtures.

Each test gets its own SQLite file (aiosqlite driver) with the schema
created from the ORM metadata, so no external database is needed.
"""

from collections.abc import AsyncGenerator
from datetime import date
from decimal import Decimal
from pathlib import Path

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from app.database import Base, get_db
from app.main import app
from app.models import *  # noqa: F401,F403  register all models with metadata
from app.models.asset import Asset
from app.models.user import User
from app.utils.jwt import create_access_token
from app.utils.password import hash_password


# ---------------------------------------------------------------------------
# Function-scoped: engine, session factory, session, client
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine, None]:
    """Async engine on a fresh SQLite file with all tables created."""
    eng = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", echo=False)
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Session shared by the test body and the API client."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def client(db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """FastAPI test client with the DB session dependency overridden."""
    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    app.dependency_overrides[get_db] = _override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Helper fixtures: test data
# ---------------------------------------------------------------------------
async def _create_user(db: AsyncSession, username: str, full_name: str, role: str) -> User:
    user = User(
        username=username,
        full_name=full_name,
        role=role,
        password_hash=hash_password(f"{username}123!"),
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


@pytest_asyncio.fixture
async def employee(db: AsyncSession) -> User:
    return await _create_user(db, "employee", "Erin Employee", "employee")


@pytest_asyncio.fixture
async def other_employee(db: AsyncSession) -> User:
    return await _create_user(db, "employee2", "Oscar Other", "employee")


@pytest_asyncio.fixture
async def technician(db: AsyncSession) -> User:
    return await _create_user(db, "technician", "Tara Technician", "technician")


@pytest_asyncio.fixture
async def manager(db: AsyncSession) -> User:
    return await _create_user(db, "manager", "Max Manager", "manager")


@pytest_asyncio.fixture
async def asset(db: AsyncSession) -> Asset:
    a = Asset(
        asset_code="EQP-001",
        name="Air Compressor",
        category="equipment",
        location="Plant 1",
        purchase_date=date(2022, 1, 15),
        purchase_cost=Decimal("15000.00"),
        current_value=Decimal("12000.00"),
        health_score=85,
    )
    db.add(a)
    await db.commit()
    await db.refresh(a)
    return a


def make_token(user: User) -> str:
    """Access token for a test user."""
    return create_access_token({"sub": str(user.id), "role": user.role})


def auth_header(user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token(user)}"}

"""
Timeledger Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: AsyncMock session for pure unit tests
    ├── db_engine:       in-memory SQLite engine with every table created
    ├── db_session:      AsyncSession bound to db_engine
    ├── seed:            helpers that insert users/clients/projects/... rows
    └── test_client:     HTTPX AsyncClient with get_db_session overridden

Each test gets a brand-new in-memory database, so tests never see each
other's rows.
"""

import os

# Override settings for testing BEFORE any app imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["ENVIRONMENT"] = "development"

import datetime as dt  # noqa: E402
from decimal import Decimal  # noqa: E402
from typing import Optional  # noqa: E402
from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

import app.models  # noqa: E402,F401
from app.database import Base, get_db_session  # noqa: E402
from app.models import (  # noqa: E402
    ActivityLog,
    ActivityType,
    Client,
    ClientNote,
    Position,
    Project,
    TimeEntry,
    User,
    UserRole,
)


# ══════════════════════════════════════════════════════════════════════════
# Mocked session (unit tests)
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    A mock AsyncSession.

    Usage:
        async def test_db_failure(mock_db_session):
            mock_db_session.execute.side_effect = OperationalError(...)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.scalar = AsyncMock()
    session.get = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


# ══════════════════════════════════════════════════════════════════════════
# Real session over in-memory SQLite (integration tests)
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db_engine():
    # StaticPool keeps the single in-memory connection alive across sessions
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine):
    factory = async_sessionmaker(db_engine, expire_on_commit=False)
    async with factory() as session:
        yield session


class Seeder:
    """Inserts rows with sensible defaults; each call flushes and returns the ORM object."""

    def __init__(self, session):
        self.session = session
        self._counter = 0

    async def _add(self, obj):
        self.session.add(obj)
        await self.session.flush()
        return obj

    def _next(self) -> int:
        self._counter += 1
        return self._counter

    async def user(
        self,
        name: str = "Ana Consultant",
        email: Optional[str] = None,
        role: UserRole = UserRole.CONSULTANT,
        hourly_rate: Optional[str] = None,
    ) -> User:
        n = self._next()
        return await self._add(
            User(
                name=name,
                email=email or f"user{n}@example.com",
                role=role,
                hourly_rate=Decimal(hourly_rate) if hourly_rate else None,
            )
        )

    async def client(self, name: str = "Acme Corp") -> Client:
        return await self._add(Client(name=name, industry="Manufacturing"))

    async def project(
        self, client: Client, name: str = "Website Relaunch", budget: Optional[str] = None
    ) -> Project:
        return await self._add(
            Project(
                client_id=client.id,
                name=name,
                budget=Decimal(budget) if budget else None,
            )
        )

    async def position(
        self,
        project: Project,
        name: str = "Senior Developer",
        budget: Optional[str] = None,
        hourly_rate: Optional[str] = None,
    ) -> Position:
        return await self._add(
            Position(
                project_id=project.id,
                name=name,
                budget=Decimal(budget) if budget else None,
                hourly_rate=Decimal(hourly_rate) if hourly_rate else None,
            )
        )

    async def entry(
        self,
        user: User,
        position: Position,
        hours: str,
        date: dt.date = dt.date(2024, 1, 15),
        billable: bool = True,
        description: Optional[str] = None,
    ) -> TimeEntry:
        return await self._add(
            TimeEntry(
                user_id=user.id,
                position_id=position.id,
                hours=Decimal(hours),
                date=date,
                billable=billable,
                description=description,
            )
        )

    async def note(self, client: Client, user: User, text: str) -> ClientNote:
        return await self._add(ClientNote(client_id=client.id, user_id=user.id, note=text))

    async def activity(
        self,
        client: Client,
        user: User,
        activity_date: dt.date,
        activity_type: ActivityType = ActivityType.CALL,
        description: str = "Kick-off call",
    ) -> ActivityLog:
        return await self._add(
            ActivityLog(
                client_id=client.id,
                user_id=user.id,
                activity_type=activity_type,
                description=description,
                activity_date=activity_date,
            )
        )


@pytest.fixture
def seed(db_session):
    return Seeder(db_session)


# ══════════════════════════════════════════════════════════════════════════
# HTTP client
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def test_client(db_session):
    """
    HTTPX AsyncClient talking to the FastAPI app over ASGITransport.

    Requests share the test's db_session, so rows created through `seed`
    are visible to the API and vice versa.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from app.main import app

    # No commit/rollback: the test owns the transaction and its seeded rows
    async def override_get_db_session():
        yield db_session

    app.dependency_overrides[get_db_session] = override_get_db_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()

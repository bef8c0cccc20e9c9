"""Service test fixtures — async DB + FastAPI test client + seeded rounds.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - db_manager patched so the readiness probe sees the test engine

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
    - Rounds seeded relative to the real clock: routes use wall-clock time
"""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

import app.models  # noqa: F401
from app.db.base import Base
from app.infrastructure.database import get_db, DatabaseSessionManager
from app.models.funding_round import FundingRound
from app.models.project import Project
import app.infrastructure.database as db_module
from app.main import app


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


async def _seed_round(test_db, start_offset, end_offset, **fields):
    now = datetime.now(timezone.utc)
    round_ = FundingRound(
        name=fields.pop("name", "Test Round"),
        start_date=now + start_offset,
        end_date=now + end_offset,
        total_pool=fields.pop("total_pool", 100.0),
        funding_budget_per_agent=fields.pop("funding_budget_per_agent", 50.0),
        status=fields.pop("status", "active"),
    )
    test_db.add(round_)
    await test_db.commit()
    await test_db.refresh(round_)
    return round_


@pytest.fixture
async def active_round(test_db):
    """Round spanning now: pool 100, budget 50 per agent."""
    return await _seed_round(test_db, timedelta(days=-1), timedelta(days=1))


@pytest.fixture
async def completed_round(test_db):
    """Round that ended yesterday."""
    return await _seed_round(
        test_db, timedelta(days=-7), timedelta(days=-1),
        name="Past Round", status="active",
    )


@pytest.fixture
async def upcoming_round(test_db):
    return await _seed_round(
        test_db, timedelta(days=2), timedelta(days=9),
        name="Future Round", status="upcoming",
    )


@pytest.fixture
def make_project(test_db):
    """Factory: insert a project into the given round."""
    async def _make(round_, title="Project", nominator="nominator"):
        project = Project(
            title=title,
            description=f"{title} description",
            nominator_agent=nominator,
            round_id=round_.id,
        )
        test_db.add(project)
        await test_db.commit()
        await test_db.refresh(project)
        return project
    return _make


@pytest.fixture
def captured_sql(test_engine):
    """Statements executed on the test engine, in order."""
    statements: list[str] = []

    def _record(conn, cursor, statement, parameters, context, executemany):
        statements.append(statement)

    event.listen(test_engine.sync_engine, "before_cursor_execute", _record)
    yield statements
    event.remove(test_engine.sync_engine, "before_cursor_execute", _record)

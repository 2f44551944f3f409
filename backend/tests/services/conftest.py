"""Service test fixtures — file-backed SQLite store, feed, service, and API client.

Invariants:
    - Every test gets a fresh SQLite database file under tmp_path
    - The clock is fixed and advanced explicitly (FakeClock)
    - get_chore_service dependency overridden to use the test service
    - db_manager patched so the readiness probe checks the test database

Design Decisions:
    - File database instead of :memory: — aiosqlite shares one connection for
      :memory:, which would serialize the concurrent-writer tests into one transaction
    - The feed is closed on teardown so no background snapshot load outlives a test
"""

from datetime import datetime, timedelta, timezone
from uuid import UUID

import pytest
from httpx import ASGITransport, AsyncClient

import choretrack.infrastructure.database as db_module
from choretrack.api.dependencies import get_chore_service
from choretrack.core.chore import ChoreDraft
from choretrack.core.domain_types import HouseholdId, IntervalType, UserId
from choretrack.db.base import Base
from choretrack.infrastructure.database import DatabaseSessionManager
from choretrack.infrastructure.snapshot_feed import SnapshotFeed
from choretrack.infrastructure.sql_store import SqlChoreStore, SqlMemberDirectory
from choretrack.main import app
from choretrack.models import HouseholdMemberRow, UserProfileRow
from choretrack.services.chore_service import ChoreService


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now += timedelta(**kwargs)
        return self.now


@pytest.fixture
def clock():
    return FakeClock(datetime(2026, 3, 10, 9, 0, tzinfo=timezone.utc))


@pytest.fixture
def household_id():
    return HouseholdId(UUID("a0000000-0000-0000-0000-00000000000a"))


@pytest.fixture
async def test_db_manager(tmp_path):
    manager = DatabaseSessionManager(
        f"sqlite+aiosqlite:///{tmp_path / 'chores.db'}",
    )
    async with manager.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield manager
    await manager.dispose()


@pytest.fixture
async def feed():
    feed = SnapshotFeed()
    yield feed
    await feed.close()


@pytest.fixture
def store(test_db_manager, feed, clock):
    return SqlChoreStore(test_db_manager.session, feed, clock)


@pytest.fixture
def directory(test_db_manager):
    return SqlMemberDirectory(test_db_manager.session)


@pytest.fixture
def service(store, directory, clock):
    return ChoreService(store, directory, clock)


@pytest.fixture
def seed_members(test_db_manager, household_id):
    """Insert household members; pass {user_id: display_name or None}."""
    async def _seed(members: dict[str, str | None], household=None):
        async with test_db_manager.session() as db:
            for user_id, name in members.items():
                db.add(HouseholdMemberRow(
                    household_id=household or household_id,
                    user_id=user_id,
                    role="member",
                ))
                if name:
                    db.add(UserProfileRow(user_id=user_id, display_name=name))
            await db.commit()
    return _seed


@pytest.fixture
def seed_chore(service, household_id):
    """Create a chore through the service (validation + first due_at)."""
    async def _seed(name="Water plants", household=None, **fields):
        draft = ChoreDraft(
            name=name,
            interval_type=fields.pop("interval_type", IntervalType.WEEKLY),
            **fields,
        )
        return await service.create(
            household or household_id, draft, UserId("alice"),
        )
    return _seed


@pytest.fixture
async def client(service, test_db_manager):
    """FastAPI test client with the chore service overridden."""
    app.dependency_overrides[get_chore_service] = lambda: service

    original_manager = db_module.db_manager
    db_module.db_manager = test_db_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager

"""Shared fixtures: in-memory database, deterministic selectors, HTTP client."""
import random

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from prreviewer.api.app import create_app
from prreviewer.api.dependencies import get_selector
from prreviewer.core.assignment.selector import ReviewerSelector
from prreviewer.core.schemas.team import TeamCreate, TeamMember
from prreviewer.core.services.team_service import TeamService
from prreviewer.core.storage.database import Database, init_db

MEMORY_DB_URL = "sqlite+aiosqlite:///:memory:"


class FirstPickRandom:
    """Random source that never reorders and always picks the first element."""

    def __init__(self):
        self.shuffled: list[list] = []

    def shuffle(self, x: list) -> None:
        self.shuffled.append(list(x))

    def choice(self, seq):
        return seq[0]


@pytest_asyncio.fixture
async def db():
    """Create test database."""
    db = init_db(MEMORY_DB_URL)
    await db.create_tables()
    yield db
    await db.close()


@pytest_asyncio.fixture
async def session(db: Database):
    """Create test session."""
    async with db.session() as session:
        yield session


@pytest_asyncio.fixture
async def file_db(tmp_path):
    """File-backed database, so separate sessions get separate connections."""
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'reviews.db'}")
    await db.create_tables()
    yield db
    await db.close()


@pytest.fixture
def selector() -> ReviewerSelector:
    """Selector with a fixed seed."""
    return ReviewerSelector(random.Random(1234))


@pytest.fixture
def first_pick_selector() -> ReviewerSelector:
    """Selector whose choices are fully predictable (sorted order, first element)."""
    return ReviewerSelector(FirstPickRandom())


@pytest.fixture
def make_team(session):
    """Create a team; members are (user_id, is_active) pairs."""

    async def _make_team(team_name: str, members: list[tuple[str, bool]]):
        return await TeamService(session).create_team(
            TeamCreate(
                team_name=team_name,
                members=[
                    TeamMember(user_id=user_id, username=f"user-{user_id}", is_active=is_active)
                    for user_id, is_active in members
                ],
            )
        )

    return _make_team


@pytest_asyncio.fixture
async def client(db: Database, selector: ReviewerSelector):
    """Create test client backed by the in-memory database."""
    app = create_app()
    app.dependency_overrides[get_selector] = lambda: selector

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()

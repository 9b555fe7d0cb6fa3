"""Tests for repository pattern implementations."""
import pytest
from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from prreviewer.core.errors import ConflictError
from prreviewer.core.models import PullRequest, PullRequestStatus
from prreviewer.core.storage.repositories import (
    AssignmentRepository,
    PullRequestRepository,
    StatsRepository,
    TeamRepository,
    UserRepository,
)


@pytest.fixture
async def team_repo(session: AsyncSession):
    """Create team repository."""
    return TeamRepository(session)


@pytest.fixture
async def user_repo(session: AsyncSession):
    """Create user repository."""
    return UserRepository(session)


@pytest.fixture
async def pr_repo(session: AsyncSession):
    """Create pull request repository."""
    return PullRequestRepository(session)


@pytest.fixture
async def assignment_repo(session: AsyncSession):
    """Create assignment repository."""
    return AssignmentRepository(session)


@pytest.fixture
async def backend_team(team_repo: TeamRepository, session: AsyncSession):
    """Team with three active members and one inactive member."""
    team = await team_repo.create(
        "backend",
        [
            {"user_id": "u3", "username": "Carol", "is_active": True},
            {"user_id": "u1", "username": "Alice", "is_active": True},
            {"user_id": "u4", "username": "Dave", "is_active": False},
            {"user_id": "u2", "username": "Bob", "is_active": True},
        ],
    )
    await session.commit()
    return team


@pytest.mark.asyncio
async def test_team_repository_get_orders_members(team_repo: TeamRepository, backend_team):
    """Test members come back ordered by user_id."""
    team = await team_repo.get("backend")

    assert team is not None
    assert [member.user_id for member in team.members] == ["u1", "u2", "u3", "u4"]
    assert await team_repo.exists("backend")
    assert not await team_repo.exists("frontend")
    assert await team_repo.get("frontend") is None


@pytest.mark.asyncio
async def test_team_repository_duplicate_member_conflicts(
    team_repo: TeamRepository, backend_team, session: AsyncSession
):
    """Test inserting an existing user id surfaces as a conflict."""
    session.expunge_all()
    with pytest.raises(ConflictError):
        await team_repo.create("frontend", [{"user_id": "u1", "username": "Alice", "is_active": True}])
    await session.rollback()


@pytest.mark.asyncio
async def test_user_repository_active_members(user_repo: UserRepository, backend_team):
    """Test only active members of the team are listed, ordered by id."""
    users = await user_repo.list_active_by_team("backend")
    assert [user.user_id for user in users] == ["u1", "u2", "u3"]


@pytest.mark.asyncio
async def test_user_repository_get_many(user_repo: UserRepository, backend_team):
    """Test unknown ids are silently left out."""
    users = await user_repo.get_many(["u1", "u2", "nobody", "u1"])
    assert set(users) == {"u1", "u2"}
    assert await user_repo.get_many([]) == {}


@pytest.mark.asyncio
async def test_user_repository_set_active(
    user_repo: UserRepository, backend_team, session: AsyncSession
):
    """Test toggling the activity flag."""
    user = await user_repo.get("u1")
    await user_repo.set_active(user, False)
    await session.commit()

    users = await user_repo.list_active_by_team("backend")
    assert [user.user_id for user in users] == ["u2", "u3"]


@pytest.mark.asyncio
async def test_pull_request_repository_create(
    pr_repo: PullRequestRepository, backend_team, session: AsyncSession
):
    """Test creating a pull request."""
    pr = await pr_repo.create("pr-1", "Add search", "u1")
    await session.commit()

    assert pr.status == PullRequestStatus.OPEN.value
    assert pr.version == 1
    assert pr.merged_at is None
    assert await pr_repo.exists("pr-1")
    assert not await pr_repo.exists("pr-2")


@pytest.mark.asyncio
async def test_pull_request_repository_save_bumps_version(
    pr_repo: PullRequestRepository, backend_team, session: AsyncSession
):
    """Test each save increments the version."""
    pr = await pr_repo.create("pr-1", "Add search", "u1")
    await session.commit()

    pr.pull_request_name = "Add full-text search"
    await pr_repo.save(pr)
    await session.commit()

    assert pr.version == 2


@pytest.mark.asyncio
async def test_pull_request_repository_stale_save_conflicts(
    pr_repo: PullRequestRepository, backend_team, session: AsyncSession
):
    """Test saving over a concurrent write raises ConflictError."""
    pr = await pr_repo.create("pr-1", "Add search", "u1")
    await session.commit()

    # Another writer bumps the version behind the ORM's back
    await session.execute(
        update(PullRequest)
        .where(PullRequest.pull_request_id == "pr-1")
        .values(version=PullRequest.version + 1)
        .execution_options(synchronize_session=False)
    )

    pr.pull_request_name = "Renamed"
    with pytest.raises(ConflictError):
        await pr_repo.save(pr)
    await session.rollback()


@pytest.mark.asyncio
async def test_assignment_repository_add_and_list(
    pr_repo: PullRequestRepository,
    assignment_repo: AssignmentRepository,
    backend_team,
    session: AsyncSession,
):
    """Test reviewers are listed in the order they were assigned."""
    await pr_repo.create("pr-1", "Add search", "u1")
    await assignment_repo.add("pr-1", ["u3", "u2"])
    await session.commit()

    assert await assignment_repo.list_reviewer_ids("pr-1") == ["u3", "u2"]
    assert await assignment_repo.is_assigned("pr-1", "u3")
    assert not await assignment_repo.is_assigned("pr-1", "u1")


@pytest.mark.asyncio
async def test_assignment_repository_replace_keeps_slot(
    pr_repo: PullRequestRepository,
    assignment_repo: AssignmentRepository,
    backend_team,
    session: AsyncSession,
):
    """Test a replacement takes the replaced reviewer's place in the list."""
    await pr_repo.create("pr-1", "Add search", "u1")
    await assignment_repo.add("pr-1", ["u2", "u3"])
    await session.commit()

    await assignment_repo.replace("pr-1", "u2", "u4")
    await session.commit()

    assert await assignment_repo.list_reviewer_ids("pr-1") == ["u4", "u3"]


@pytest.mark.asyncio
async def test_assignment_repository_replace_unassigned_conflicts(
    pr_repo: PullRequestRepository,
    assignment_repo: AssignmentRepository,
    backend_team,
    session: AsyncSession,
):
    """Test replacing a reviewer who is not assigned is a lost race."""
    await pr_repo.create("pr-1", "Add search", "u1")
    await assignment_repo.add("pr-1", ["u2"])
    await session.commit()

    with pytest.raises(ConflictError):
        await assignment_repo.replace("pr-1", "u3", "u4")
    await session.rollback()

    assert await assignment_repo.list_reviewer_ids("pr-1") == ["u2"]


@pytest.mark.asyncio
async def test_list_by_reviewer_filters_status(
    pr_repo: PullRequestRepository,
    assignment_repo: AssignmentRepository,
    backend_team,
    session: AsyncSession,
):
    """Test listing a reviewer's pull requests with and without a status filter."""
    await pr_repo.create("pr-1", "Add search", "u1")
    merged = await pr_repo.create("pr-2", "Fix typo", "u1")
    await assignment_repo.add("pr-1", ["u2"])
    await assignment_repo.add("pr-2", ["u2"])
    merged.status = PullRequestStatus.MERGED.value
    await pr_repo.save(merged)
    await session.commit()

    all_prs = await pr_repo.list_by_reviewer("u2")
    open_prs = await pr_repo.list_by_reviewer("u2", PullRequestStatus.OPEN)

    assert {pr.pull_request_id for pr in all_prs} == {"pr-1", "pr-2"}
    assert [pr.pull_request_id for pr in open_prs] == ["pr-1"]
    assert await pr_repo.list_by_reviewer("u3") == []


@pytest.mark.asyncio
async def test_stats_repository_counts(
    pr_repo: PullRequestRepository,
    assignment_repo: AssignmentRepository,
    backend_team,
    session: AsyncSession,
):
    """Test counts are ordered by count, ties broken by id."""
    await pr_repo.create("pr-1", "Add search", "u1")
    await pr_repo.create("pr-2", "Fix typo", "u1")
    await pr_repo.create("pr-3", "Bump deps", "u2")
    await assignment_repo.add("pr-1", ["u3", "u2"])
    await assignment_repo.add("pr-2", ["u3"])
    await session.commit()

    stats = StatsRepository(session)

    assert await stats.user_assignment_counts() == [
        ("u3", "Carol", 2),
        ("u2", "Bob", 1),
        ("u1", "Alice", 0),
    ]
    assert await stats.pr_assignment_counts() == [
        ("pr-1", "Add search", 2),
        ("pr-2", "Fix typo", 1),
        ("pr-3", "Bump deps", 0),
    ]
    assert await stats.table_counts() == {
        "teams": 1,
        "users": 4,
        "pull_requests": 3,
        "assignments": 3,
    }

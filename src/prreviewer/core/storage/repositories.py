"""Repositories over the async session.

Repositories flush but never commit: the calling service owns the
transaction boundary, so several repository calls form one unit of work.
"""
from datetime import datetime, timezone
from typing import Any, Iterable, Optional

from sqlalchemy import delete, desc, exists, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.orm.exc import StaleDataError

from ..errors import ConflictError
from ..models import PullRequest, PullRequestStatus, ReviewerAssignment, Team, User


class TeamRepository:
    """Teams and their members."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def exists(self, team_name: str) -> bool:
        result = await self.session.execute(select(exists().where(Team.team_name == team_name)))
        return bool(result.scalar())

    async def get(self, team_name: str) -> Optional[Team]:
        """Get a team with its members ordered by user_id."""
        query = (
            select(Team)
            .where(Team.team_name == team_name)
            .options(selectinload(Team.members))
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def create(self, team_name: str, members: Iterable[dict[str, Any]]) -> Team:
        """Insert a team together with its members.

        Args:
            team_name: Unique team name
            members: Dicts with ``user_id``, ``username`` and ``is_active``

        Raises:
            ConflictError: If a concurrent writer inserted the team or a member first
        """
        team = Team(
            team_name=team_name,
            members=[
                User(
                    user_id=member["user_id"],
                    username=member["username"],
                    is_active=member["is_active"],
                )
                for member in members
            ],
        )
        self.session.add(team)
        try:
            await self.session.flush()
        except IntegrityError as e:
            raise ConflictError(f"team {team_name} or one of its members was created concurrently") from e
        return team


class UserRepository:
    """Users and their activity flag."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, user_id: str) -> Optional[User]:
        return await self.session.get(User, user_id)

    async def get_many(self, user_ids: Iterable[str]) -> dict[str, User]:
        """Get the users that exist among ``user_ids``, keyed by id."""
        ids = list(set(user_ids))
        if not ids:
            return {}
        result = await self.session.execute(select(User).where(User.user_id.in_(ids)))
        return {user.user_id: user for user in result.scalars().all()}

    async def list_active_by_team(self, team_name: str) -> list[User]:
        """Active members of a team ordered by user_id."""
        query = (
            select(User)
            .where(User.team_name == team_name, User.is_active.is_(True))
            .order_by(User.user_id)
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def set_active(self, user: User, is_active: bool) -> User:
        user.is_active = is_active
        await self.session.flush()
        return user


class PullRequestRepository:
    """Pull request rows."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def exists(self, pull_request_id: str) -> bool:
        result = await self.session.execute(
            select(exists().where(PullRequest.pull_request_id == pull_request_id))
        )
        return bool(result.scalar())

    async def get_for_update(self, pull_request_id: str) -> Optional[PullRequest]:
        """Get a pull request and lock its row until the transaction ends.

        Backends without row locks (SQLite) ignore ``FOR UPDATE``; the
        ``version`` column still catches concurrent writers at flush time.
        """
        query = (
            select(PullRequest)
            .where(PullRequest.pull_request_id == pull_request_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def create(self, pull_request_id: str, name: str, author_id: str) -> PullRequest:
        """Insert an OPEN pull request.

        Raises:
            ConflictError: If the id was inserted concurrently
        """
        pr = PullRequest(
            pull_request_id=pull_request_id,
            pull_request_name=name,
            author_id=author_id,
            status=PullRequestStatus.OPEN.value,
        )
        self.session.add(pr)
        try:
            await self.session.flush()
        except IntegrityError as e:
            raise ConflictError(f"PR {pull_request_id} was created concurrently") from e
        return pr

    async def save(self, pr: PullRequest) -> PullRequest:
        """Flush changes to ``pr`` and bump its version.

        Raises:
            ConflictError: If another transaction updated the row since it was read
        """
        # a failed flush expires pr, so read the id first
        pull_request_id = pr.pull_request_id
        pr.updated_at = datetime.now(timezone.utc)
        try:
            await self.session.flush()
        except StaleDataError as e:
            raise ConflictError(f"PR {pull_request_id} was modified concurrently") from e
        return pr

    async def list_by_reviewer(
        self, user_id: str, status: Optional[PullRequestStatus] = None
    ) -> list[PullRequest]:
        """Pull requests where ``user_id`` is a reviewer, newest first."""
        query = (
            select(PullRequest)
            .join(
                ReviewerAssignment,
                ReviewerAssignment.pull_request_id == PullRequest.pull_request_id,
            )
            .where(ReviewerAssignment.reviewer_id == user_id)
            .order_by(PullRequest.created_at.desc(), PullRequest.pull_request_id)
        )
        if status is not None:
            query = query.where(PullRequest.status == status.value)
        result = await self.session.execute(query)
        return list(result.scalars().all())


class AssignmentRepository:
    """Reviewer assignment rows (``pr_reviewers``)."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_reviewer_ids(self, pull_request_id: str) -> list[str]:
        """Reviewer ids of a pull request in slot order."""
        query = (
            select(ReviewerAssignment.reviewer_id)
            .where(ReviewerAssignment.pull_request_id == pull_request_id)
            .order_by(ReviewerAssignment.position, ReviewerAssignment.assigned_at)
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def is_assigned(self, pull_request_id: str, user_id: str) -> bool:
        result = await self.session.execute(
            select(
                exists().where(
                    ReviewerAssignment.pull_request_id == pull_request_id,
                    ReviewerAssignment.reviewer_id == user_id,
                )
            )
        )
        return bool(result.scalar())

    async def add(self, pull_request_id: str, reviewer_ids: list[str]) -> None:
        """Assign reviewers, numbering their slots from 0."""
        for position, reviewer_id in enumerate(reviewer_ids):
            self.session.add(
                ReviewerAssignment(
                    pull_request_id=pull_request_id,
                    reviewer_id=reviewer_id,
                    position=position,
                )
            )
        try:
            await self.session.flush()
        except IntegrityError as e:
            raise ConflictError(f"reviewers of PR {pull_request_id} were changed concurrently") from e

    async def replace(self, pull_request_id: str, old_reviewer_id: str, new_reviewer_id: str) -> None:
        """Swap one reviewer for another, keeping the slot.

        The delete must remove exactly one row; anything else means the
        assignment changed after it was read.

        Raises:
            ConflictError: On a lost race with another writer
        """
        position_result = await self.session.execute(
            select(ReviewerAssignment.position).where(
                ReviewerAssignment.pull_request_id == pull_request_id,
                ReviewerAssignment.reviewer_id == old_reviewer_id,
            )
        )
        position = position_result.scalar_one_or_none()

        result = await self.session.execute(
            delete(ReviewerAssignment).where(
                ReviewerAssignment.pull_request_id == pull_request_id,
                ReviewerAssignment.reviewer_id == old_reviewer_id,
            )
        )
        if position is None or result.rowcount != 1:
            raise ConflictError(
                f"reviewer {old_reviewer_id} is no longer assigned to PR {pull_request_id}"
            )

        self.session.add(
            ReviewerAssignment(
                pull_request_id=pull_request_id,
                reviewer_id=new_reviewer_id,
                position=position,
            )
        )
        try:
            await self.session.flush()
        except IntegrityError as e:
            raise ConflictError(
                f"reviewer {new_reviewer_id} was assigned to PR {pull_request_id} concurrently"
            ) from e


class StatsRepository:
    """Aggregate queries over reviewer assignments."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def user_assignment_counts(self) -> list[tuple[str, str, int]]:
        """(user_id, username, count) for every active user, busiest first, ties by id."""
        assignment_count = func.count(ReviewerAssignment.reviewer_id).label("assignment_count")
        query = (
            select(User.user_id, User.username, assignment_count)
            .outerjoin(ReviewerAssignment, ReviewerAssignment.reviewer_id == User.user_id)
            .where(User.is_active.is_(True))
            .group_by(User.user_id, User.username)
            .order_by(desc(assignment_count), User.user_id)
        )
        result = await self.session.execute(query)
        return [(row.user_id, row.username, row.assignment_count) for row in result.all()]

    async def pr_assignment_counts(self) -> list[tuple[str, str, int]]:
        """(pull_request_id, name, count) for every PR, busiest first, ties by id."""
        assignment_count = func.count(ReviewerAssignment.reviewer_id).label("assignment_count")
        query = (
            select(PullRequest.pull_request_id, PullRequest.pull_request_name, assignment_count)
            .outerjoin(
                ReviewerAssignment,
                ReviewerAssignment.pull_request_id == PullRequest.pull_request_id,
            )
            .group_by(PullRequest.pull_request_id, PullRequest.pull_request_name)
            .order_by(desc(assignment_count), PullRequest.pull_request_id)
        )
        result = await self.session.execute(query)
        return [
            (row.pull_request_id, row.pull_request_name, row.assignment_count)
            for row in result.all()
        ]

    async def table_counts(self) -> dict[str, int]:
        """Row counts per table, used by the CLI status command."""
        counts = {}
        for name, column in (
            ("teams", Team.team_name),
            ("users", User.user_id),
            ("pull_requests", PullRequest.pull_request_id),
            ("assignments", ReviewerAssignment.reviewer_id),
        ):
            result = await self.session.execute(select(func.count(column)))
            counts[name] = result.scalar_one()
        return counts

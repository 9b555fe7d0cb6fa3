"""Pull request lifecycle: creation with initial reviewers, merge, reassignment.

Each public operation is one transaction. Reassignment locks the PR row
(where the backend supports it) for the whole check-then-act sequence and
bumps the PR's version, so a concurrent writer either waits or fails with
``ConflictError`` instead of both succeeding.
"""
import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from ..assignment.selector import ReviewerSelector
from ..errors import (
    InvalidRequestError,
    NoCandidateError,
    NotAssignedError,
    NotFoundError,
    PullRequestExistsError,
    PullRequestMergedError,
)
from ..models import PullRequest, PullRequestStatus
from ..schemas.pull_request import PullRequestResponse, ReassignResponse
from ..storage.repositories import AssignmentRepository, PullRequestRepository, UserRepository

logger = logging.getLogger(__name__)


class PullRequestService:
    """Creates, merges and reassigns reviewers on pull requests."""

    def __init__(self, session: AsyncSession, selector: ReviewerSelector):
        self.session = session
        self.selector = selector
        self.pull_requests = PullRequestRepository(session)
        self.assignments = AssignmentRepository(session)
        self.users = UserRepository(session)

    async def create(self, pull_request_id: str, name: str, author_id: str) -> PullRequestResponse:
        """Create an OPEN pull request and assign reviewers from the author's team.

        The PR row and its assignment rows are written atomically.

        Raises:
            PullRequestExistsError: If the id is taken
            NotFoundError: If the author does not exist
            InvalidRequestError: If the author is inactive
        """
        try:
            if await self.pull_requests.exists(pull_request_id):
                raise PullRequestExistsError()

            author = await self.users.get(author_id)
            if author is None:
                raise NotFoundError("author not found")
            if not author.is_active:
                raise InvalidRequestError("author is not active")

            members = await self.users.list_active_by_team(author.team_name)
            reviewer_ids = self.selector.select_reviewers(
                [member.user_id for member in members], author_id
            )

            pr = await self.pull_requests.create(pull_request_id, name, author_id)
            if reviewer_ids:
                await self.assignments.add(pull_request_id, reviewer_ids)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        await self.session.refresh(pr)
        logger.info(
            f"PR created: {pull_request_id} by {author_id}, reviewers: {reviewer_ids or 'none'}"
        )
        return await self.to_response(pr, reviewer_ids)

    async def merge(self, pull_request_id: str) -> PullRequestResponse:
        """Mark a pull request MERGED. Merging a merged PR returns it unchanged.

        Raises:
            NotFoundError: If the PR does not exist
            InvalidRequestError: If the PR has an unknown status
        """
        try:
            pr = await self.pull_requests.get_for_update(pull_request_id)
            if pr is None:
                raise NotFoundError("PR not found")

            if pr.status == PullRequestStatus.MERGED.value:
                logger.info(f"PR already merged: {pull_request_id}")
                return await self.to_response(pr)

            if pr.status != PullRequestStatus.OPEN.value:
                raise InvalidRequestError("cannot merge PR that is not open")

            pr.status = PullRequestStatus.MERGED.value
            pr.merged_at = datetime.now(timezone.utc)
            await self.pull_requests.save(pr)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        await self.session.refresh(pr)
        logger.info(f"PR merged: {pull_request_id}")
        return await self.to_response(pr)

    async def reassign(self, pull_request_id: str, old_reviewer_id: str) -> ReassignResponse:
        """Replace one reviewer with a random active member of that reviewer's team.

        Raises:
            NotFoundError: If the PR or the old reviewer does not exist
            PullRequestMergedError: If the PR is merged
            NotAssignedError: If the old reviewer is not on the PR
            InvalidRequestError: If the old reviewer is inactive
            NoCandidateError: If nobody is eligible as a replacement
            ConflictError: If a concurrent writer changed the PR
        """
        try:
            pr, current_reviewers = await self.lock_for_reassignment(pull_request_id, old_reviewer_id)

            old_reviewer = await self.users.get(old_reviewer_id)
            if old_reviewer is None:
                raise NotFoundError("old reviewer not found")
            if not old_reviewer.is_active:
                raise InvalidRequestError("old reviewer is not active")

            new_reviewer_id, reviewers = await self.swap_reviewer(
                pr, old_reviewer_id, old_reviewer.team_name, current_reviewers
            )
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        await self.session.refresh(pr)
        logger.info(
            f"Reviewer reassigned on PR {pull_request_id}: {old_reviewer_id} -> {new_reviewer_id}"
        )
        return ReassignResponse(
            pr=await self.to_response(pr, reviewers),
            replaced_by=new_reviewer_id,
        )

    async def lock_for_reassignment(
        self, pull_request_id: str, reviewer_id: str
    ) -> tuple[PullRequest, list[str]]:
        """Lock an OPEN pull request and check ``reviewer_id`` is assigned to it.

        Returns:
            The pull request and its current reviewer ids in slot order
        """
        pr = await self.pull_requests.get_for_update(pull_request_id)
        if pr is None:
            raise NotFoundError("PR not found")
        if pr.is_merged:
            raise PullRequestMergedError()

        current_reviewers = await self.assignments.list_reviewer_ids(pull_request_id)
        if reviewer_id not in current_reviewers:
            raise NotAssignedError()
        return pr, current_reviewers

    async def swap_reviewer(
        self,
        pr: PullRequest,
        old_reviewer_id: str,
        team_name: str,
        current_reviewers: list[str],
    ) -> tuple[str, list[str]]:
        """Replace ``old_reviewer_id`` on a locked pull request without committing.

        Candidates are active members of ``team_name`` other than the author,
        the old reviewer and the current reviewers.

        Returns:
            The new reviewer id and the updated reviewer list

        Raises:
            NoCandidateError: If nobody is eligible; nothing is written
        """
        members = await self.users.list_active_by_team(team_name)
        new_reviewer_id = self.selector.select_replacement(
            [member.user_id for member in members],
            exclude=[pr.author_id, old_reviewer_id, *current_reviewers],
        )
        if new_reviewer_id is None:
            raise NoCandidateError()

        await self.assignments.replace(pr.pull_request_id, old_reviewer_id, new_reviewer_id)
        await self.pull_requests.save(pr)

        reviewers = [
            new_reviewer_id if reviewer_id == old_reviewer_id else reviewer_id
            for reviewer_id in current_reviewers
        ]
        return new_reviewer_id, reviewers

    async def to_response(
        self, pr: PullRequest, reviewer_ids: Optional[list[str]] = None
    ) -> PullRequestResponse:
        if reviewer_ids is None:
            reviewer_ids = await self.assignments.list_reviewer_ids(pr.pull_request_id)
        return PullRequestResponse(
            pull_request_id=pr.pull_request_id,
            pull_request_name=pr.pull_request_name,
            author_id=pr.author_id,
            status=pr.status,
            assigned_reviewers=list(reviewer_ids),
            created_at=pr.created_at,
            merged_at=pr.merged_at,
        )

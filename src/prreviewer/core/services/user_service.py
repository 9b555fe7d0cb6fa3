"""User activity management and bulk deactivation with cascade reassignment."""
import logging
import time

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..assignment.selector import ReviewerSelector
from ..errors import ErrorCode, NotFoundError, ServiceError
from ..models import PullRequestStatus
from ..schemas.user import (
    BulkDeactivateResponse,
    PullRequestShort,
    ReassignedPR,
    SkippedPR,
    UserResponse,
    UserReviewsResponse,
)
from ..storage.repositories import PullRequestRepository, TeamRepository, UserRepository
from .pull_request_service import PullRequestService

logger = logging.getLogger(__name__)


class UserService:
    """Activity flags, review listings and bulk deactivation."""

    def __init__(
        self,
        session: AsyncSession,
        selector: ReviewerSelector,
        bulk_deactivate_warn_ms: int = 100,
    ):
        self.session = session
        self.users = UserRepository(session)
        self.teams = TeamRepository(session)
        self.pull_requests = PullRequestRepository(session)
        self.pr_service = PullRequestService(session, selector)
        self.bulk_deactivate_warn_ms = bulk_deactivate_warn_ms

    async def set_is_active(self, user_id: str, is_active: bool) -> UserResponse:
        """Set a user's activity flag. Existing assignments are left alone."""
        try:
            user = await self.users.get(user_id)
            if user is None:
                raise NotFoundError("user not found")
            await self.users.set_active(user, is_active)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info(f"User activity updated: {user_id} -> {is_active}")
        return UserResponse(
            user_id=user.user_id,
            username=user.username,
            team_name=user.team_name,
            is_active=user.is_active,
        )

    async def get_reviews(self, user_id: str) -> UserReviewsResponse:
        """Pull requests the user reviews, newest first; empty for inactive users."""
        user = await self.users.get(user_id)
        if user is None:
            raise NotFoundError("user not found")

        if not user.is_active:
            return UserReviewsResponse(user_id=user_id, pull_requests=[])

        prs = await self.pull_requests.list_by_reviewer(user_id)
        return UserReviewsResponse(
            user_id=user_id,
            pull_requests=[PullRequestShort.model_validate(pr) for pr in prs],
        )

    async def bulk_deactivate(self, team_name: str, user_ids: list[str]) -> BulkDeactivateResponse:
        """Deactivate members of a team and move their open reviews to teammates.

        Ids that do not exist or belong to another team are skipped. The
        deactivations are committed first; every affected PR is then
        reassigned in its own transaction, and a PR that cannot be
        reassigned keeps its old reviewer and is reported in ``skipped_prs``.

        Raises:
            NotFoundError: If the team does not exist
        """
        started = time.perf_counter()

        try:
            if not await self.teams.exists(team_name):
                raise NotFoundError("team not found")

            users = await self.users.get_many(user_ids)
            deactivated: list[str] = []
            for user_id in dict.fromkeys(user_ids):
                user = users.get(user_id)
                if user is None or user.team_name != team_name:
                    logger.debug(f"Bulk deactivation skips {user_id}: not a member of {team_name}")
                    continue
                await self.users.set_active(user, False)
                deactivated.append(user_id)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        reassigned: list[ReassignedPR] = []
        skipped: list[SkippedPR] = []
        for user_id in deactivated:
            open_prs = await self.pull_requests.list_by_reviewer(user_id, PullRequestStatus.OPEN)
            pr_ids = [pr.pull_request_id for pr in open_prs]

            for pr_id in pr_ids:
                try:
                    entry = await self._reassign_in_pr(pr_id, user_id, team_name)
                    await self.session.commit()
                    reassigned.append(entry)
                except (ServiceError, SQLAlchemyError) as e:
                    await self.session.rollback()
                    reason = e.code.value if isinstance(e, ServiceError) else ErrorCode.INTERNAL_ERROR.value
                    logger.warning(f"Cascade reassignment skipped for {user_id} on PR {pr_id}: {e}")
                    skipped.append(SkippedPR(pr_id=pr_id, reviewer_id=user_id, reason=reason))

        elapsed_ms = (time.perf_counter() - started) * 1000
        if elapsed_ms > self.bulk_deactivate_warn_ms:
            logger.warning(
                f"Bulk deactivation of team {team_name} took {elapsed_ms:.1f}ms "
                f"(threshold {self.bulk_deactivate_warn_ms}ms)"
            )
        logger.info(
            f"Bulk deactivation of team {team_name}: {len(deactivated)} deactivated, "
            f"{len(reassigned)} PR(s) reassigned, {len(skipped)} skipped"
        )

        return BulkDeactivateResponse(
            deactivated_users=deactivated,
            reassigned_prs=reassigned,
            skipped_prs=skipped,
            total_processed=len(deactivated),
            reassigned_count=len(reassigned),
            skipped_count=len(skipped),
        )

    async def _reassign_in_pr(self, pr_id: str, old_reviewer_id: str, team_name: str) -> ReassignedPR:
        pr, current_reviewers = await self.pr_service.lock_for_reassignment(pr_id, old_reviewer_id)
        new_reviewer_id, new_reviewers = await self.pr_service.swap_reviewer(
            pr, old_reviewer_id, team_name, current_reviewers
        )
        logger.info(f"Cascade reassignment on PR {pr_id}: {old_reviewer_id} -> {new_reviewer_id}")
        return ReassignedPR(
            pr_id=pr_id,
            old_reviewers=current_reviewers,
            new_reviewers=new_reviewers,
        )

"""Review assignment statistics."""
from sqlalchemy.ext.asyncio import AsyncSession

from ..schemas.stats import PRAssignmentStats, ReviewStats, UserAssignmentStats
from ..storage.repositories import StatsRepository

TOP_REVIEWERS_LIMIT = 5


class StatsService:
    def __init__(self, session: AsyncSession):
        self.stats = StatsRepository(session)

    async def user_assignment_stats(self) -> list[UserAssignmentStats]:
        """Assignment count of every active user, zero included."""
        rows = await self.stats.user_assignment_counts()
        return [
            UserAssignmentStats(user_id=user_id, username=username, assignment_count=count)
            for user_id, username, count in rows
        ]

    async def pr_assignment_stats(self) -> list[PRAssignmentStats]:
        """Reviewer count of every pull request."""
        rows = await self.stats.pr_assignment_counts()
        return [
            PRAssignmentStats(pr_id=pr_id, pr_name=pr_name, assignment_count=count)
            for pr_id, pr_name, count in rows
        ]

    async def get_review_stats(self) -> ReviewStats:
        """Per-user and per-PR counts, their total and the top reviewers."""
        by_user = await self.user_assignment_stats()
        by_pr = await self.pr_assignment_stats()

        return ReviewStats(
            total_assignments=sum(stat.assignment_count for stat in by_user),
            assignments_by_user=by_user,
            assignments_by_pr=by_pr,
            top_reviewers=by_user[:TOP_REVIEWERS_LIMIT],
        )

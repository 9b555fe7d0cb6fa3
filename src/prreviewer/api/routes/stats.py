"""Statistics endpoints"""
import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ...core.errors import InternalError
from ...core.schemas.stats import ReviewStats
from ...core.services.stats_service import StatsService
from ..dependencies import get_session

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/stats/review-assignments", response_model=ReviewStats)
async def get_review_assignment_stats(
    session: AsyncSession = Depends(get_session),
):
    """Get review assignment counts per user and per pull request."""
    try:
        stats = await StatsService(session).get_review_stats()
        logger.info(f"Statistics retrieved: {stats.total_assignments} total assignments")
        return stats

    except Exception as e:
        logger.error(f"Error getting statistics: {e}")
        raise InternalError("Failed to retrieve statistics") from e

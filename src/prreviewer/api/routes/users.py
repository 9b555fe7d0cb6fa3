"""User endpoints"""
import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ...core.assignment.selector import ReviewerSelector
from ...core.config.settings import ReviewerServiceConfig
from ...core.errors import InternalError, ServiceError
from ...core.schemas.user import (
    BulkDeactivateRequest,
    BulkDeactivateResponse,
    SetIsActiveRequest,
    UserEnvelope,
    UserReviewsResponse,
)
from ...core.services.user_service import UserService
from ..dependencies import get_selector, get_session, get_settings

logger = logging.getLogger(__name__)

router = APIRouter()


def get_user_service(
    session: AsyncSession = Depends(get_session),
    selector: ReviewerSelector = Depends(get_selector),
    settings: ReviewerServiceConfig = Depends(get_settings),
) -> UserService:
    return UserService(
        session,
        selector,
        bulk_deactivate_warn_ms=settings.bulk_deactivate_warn_ms,
    )


@router.post("/users/setIsActive", response_model=UserEnvelope)
async def set_is_active(
    request_data: SetIsActiveRequest,
    service: UserService = Depends(get_user_service),
):
    """Activate or deactivate a single user."""
    try:
        user = await service.set_is_active(request_data.user_id, request_data.is_active)
        return UserEnvelope(user=user)

    except ServiceError:
        raise
    except Exception as e:
        logger.error(f"Error updating user activity: {e}")
        raise InternalError() from e


@router.get("/users/getReview", response_model=UserReviewsResponse)
async def get_user_reviews(
    user_id: str = Query(..., min_length=1, description="Reviewer id"),
    service: UserService = Depends(get_user_service),
):
    """List pull requests the user is assigned to review.

    Inactive users get an empty list rather than an error.
    """
    try:
        return await service.get_reviews(user_id)

    except ServiceError:
        raise
    except Exception as e:
        logger.error(f"Error listing reviews for user {user_id}: {e}")
        raise InternalError() from e


@router.post("/users/bulk-deactivate", response_model=BulkDeactivateResponse)
async def bulk_deactivate(
    request_data: BulkDeactivateRequest,
    service: UserService = Depends(get_user_service),
):
    """Deactivate team members and reassign their open reviews.

    Unknown ids and ids from other teams are skipped. Pull requests for
    which no replacement exists keep their reviewer and are listed in
    ``skipped_prs``.
    """
    try:
        return await service.bulk_deactivate(request_data.team_name, request_data.user_ids)

    except ServiceError:
        raise
    except Exception as e:
        logger.error(f"Error in bulk deactivation of team {request_data.team_name}: {e}")
        raise InternalError() from e

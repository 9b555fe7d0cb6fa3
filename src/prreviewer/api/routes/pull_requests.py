"""Pull request endpoints"""
import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ...core.assignment.selector import ReviewerSelector
from ...core.errors import InternalError, ServiceError
from ...core.schemas.pull_request import (
    PullRequestCreate,
    PullRequestEnvelope,
    PullRequestMerge,
    PullRequestReassign,
    ReassignResponse,
)
from ...core.services.pull_request_service import PullRequestService
from ..dependencies import get_selector, get_session

logger = logging.getLogger(__name__)

router = APIRouter()


def get_pull_request_service(
    session: AsyncSession = Depends(get_session),
    selector: ReviewerSelector = Depends(get_selector),
) -> PullRequestService:
    return PullRequestService(session, selector)


@router.post("/pullRequest/create", response_model=PullRequestEnvelope, status_code=201)
async def create_pull_request(
    pr_data: PullRequestCreate,
    service: PullRequestService = Depends(get_pull_request_service),
):
    """Create a pull request.

    Up to two active members of the author's team, other than the author,
    are assigned as reviewers at random.
    """
    try:
        pr = await service.create(pr_data.pull_request_id, pr_data.pull_request_name, pr_data.author_id)
        return PullRequestEnvelope(pr=pr)

    except ServiceError:
        raise
    except Exception as e:
        logger.error(f"Error creating pull request {pr_data.pull_request_id}: {e}")
        raise InternalError() from e


@router.post("/pullRequest/merge", response_model=PullRequestEnvelope)
async def merge_pull_request(
    merge_data: PullRequestMerge,
    service: PullRequestService = Depends(get_pull_request_service),
):
    """Merge a pull request. Repeating the call returns the merged PR unchanged."""
    try:
        pr = await service.merge(merge_data.pull_request_id)
        return PullRequestEnvelope(pr=pr)

    except ServiceError:
        raise
    except Exception as e:
        logger.error(f"Error merging pull request {merge_data.pull_request_id}: {e}")
        raise InternalError() from e


@router.post("/pullRequest/reassign", response_model=ReassignResponse)
async def reassign_reviewer(
    reassign_data: PullRequestReassign,
    service: PullRequestService = Depends(get_pull_request_service),
):
    """Replace a reviewer with another active member of the reviewer's team."""
    try:
        return await service.reassign(reassign_data.pull_request_id, reassign_data.old_user_id)

    except ServiceError:
        raise
    except Exception as e:
        logger.error(f"Error reassigning reviewer on {reassign_data.pull_request_id}: {e}")
        raise InternalError() from e

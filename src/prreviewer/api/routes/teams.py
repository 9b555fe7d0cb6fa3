"""Team endpoints"""
import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ...core.errors import InternalError, ServiceError
from ...core.schemas.team import TeamCreate, TeamEnvelope
from ...core.services.team_service import TeamService
from ..dependencies import get_session

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/team/add", response_model=TeamEnvelope)
async def add_team(
    team_data: TeamCreate,
    session: AsyncSession = Depends(get_session),
):
    """Create a team together with its members."""
    try:
        team = await TeamService(session).create_team(team_data)
        return TeamEnvelope(team=team)

    except ServiceError:
        raise
    except Exception as e:
        logger.error(f"Error creating team: {e}")
        raise InternalError() from e


@router.get("/team/get", response_model=TeamEnvelope)
async def get_team(
    team_name: str = Query(..., min_length=1, description="Team name"),
    session: AsyncSession = Depends(get_session),
):
    """Get a team with its members."""
    try:
        team = await TeamService(session).get_team(team_name)
        return TeamEnvelope(team=team)

    except ServiceError:
        raise
    except Exception as e:
        logger.error(f"Error getting team: {e}")
        raise InternalError() from e

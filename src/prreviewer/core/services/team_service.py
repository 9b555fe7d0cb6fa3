"""Team onboarding and lookup."""
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from ..errors import InvalidRequestError, NotFoundError, TeamExistsError
from ..schemas.team import TeamCreate, TeamResponse
from ..storage.repositories import TeamRepository, UserRepository

logger = logging.getLogger(__name__)


class TeamService:
    """Creates teams together with their members and reads them back."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.teams = TeamRepository(session)
        self.users = UserRepository(session)

    async def create_team(self, team_data: TeamCreate) -> TeamResponse:
        """Create a team and all of its members in one transaction.

        Raises:
            TeamExistsError: If the team name is taken
            InvalidRequestError: If a user id is repeated or already exists
        """
        member_ids = [member.user_id for member in team_data.members]
        seen = set()
        for user_id in member_ids:
            if user_id in seen:
                raise InvalidRequestError(f"duplicate user_id {user_id} in members")
            seen.add(user_id)

        try:
            if await self.teams.exists(team_data.team_name):
                raise TeamExistsError(f"{team_data.team_name} already exists")

            existing = await self.users.get_many(member_ids)
            if existing:
                user_id = sorted(existing)[0]
                raise InvalidRequestError(
                    f"user {user_id} already belongs to team {existing[user_id].team_name}"
                )

            team = await self.teams.create(
                team_data.team_name,
                [member.model_dump() for member in team_data.members],
            )
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info(f"Team created: {team.team_name} with {len(member_ids)} member(s)")
        return TeamResponse.model_validate(team)

    async def get_team(self, team_name: str) -> TeamResponse:
        team = await self.teams.get(team_name)
        if team is None:
            raise NotFoundError("team not found")
        return TeamResponse.model_validate(team)

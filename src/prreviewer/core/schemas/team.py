"""Team schemas."""
from pydantic import BaseModel, ConfigDict, Field


class TeamMember(BaseModel):
    """A member as sent to and returned by the team endpoints."""
    user_id: str = Field(..., min_length=1, max_length=100, description="Unique user id")
    username: str = Field(..., min_length=1, max_length=100, description="Display name")
    is_active: bool = Field(default=True, description="Whether the user can be assigned reviews")

    model_config = ConfigDict(from_attributes=True)


class TeamCreate(BaseModel):
    """Schema for creating a team with its members."""
    team_name: str = Field(..., min_length=1, max_length=100, description="Unique team name")
    members: list[TeamMember] = Field(..., min_length=1, description="Team members")


class TeamResponse(BaseModel):
    """Schema for team response."""
    team_name: str
    members: list[TeamMember]

    model_config = ConfigDict(from_attributes=True)


class TeamEnvelope(BaseModel):
    team: TeamResponse

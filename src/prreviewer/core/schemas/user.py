"""User schemas, including bulk deactivation."""
from pydantic import BaseModel, ConfigDict, Field


class SetIsActiveRequest(BaseModel):
    """Schema for toggling a user's activity flag."""
    user_id: str = Field(..., min_length=1, description="User to update")
    is_active: bool = Field(..., description="New activity flag")


class UserResponse(BaseModel):
    """Schema for user response."""
    user_id: str
    username: str
    team_name: str
    is_active: bool

    model_config = ConfigDict(from_attributes=True)


class UserEnvelope(BaseModel):
    user: UserResponse


class PullRequestShort(BaseModel):
    """Pull request summary used in reviewer listings."""
    pull_request_id: str
    pull_request_name: str
    author_id: str
    status: str

    model_config = ConfigDict(from_attributes=True)


class UserReviewsResponse(BaseModel):
    """Pull requests a user has been assigned to review."""
    user_id: str
    pull_requests: list[PullRequestShort]


class BulkDeactivateRequest(BaseModel):
    """Schema for deactivating several members of one team."""
    team_name: str = Field(..., min_length=1, description="Team the users belong to")
    user_ids: list[str] = Field(..., min_length=1, description="Users to deactivate")


class ReassignedPR(BaseModel):
    """Reviewer set of a pull request before and after a cascade swap."""
    pr_id: str
    old_reviewers: list[str]
    new_reviewers: list[str]


class SkippedPR(BaseModel):
    """A cascade swap that could not be made; the old assignment stays."""
    pr_id: str
    reviewer_id: str
    reason: str


class BulkDeactivateResponse(BaseModel):
    """Outcome of a bulk deactivation."""
    deactivated_users: list[str]
    reassigned_prs: list[ReassignedPR]
    skipped_prs: list[SkippedPR]
    total_processed: int
    reassigned_count: int
    skipped_count: int

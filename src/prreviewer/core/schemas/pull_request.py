"""Pull request schemas."""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class PullRequestCreate(BaseModel):
    """Schema for creating a pull request."""
    pull_request_id: str = Field(..., min_length=1, max_length=100, description="Unique PR id")
    pull_request_name: str = Field(..., min_length=1, max_length=200, description="PR title")
    author_id: str = Field(..., min_length=1, description="Author user id")


class PullRequestMerge(BaseModel):
    """Schema for merging a pull request."""
    pull_request_id: str = Field(..., min_length=1, description="PR to merge")


class PullRequestReassign(BaseModel):
    """Schema for replacing one reviewer of a pull request."""
    pull_request_id: str = Field(..., min_length=1, description="PR to update")
    old_user_id: str = Field(..., min_length=1, description="Reviewer to replace")


class PullRequestResponse(BaseModel):
    """Schema for pull request response."""
    pull_request_id: str
    pull_request_name: str
    author_id: str
    status: str
    assigned_reviewers: list[str]
    created_at: datetime = Field(..., alias="createdAt")
    merged_at: Optional[datetime] = Field(None, alias="mergedAt")

    model_config = ConfigDict(populate_by_name=True)


class PullRequestEnvelope(BaseModel):
    pr: PullRequestResponse


class ReassignResponse(BaseModel):
    """Pull request after a reviewer swap plus the new reviewer's id."""
    pr: PullRequestResponse
    replaced_by: str

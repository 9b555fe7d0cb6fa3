"""Review assignment statistics schemas."""
from pydantic import BaseModel


class UserAssignmentStats(BaseModel):
    user_id: str
    username: str
    assignment_count: int


class PRAssignmentStats(BaseModel):
    pr_id: str
    pr_name: str
    assignment_count: int


class ReviewStats(BaseModel):
    """Schema for review assignment statistics."""
    total_assignments: int
    assignments_by_user: list[UserAssignmentStats]
    assignments_by_pr: list[PRAssignmentStats]
    top_reviewers: list[UserAssignmentStats]

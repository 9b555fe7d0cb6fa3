"""Pydantic schemas for API validation and serialization."""
from .error import ErrorDetail, ErrorResponse
from .pull_request import (
    PullRequestCreate,
    PullRequestEnvelope,
    PullRequestMerge,
    PullRequestReassign,
    PullRequestResponse,
    ReassignResponse,
)
from .stats import PRAssignmentStats, ReviewStats, UserAssignmentStats
from .team import TeamCreate, TeamEnvelope, TeamMember, TeamResponse
from .user import (
    BulkDeactivateRequest,
    BulkDeactivateResponse,
    PullRequestShort,
    ReassignedPR,
    SetIsActiveRequest,
    SkippedPR,
    UserEnvelope,
    UserResponse,
    UserReviewsResponse,
)

__all__ = [
    # Error schemas
    "ErrorDetail",
    "ErrorResponse",
    # Team schemas
    "TeamCreate",
    "TeamEnvelope",
    "TeamMember",
    "TeamResponse",
    # User schemas
    "SetIsActiveRequest",
    "UserEnvelope",
    "UserResponse",
    "PullRequestShort",
    "UserReviewsResponse",
    "BulkDeactivateRequest",
    "BulkDeactivateResponse",
    "ReassignedPR",
    "SkippedPR",
    # Pull request schemas
    "PullRequestCreate",
    "PullRequestMerge",
    "PullRequestReassign",
    "PullRequestResponse",
    "PullRequestEnvelope",
    "ReassignResponse",
    # Statistics schemas
    "UserAssignmentStats",
    "PRAssignmentStats",
    "ReviewStats",
]

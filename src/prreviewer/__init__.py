"""PR Reviewer - reviewer assignment service for pull requests.

Assigns reviewers to new pull requests from the author's team, swaps
reviewers on request, cascades reassignment when team members are
deactivated, and reports assignment statistics.
"""
__version__ = "0.1.0"

from .core.assignment import MAX_REVIEWERS, RandomSource, ReviewerSelector
from .core.config.settings import ReviewerServiceConfig, get_config, init_config
from .core.errors import (
    HTTP_STATUS_BY_CODE,
    ConflictError,
    ErrorCode,
    InvalidRequestError,
    NoCandidateError,
    NotAssignedError,
    NotFoundError,
    PullRequestExistsError,
    PullRequestMergedError,
    ServiceError,
    TeamExistsError,
)
from .core.models import PullRequest, PullRequestStatus, ReviewerAssignment, Team, User
from .core.services import PullRequestService, StatsService, TeamService, UserService
from .core.storage import Database, get_db, init_db

from . import core

__all__ = [
    # Version
    "__version__",
    # Config
    "ReviewerServiceConfig",
    "init_config",
    "get_config",
    # Database
    "Database",
    "init_db",
    "get_db",
    # Models
    "Team",
    "User",
    "PullRequest",
    "PullRequestStatus",
    "ReviewerAssignment",
    # Selection
    "MAX_REVIEWERS",
    "RandomSource",
    "ReviewerSelector",
    # Services
    "TeamService",
    "UserService",
    "PullRequestService",
    "StatsService",
    # Errors
    "ErrorCode",
    "HTTP_STATUS_BY_CODE",
    "ServiceError",
    "InvalidRequestError",
    "NotFoundError",
    "TeamExistsError",
    "PullRequestExistsError",
    "PullRequestMergedError",
    "NotAssignedError",
    "NoCandidateError",
    "ConflictError",
    # Core module
    "core",
]

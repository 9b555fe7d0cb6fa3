"""Core data models for teams, users, pull requests and reviewer assignments."""
# Import all models to ensure relationships work correctly
from .team import Team, User
from .pull_request import PullRequest, PullRequestStatus
from .assignment import ReviewerAssignment

__all__ = [
    # Team models
    "Team",
    "User",
    # Pull request models
    "PullRequest",
    "PullRequestStatus",
    # Assignment models
    "ReviewerAssignment",
]

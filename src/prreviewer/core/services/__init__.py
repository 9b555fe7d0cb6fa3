"""Business operations, one transaction per public call."""
from .pull_request_service import PullRequestService
from .stats_service import StatsService
from .team_service import TeamService
from .user_service import UserService

__all__ = [
    "PullRequestService",
    "StatsService",
    "TeamService",
    "UserService",
]

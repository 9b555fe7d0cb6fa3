"""Typed business errors raised by the services.

Every error carries a stable ``ErrorCode``. The API layer turns them into
``{"error": {"code": ..., "message": ...}}`` responses using
``HTTP_STATUS_BY_CODE``.
"""
from enum import Enum
from typing import Optional


class ErrorCode(str, Enum):
    """Stable error codes exposed to clients."""
    INVALID_REQUEST = "INVALID_REQUEST"
    NOT_FOUND = "NOT_FOUND"
    TEAM_EXISTS = "TEAM_EXISTS"
    PR_EXISTS = "PR_EXISTS"
    PR_MERGED = "PR_MERGED"
    NOT_ASSIGNED = "NOT_ASSIGNED"
    NO_CANDIDATE = "NO_CANDIDATE"
    CONFLICT = "CONFLICT"
    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"
    INTERNAL_ERROR = "INTERNAL_ERROR"


HTTP_STATUS_BY_CODE: dict[ErrorCode, int] = {
    ErrorCode.INVALID_REQUEST: 400,
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.TEAM_EXISTS: 409,
    ErrorCode.PR_EXISTS: 409,
    ErrorCode.PR_MERGED: 409,
    ErrorCode.NOT_ASSIGNED: 409,
    ErrorCode.NO_CANDIDATE: 409,
    ErrorCode.CONFLICT: 409,
    ErrorCode.METHOD_NOT_ALLOWED: 405,
    ErrorCode.INTERNAL_ERROR: 500,
}


class ServiceError(Exception):
    """Base class for errors with a client-visible code."""

    code: ErrorCode = ErrorCode.INTERNAL_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return HTTP_STATUS_BY_CODE[self.code]

    def to_dict(self) -> dict:
        return {"error": {"code": self.code.value, "message": self.message}}

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class InvalidRequestError(ServiceError):
    code = ErrorCode.INVALID_REQUEST
    default_message = "Invalid request"


class NotFoundError(ServiceError):
    code = ErrorCode.NOT_FOUND
    default_message = "Resource not found"


class TeamExistsError(ServiceError):
    code = ErrorCode.TEAM_EXISTS
    default_message = "team_name already exists"


class PullRequestExistsError(ServiceError):
    code = ErrorCode.PR_EXISTS
    default_message = "PR id already exists"


class PullRequestMergedError(ServiceError):
    code = ErrorCode.PR_MERGED
    default_message = "cannot reassign on merged PR"


class NotAssignedError(ServiceError):
    code = ErrorCode.NOT_ASSIGNED
    default_message = "reviewer is not assigned to this PR"


class NoCandidateError(ServiceError):
    code = ErrorCode.NO_CANDIDATE
    default_message = "no active replacement candidate in team"


class ConflictError(ServiceError):
    """A concurrent writer changed the data between read and write.

    The operation made no changes and may be retried by the caller.
    """
    code = ErrorCode.CONFLICT
    default_message = "concurrent modification detected, retry the request"


class InternalError(ServiceError):
    code = ErrorCode.INTERNAL_ERROR

"""Tests for the error taxonomy."""
import pytest

from prreviewer.core.errors import (
    HTTP_STATUS_BY_CODE,
    ConflictError,
    ErrorCode,
    InternalError,
    InvalidRequestError,
    NoCandidateError,
    NotAssignedError,
    NotFoundError,
    PullRequestExistsError,
    PullRequestMergedError,
    ServiceError,
    TeamExistsError,
)


def test_every_code_has_a_status():
    assert set(HTTP_STATUS_BY_CODE) == set(ErrorCode)


@pytest.mark.parametrize(
    "error_class, code, status",
    [
        (InvalidRequestError, ErrorCode.INVALID_REQUEST, 400),
        (NotFoundError, ErrorCode.NOT_FOUND, 404),
        (TeamExistsError, ErrorCode.TEAM_EXISTS, 409),
        (PullRequestExistsError, ErrorCode.PR_EXISTS, 409),
        (PullRequestMergedError, ErrorCode.PR_MERGED, 409),
        (NotAssignedError, ErrorCode.NOT_ASSIGNED, 409),
        (NoCandidateError, ErrorCode.NO_CANDIDATE, 409),
        (ConflictError, ErrorCode.CONFLICT, 409),
        (InternalError, ErrorCode.INTERNAL_ERROR, 500),
    ],
)
def test_error_classes(error_class, code, status):
    error = error_class()
    assert isinstance(error, ServiceError)
    assert error.code == code
    assert error.status_code == status
    assert error.message


def test_error_body_shape():
    error = NotFoundError("PR not found")
    assert error.to_dict() == {"error": {"code": "NOT_FOUND", "message": "PR not found"}}
    assert str(error) == "NOT_FOUND: PR not found"

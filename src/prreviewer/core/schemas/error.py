"""Error body schema shared by every endpoint."""
from pydantic import BaseModel


class ErrorDetail(BaseModel):
    code: str
    message: str


class ErrorResponse(BaseModel):
    """``{"error": {"code": ..., "message": ...}}``"""
    error: ErrorDetail

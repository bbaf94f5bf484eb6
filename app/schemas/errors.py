"""Error response body shared by every endpoint."""

from pydantic import BaseModel, Field


class ErrorDetail(BaseModel):
    message: str = Field(..., description="Human-readable reason")
    status: int = Field(..., description="HTTP status code")


class ErrorResponse(BaseModel):
    error: ErrorDetail

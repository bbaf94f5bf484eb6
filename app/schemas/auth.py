"""Request/response schemas for login, registration and the authenticated caller."""

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """Credentials for login."""

    username: str = Field(..., min_length=1, max_length=255, description="Username")
    password: str = Field(..., min_length=1, description="Password")


class RegisterRequest(BaseModel):
    """New account details; every field is required and non-empty."""

    username: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1)
    first_name: str = Field(..., min_length=1, max_length=255)
    last_name: str = Field(..., min_length=1, max_length=255)
    phone: str = Field(..., min_length=1, max_length=64)


class TokenResponse(BaseModel):
    """Signed token returned after login or registration."""

    token: str = Field(..., description="Send as 'Authorization: Bearer <token>'")


class CurrentUser(BaseModel):
    """Caller identity verified from the bearer token."""

    username: str

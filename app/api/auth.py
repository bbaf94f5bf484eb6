"""Login/registration routes and auth dependencies (ensure_logged_in, ensure_correct_user)."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.errors import AppError, ErrorKind
from app.core.security import (
    PasswordHasher,
    TokenService,
    get_password_hasher,
    get_token_service,
)
from app.schemas.auth import CurrentUser, LoginRequest, RegisterRequest, TokenResponse
from app.services import users as user_service
from app.services.access import ensure_same_user

logger = logging.getLogger(__name__)

router = APIRouter()
security = HTTPBearer(auto_error=False)


@router.post("/login", response_model=TokenResponse)
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
    hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> TokenResponse:
    """
    Check username and password; returns a signed token and records the login.
    Include the token in the Authorization header as: Bearer <token>
    """
    if not user_service.authenticate(db, hasher, body.username, body.password):
        raise AppError(ErrorKind.VALIDATION, "Invalid username/password")
    user_service.update_login_timestamp(db, body.username)
    logger.info("User logged in: username=%s", body.username)
    return TokenResponse(token=tokens.issue(body.username))


@router.post(
    "/register",
    response_model=TokenResponse,
    status_code=status.HTTP_201_CREATED,
)
def register(
    body: RegisterRequest,
    db: Annotated[Session, Depends(get_db)],
    hasher: Annotated[PasswordHasher, Depends(get_password_hasher)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> TokenResponse:
    """Register a user, log them in and return a signed token."""
    user = user_service.register(
        db,
        hasher,
        username=body.username,
        password=body.password,
        first_name=body.first_name,
        last_name=body.last_name,
        phone=body.phone,
    )
    user_service.update_login_timestamp(db, user.username)
    return TokenResponse(token=tokens.issue(user.username))


def ensure_logged_in(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
) -> CurrentUser:
    """
    Dependency: require a valid Bearer token and return the caller.

    The verified username is also stored on request.state.username. The
    claim is not checked against the users table.
    """
    if credentials is None:
        raise AppError(ErrorKind.AUTH, "Not authenticated")
    username = tokens.verify(credentials.credentials)
    request.state.username = username
    return CurrentUser(username=username)


def ensure_correct_user(
    username: str,
    current_user: Annotated[CurrentUser, Depends(ensure_logged_in)],
) -> CurrentUser:
    """Dependency: the {username} path parameter must be the caller."""
    ensure_same_user(current_user.username, username)
    return current_user

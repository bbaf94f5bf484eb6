"""User directory routes: list users, profile, and a user's sent/received messages."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.auth import ensure_correct_user, ensure_logged_in
from app.core.database import get_db
from app.schemas.auth import CurrentUser
from app.schemas.users import (
    ReceivedMessage,
    ReceivedMessagesResponse,
    SentMessage,
    SentMessagesResponse,
    UserDetail,
    UserPublic,
    UserResponse,
    UsersListResponse,
)
from app.services import users as user_service

router = APIRouter()


@router.get("", response_model=UsersListResponse)
def list_users(
    _user: Annotated[CurrentUser, Depends(ensure_logged_in)],
    db: Annotated[Session, Depends(get_db)],
) -> UsersListResponse:
    """Public profile of every user, by last name then first name."""
    users = user_service.all_users(db)
    return UsersListResponse(users=[UserPublic.model_validate(u) for u in users])


@router.get("/{username}", response_model=UserResponse)
def get_user(
    username: str,
    _user: Annotated[CurrentUser, Depends(ensure_correct_user)],
    db: Annotated[Session, Depends(get_db)],
) -> UserResponse:
    """Full profile of the caller (only the user themself may see it)."""
    user = user_service.get_user(db, username)
    return UserResponse(user=UserDetail.model_validate(user))


@router.get("/{username}/to", response_model=ReceivedMessagesResponse)
def get_messages_to(
    username: str,
    _user: Annotated[CurrentUser, Depends(ensure_correct_user)],
    db: Annotated[Session, Depends(get_db)],
) -> ReceivedMessagesResponse:
    """Messages received by the caller, newest first."""
    messages = user_service.messages_to(db, username)
    return ReceivedMessagesResponse(
        messages=[ReceivedMessage.model_validate(m) for m in messages]
    )


@router.get("/{username}/from", response_model=SentMessagesResponse)
def get_messages_from(
    username: str,
    _user: Annotated[CurrentUser, Depends(ensure_correct_user)],
    db: Annotated[Session, Depends(get_db)],
) -> SentMessagesResponse:
    """Messages sent by the caller, in the order they were created."""
    messages = user_service.messages_from(db, username)
    return SentMessagesResponse(
        messages=[SentMessage.model_validate(m) for m in messages]
    )

"""Message routes: view, send, and mark read, each gated on the caller's role in the message."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.auth import ensure_logged_in
from app.core.database import get_db
from app.schemas.auth import CurrentUser
from app.schemas.messages import (
    MessageCreated,
    MessageCreatedResponse,
    MessageCreateRequest,
    MessageDetail,
    MessageDetailResponse,
    MessageReadResponse,
    MessageReadStatus,
)
from app.services import messages as message_service
from app.services.access import ensure_participant, ensure_recipient

router = APIRouter()


@router.get("/{message_id}", response_model=MessageDetailResponse)
def get_message(
    message_id: int,
    current_user: Annotated[CurrentUser, Depends(ensure_logged_in)],
    db: Annotated[Session, Depends(get_db)],
) -> MessageDetailResponse:
    """Message detail with both users; only the sender or recipient may view it."""
    message = message_service.get_message(db, message_id)
    ensure_participant(message, current_user.username)
    return MessageDetailResponse(message=MessageDetail.model_validate(message))


@router.post(
    "",
    response_model=MessageCreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
def post_message(
    body: MessageCreateRequest,
    current_user: Annotated[CurrentUser, Depends(ensure_logged_in)],
    db: Annotated[Session, Depends(get_db)],
) -> MessageCreatedResponse:
    """Send a message from the caller to to_username."""
    message = message_service.create_message(
        db,
        from_username=current_user.username,
        to_username=body.to_username,
        body=body.body,
    )
    return MessageCreatedResponse(message=MessageCreated.model_validate(message))


@router.post("/{message_id}/read", response_model=MessageReadResponse)
def mark_message_read(
    message_id: int,
    current_user: Annotated[CurrentUser, Depends(ensure_logged_in)],
    db: Annotated[Session, Depends(get_db)],
) -> MessageReadResponse:
    """Mark a message read; only its recipient may do this."""
    message = message_service.get_message(db, message_id)
    ensure_recipient(message, current_user.username)
    message = message_service.mark_read(db, message_id)
    return MessageReadResponse(message=MessageReadStatus.model_validate(message))

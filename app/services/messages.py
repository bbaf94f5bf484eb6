"""Message store: create, fetch and mark messages read."""

import logging
from datetime import datetime, timezone

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from app.core.errors import AppError, ErrorKind
from app.models import Message, User

logger = logging.getLogger(__name__)

# messages.id is a 32-bit INTEGER; larger ids cannot exist.
MAX_MESSAGE_ID = 2**31 - 1


def _ensure_valid_id(message_id: int) -> None:
    if not 1 <= message_id <= MAX_MESSAGE_ID:
        raise AppError(ErrorKind.NOT_FOUND, f"No such message: {message_id}")


def create_message(
    db: Session, from_username: str, to_username: str, body: str | None
) -> Message:
    """
    Persist a message from one existing user to another.

    Raises AppError(VALIDATION) for an empty body or an unknown sender or
    recipient. sent_at is set to now and read_at left unset.
    """
    if not body or not body.strip():
        raise AppError(ErrorKind.VALIDATION, "Message body must be non-empty")
    for username in (from_username, to_username):
        if not username or db.get(User, username) is None:
            raise AppError(ErrorKind.VALIDATION, f"Unknown user: {username}")

    message = Message(
        from_username=from_username,
        to_username=to_username,
        body=body,
        sent_at=datetime.now(timezone.utc),
        read_at=None,
    )
    db.add(message)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise AppError(ErrorKind.VALIDATION, "Sender or recipient does not exist") from e
    db.refresh(message)
    logger.info(
        "Message created: id=%s from=%s to=%s", message.id, from_username, to_username
    )
    return message


def get_message(db: Session, message_id: int) -> Message:
    """Return the message with from_user and to_user loaded, or raise AppError(NOT_FOUND)."""
    _ensure_valid_id(message_id)
    message = (
        db.query(Message)
        .options(joinedload(Message.from_user), joinedload(Message.to_user))
        .filter(Message.id == message_id)
        .first()
    )
    if message is None:
        raise AppError(ErrorKind.NOT_FOUND, f"No such message: {message_id}")
    return message


def mark_read(db: Session, message_id: int) -> Message:
    """
    Set read_at to now and return the message.

    Marking an already-read message again overwrites read_at; it is not an error.
    """
    _ensure_valid_id(message_id)
    message = db.get(Message, message_id)
    if message is None:
        raise AppError(ErrorKind.NOT_FOUND, f"No such message: {message_id}")
    message.read_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(message)
    logger.info("Message marked read: id=%s", message_id)
    return message

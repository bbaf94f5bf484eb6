"""Ownership checks for per-user and per-message access."""

from app.core.errors import AppError, ErrorKind
from app.models import Message


def ensure_same_user(caller: str, owner: str) -> None:
    """Raise AppError(AUTH) unless caller is the owning user."""
    if caller != owner:
        raise AppError(ErrorKind.AUTH, "Unauthorized")


def ensure_participant(message: Message, caller: str) -> None:
    """Only the sender or the recipient may view a message."""
    if caller not in (message.from_username, message.to_username):
        raise AppError(ErrorKind.AUTH, "Unauthorized")


def ensure_recipient(message: Message, caller: str) -> None:
    """Only the recipient may mark a message read."""
    if caller != message.to_username:
        raise AppError(ErrorKind.AUTH, "Unauthorized")

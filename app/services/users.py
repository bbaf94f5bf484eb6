"""Credential store and user directory: registration, password checks, profile and message lookups."""

import logging
from datetime import datetime, timezone

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from app.core.errors import AppError, ErrorKind
from app.core.security import PasswordHasher
from app.models import Message, User

logger = logging.getLogger(__name__)

REGISTRATION_FIELDS = ("username", "password", "first_name", "last_name", "phone")


def _now() -> datetime:
    return datetime.now(timezone.utc)


def register(
    db: Session,
    hasher: PasswordHasher,
    *,
    username: str | None,
    password: str | None,
    first_name: str | None,
    last_name: str | None,
    phone: str | None,
) -> User:
    """
    Create a user with a bcrypt-hashed password and return it.

    Raises AppError(VALIDATION) if any field is empty or missing and
    AppError(CONFLICT) if the username is already taken. last_login_at is
    left unset; callers record the login with update_login_timestamp.
    """
    values = {
        "username": username,
        "password": password,
        "first_name": first_name,
        "last_name": last_name,
        "phone": phone,
    }
    missing = [name for name in REGISTRATION_FIELDS if not values[name]]
    if missing:
        raise AppError(
            ErrorKind.VALIDATION, f"Missing required data: {', '.join(missing)}"
        )
    if db.get(User, username) is not None:
        raise AppError(ErrorKind.CONFLICT, f"Username already taken: {username}")

    user = User(
        username=username,
        password_hash=hasher.hash(password),
        first_name=first_name,
        last_name=last_name,
        phone=phone,
        join_at=_now(),
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise AppError(ErrorKind.CONFLICT, f"Username already taken: {username}") from e
    db.refresh(user)
    logger.info("Registered user: username=%s", username)
    return user


def authenticate(db: Session, hasher: PasswordHasher, username: str, password: str) -> bool:
    """Return True if the password matches; False for a wrong password or an unknown username."""
    user = db.get(User, username)
    if user is None:
        logger.warning("Login failed: username=%s", username)
        return False
    if not hasher.verify(password, user.password_hash):
        logger.warning("Login failed: username=%s", username)
        return False
    return True


def update_login_timestamp(db: Session, username: str) -> None:
    """Set last_login_at to now. Raises AppError(NOT_FOUND) for an unknown user."""
    user = db.get(User, username)
    if user is None:
        raise AppError(ErrorKind.NOT_FOUND, f"No such user: {username}")
    user.last_login_at = _now()
    db.commit()


def all_users(db: Session) -> list[User]:
    """All users ordered by last name, then first name."""
    return (
        db.query(User)
        .order_by(User.last_name, User.first_name, User.username)
        .all()
    )


def get_user(db: Session, username: str) -> User:
    """Return the user or raise AppError(NOT_FOUND)."""
    user = db.get(User, username)
    if user is None:
        raise AppError(ErrorKind.NOT_FOUND, f"No such user: {username}")
    return user


def messages_from(db: Session, username: str) -> list[Message]:
    """Messages sent by username, with to_user loaded, oldest id first."""
    get_user(db, username)
    return (
        db.query(Message)
        .options(joinedload(Message.to_user))
        .filter(Message.from_username == username)
        .order_by(Message.id)
        .all()
    )


def messages_to(db: Session, username: str) -> list[Message]:
    """Messages received by username, with from_user loaded, newest first."""
    get_user(db, username)
    return (
        db.query(Message)
        .options(joinedload(Message.from_user))
        .filter(Message.to_username == username)
        .order_by(Message.sent_at.desc(), Message.id.desc())
        .all()
    )

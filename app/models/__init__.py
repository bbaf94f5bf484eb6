"""SQLAlchemy ORM models."""

from app.models.base import Base
from app.models.message import Message
from app.models.user import User

__all__ = ["Base", "Message", "User"]

"""ORM model for registered users."""

from sqlalchemy import Column, DateTime, String
from sqlalchemy.orm import relationship

from app.models.base import Base


class User(Base):
    """
    Registered user, keyed by username.

    join_at is set once at registration; last_login_at is refreshed on every
    successful login or registration. Users are never deleted.
    """

    __tablename__ = "users"

    username = Column(String(255), primary_key=True)
    password_hash = Column(String(255), nullable=False)
    first_name = Column(String(255), nullable=False)
    last_name = Column(String(255), nullable=False)
    phone = Column(String(64), nullable=False)
    join_at = Column(DateTime(timezone=True), nullable=False)
    last_login_at = Column(DateTime(timezone=True), nullable=True)

    sent_messages = relationship(
        "Message",
        foreign_keys="Message.from_username",
        back_populates="from_user",
    )
    received_messages = relationship(
        "Message",
        foreign_keys="Message.to_username",
        back_populates="to_user",
    )

"""ORM model for messages between two users."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from app.models.base import Base


class Message(Base):
    """
    A text message from one user to another.

    Sender and recipient are fixed at creation. read_at stays NULL until the
    recipient marks the message read and never goes back to NULL.
    """

    __tablename__ = "messages"

    id = Column(Integer, primary_key=True, autoincrement=True)
    from_username = Column(
        String(255), ForeignKey("users.username"), nullable=False, index=True
    )
    to_username = Column(
        String(255), ForeignKey("users.username"), nullable=False, index=True
    )
    body = Column(Text, nullable=False)
    sent_at = Column(DateTime(timezone=True), nullable=False)
    read_at = Column(DateTime(timezone=True), nullable=True)

    from_user = relationship(
        "User", foreign_keys=[from_username], back_populates="sent_messages"
    )
    to_user = relationship(
        "User", foreign_keys=[to_username], back_populates="received_messages"
    )

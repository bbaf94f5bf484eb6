"""Request/response schemas for the messages endpoints."""

from datetime import datetime

from pydantic import BaseModel, Field

from app.schemas.users import UserPublic


class MessageCreateRequest(BaseModel):
    """New message; the sender is always the authenticated caller."""

    to_username: str = Field(..., min_length=1, max_length=255)
    body: str = Field(..., min_length=1, description="Message text")


class MessageCreated(BaseModel):
    id: int
    from_username: str
    to_username: str
    body: str
    sent_at: datetime
    read_at: datetime | None = None

    class Config:
        from_attributes = True


class MessageCreatedResponse(BaseModel):
    message: MessageCreated


class MessageDetail(BaseModel):
    """A message with both endpoints' public profiles."""

    id: int
    body: str
    sent_at: datetime
    read_at: datetime | None = None
    from_user: UserPublic
    to_user: UserPublic

    class Config:
        from_attributes = True


class MessageDetailResponse(BaseModel):
    message: MessageDetail


class MessageReadStatus(BaseModel):
    id: int
    read_at: datetime

    class Config:
        from_attributes = True


class MessageReadResponse(BaseModel):
    message: MessageReadStatus

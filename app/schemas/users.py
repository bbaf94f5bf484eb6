"""Response schemas for user profiles and per-user message listings."""

from datetime import datetime

from pydantic import BaseModel


class UserPublic(BaseModel):
    """Public profile fields, safe to show to any logged-in user."""

    username: str
    first_name: str
    last_name: str
    phone: str

    class Config:
        from_attributes = True


class UserDetail(UserPublic):
    """Full profile including join and last-login timestamps (no password hash)."""

    join_at: datetime
    last_login_at: datetime | None = None


class UsersListResponse(BaseModel):
    users: list[UserPublic]


class UserResponse(BaseModel):
    user: UserDetail


class SentMessage(BaseModel):
    """A message the user sent, with the recipient's public profile."""

    id: int
    body: str
    sent_at: datetime
    read_at: datetime | None = None
    to_user: UserPublic

    class Config:
        from_attributes = True


class ReceivedMessage(BaseModel):
    """A message the user received, with the sender's public profile."""

    id: int
    body: str
    sent_at: datetime
    read_at: datetime | None = None
    from_user: UserPublic

    class Config:
        from_attributes = True


class SentMessagesResponse(BaseModel):
    messages: list[SentMessage]


class ReceivedMessagesResponse(BaseModel):
    messages: list[ReceivedMessage]

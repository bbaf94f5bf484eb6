"""Pydantic request/response schemas."""

from app.schemas.auth import CurrentUser, LoginRequest, RegisterRequest, TokenResponse
from app.schemas.errors import ErrorDetail, ErrorResponse
from app.schemas.health import HealthResponse
from app.schemas.messages import (
    MessageCreated,
    MessageCreatedResponse,
    MessageCreateRequest,
    MessageDetail,
    MessageDetailResponse,
    MessageReadResponse,
    MessageReadStatus,
)
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

__all__ = [
    "CurrentUser",
    "ErrorDetail",
    "ErrorResponse",
    "HealthResponse",
    "LoginRequest",
    "MessageCreateRequest",
    "MessageCreated",
    "MessageCreatedResponse",
    "MessageDetail",
    "MessageDetailResponse",
    "MessageReadResponse",
    "MessageReadStatus",
    "ReceivedMessage",
    "ReceivedMessagesResponse",
    "RegisterRequest",
    "SentMessage",
    "SentMessagesResponse",
    "TokenResponse",
    "UserDetail",
    "UserPublic",
    "UserResponse",
    "UsersListResponse",
]

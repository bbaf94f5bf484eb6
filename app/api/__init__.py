"""HTTP routes."""

from fastapi import APIRouter

from app.api import auth, health, messages, users
from app.schemas.errors import ErrorResponse

# Documented error shape; produced by the handlers in app.main.
ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Missing or invalid input"},
    401: {"model": ErrorResponse, "description": "Missing/invalid token or not allowed"},
    404: {"model": ErrorResponse, "description": "Unknown user or message"},
    409: {"model": ErrorResponse, "description": "Username already taken"},
}

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, tags=["auth"], responses=ERROR_RESPONSES)
router.include_router(
    users.router, prefix="/users", tags=["users"], responses=ERROR_RESPONSES
)
router.include_router(
    messages.router, prefix="/messages", tags=["messages"], responses=ERROR_RESPONSES
)

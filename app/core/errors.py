"""Domain error type shared by services, access checks and the HTTP layer."""

from enum import Enum


class ErrorKind(str, Enum):
    """Enumerated failure kinds; each maps to exactly one HTTP status."""

    VALIDATION = "validation"
    AUTH = "auth"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"


STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.AUTH: 401,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
}


class AppError(Exception):
    """Raised by services for an expected failure; carries its kind and a readable message."""

    def __init__(self, kind: ErrorKind, message: str) -> None:
        self.kind = kind
        self.message = message
        super().__init__(message)

    @property
    def status_code(self) -> int:
        return STATUS_BY_KIND[self.kind]

    def __repr__(self) -> str:
        return f"AppError({self.kind.value!r}, {self.message!r})"

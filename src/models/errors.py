"""Error handling data models."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class ErrorCode(str, Enum):
    """Standardized error codes."""

    # Authentication
    UNAUTHORIZED = "UNAUTHORIZED"

    # Input Validation
    INVALID_INPUT = "INVALID_INPUT"


class ErrorDetail(BaseModel):
    """Detailed error information."""

    code: ErrorCode = Field(..., description="Error code")
    message: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] | None = Field(None, description="Additional error context")
    correlation_id: str | None = Field(None, description="Request correlation ID")


# Custom exception classes
class ServiceError(Exception):
    """Base exception for errors raised by route handlers and their dependencies."""

    def __init__(self, code: ErrorCode, message: str, details: dict[str, Any] | None = None) -> None:
        self.code = code
        self.message = message
        self.details = details
        super().__init__(message)


class AuthenticationError(ServiceError):
    """The route requires an authenticated user and the request has none."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(ErrorCode.UNAUTHORIZED, message)

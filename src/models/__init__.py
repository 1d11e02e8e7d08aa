"""Data models for the service."""

from src.models.auth import ChangePasswordRequest, ResetPasswordRequest
from src.models.errors import AuthenticationError, ErrorCode, ErrorDetail, ServiceError
from src.models.health import HealthCheckResponse
from src.models.roles import RoleCreateRequest, RoleUpdateRequest

__all__ = [
    "AuthenticationError",
    "ChangePasswordRequest",
    "ErrorCode",
    "ErrorDetail",
    "HealthCheckResponse",
    "ResetPasswordRequest",
    "RoleCreateRequest",
    "RoleUpdateRequest",
    "ServiceError",
]

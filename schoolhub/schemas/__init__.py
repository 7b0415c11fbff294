"""Pydantic request/response schemas."""

from schoolhub.schemas.auth import (
    AuthResponse,
    CurrentUser,
    CurrentUserResponse,
    LoginRequest,
    RegisterRequest,
    UserProfile,
    UserPublic,
)
from schoolhub.schemas.common import CamelModel, ErrorResponse, HealthResponse, MessageResponse
from schoolhub.schemas.users import (
    CreateAdminRequest,
    CreateUserRequest,
    UpdateRoleRequest,
    UpdateUserRequest,
    UserAnalyticsEnvelope,
    UserEnvelope,
    UserListEnvelope,
    UserStatsEnvelope,
    SystemStatsEnvelope,
)

__all__ = [
    "AuthResponse",
    "CamelModel",
    "CreateAdminRequest",
    "CreateUserRequest",
    "CurrentUser",
    "CurrentUserResponse",
    "ErrorResponse",
    "HealthResponse",
    "LoginRequest",
    "MessageResponse",
    "RegisterRequest",
    "SystemStatsEnvelope",
    "UpdateRoleRequest",
    "UpdateUserRequest",
    "UserAnalyticsEnvelope",
    "UserEnvelope",
    "UserListEnvelope",
    "UserProfile",
    "UserPublic",
    "UserStatsEnvelope",
]

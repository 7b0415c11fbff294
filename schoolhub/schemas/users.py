"""Request/response schemas for admin and super-admin user management."""

from datetime import datetime
from typing import Literal

from pydantic import Field, field_validator

from schoolhub.core.permissions import Role
from schoolhub.core.security import PASSWORD_MAX_LEN, PASSWORD_MIN_LEN
from schoolhub.schemas.auth import UserProfile, UserPublic, normalize_email
from schoolhub.schemas.common import CamelModel

SortField = Literal["createdAt", "email", "role", "lastLogin", "loginCount"]
SortOrder = Literal["asc", "desc"]


class CreateUserRequest(CamelModel):
    """Admin-created account; any role."""

    email: str
    password: str = Field(..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN)
    role: Role
    first_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)
    phone: str | None = Field(default=None, max_length=50)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return normalize_email(v)


class CreateAdminRequest(CamelModel):
    """Super-admin-created administrator. role is checked by the service (admin or super_admin)."""

    email: str
    password: str = Field(..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN)
    role: str = "admin"
    first_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)
    phone: str | None = Field(default=None, max_length=50)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return normalize_email(v)


class UpdateUserRequest(CamelModel):
    """Partial update; omitted fields are left unchanged."""

    role: Role | None = None
    is_active: bool | None = None
    profile: UserProfile | None = None


class UpdateRoleRequest(CamelModel):
    role: Role


class Pagination(CamelModel):
    current_page: int
    total_pages: int
    total_users: int
    has_next: bool
    has_prev: bool


class UserData(CamelModel):
    user: UserPublic


class UserEnvelope(CamelModel):
    success: bool = True
    data: UserData


class UserListData(CamelModel):
    users: list[UserPublic]
    pagination: Pagination


class UserListEnvelope(CamelModel):
    success: bool = True
    data: UserListData


class UserStats(CamelModel):
    total_users: int
    role_counts: dict[str, int]
    new_this_month: int
    active_users: int


class UserStatsEnvelope(CamelModel):
    success: bool = True
    data: UserStats


class SystemStats(CamelModel):
    total_users: int
    active_users: int
    recent_logins: int = Field(description="Users who authenticated in the last 24 hours")
    role_counts: dict[str, int]


class SystemStatsEnvelope(CamelModel):
    success: bool = True
    data: SystemStats


class RoleDistribution(CamelModel):
    role: str
    count: int
    active: int


class LoginActivity(CamelModel):
    id: int
    email: str
    role: str
    is_active: bool
    last_login: datetime | None = None
    login_count: int


class UserAnalytics(CamelModel):
    role_distribution: list[RoleDistribution]
    recent_logins: list[LoginActivity]
    recent_registrations: list[UserPublic]


class UserAnalyticsEnvelope(CamelModel):
    success: bool = True
    data: UserAnalytics

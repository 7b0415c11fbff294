"""Request/response schemas for auth endpoints and the request identity context."""

import re
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from schoolhub.core.permissions import PermissionSet, Role
from schoolhub.core.security import PASSWORD_MAX_LEN, PASSWORD_MIN_LEN
from schoolhub.schemas.common import CamelModel

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def normalize_email(value: str) -> str:
    """Trim and lowercase an email; reject anything that is not address-shaped."""
    if not value or not value.strip():
        raise ValueError("email must be non-empty")
    normalized = value.strip().lower()
    if len(normalized) > 255 or not _EMAIL_RE.match(normalized):
        raise ValueError("email must be a valid email address")
    return normalized


class RegisterRequest(CamelModel):
    """Public self-registration. Always creates a parent account."""

    email: str = Field(..., description="Email (case-insensitive, must be unique)")
    password: str = Field(..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN)
    first_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)
    phone: str | None = Field(default=None, max_length=50)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return normalize_email(v)


class LoginRequest(CamelModel):
    """Credentials for login."""

    email: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return v.strip().lower()


class UserProfile(CamelModel):
    first_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)
    phone: str | None = Field(default=None, max_length=50)
    avatar: str | None = Field(default=None, max_length=1024)


class UserPublic(CamelModel):
    """User record as returned to clients; never includes the password hash."""

    id: int
    email: str
    role: Role
    profile: UserProfile
    permissions: PermissionSet
    is_active: bool
    last_login: datetime | None = None
    login_count: int = 0
    created_at: datetime | None = None


class AuthResponse(CamelModel):
    """Returned by register and login."""

    success: bool = True
    token: str
    user: UserPublic


class CurrentUserResponse(CamelModel):
    success: bool = True
    user: UserPublic


class CurrentUser(BaseModel):
    """Authenticated identity attached to the request (id, email, role)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    role: str
    is_active: bool = True

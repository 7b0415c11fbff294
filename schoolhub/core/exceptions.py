"""Application errors for authentication, authorization and user management.

Every error carries the HTTP status and client-facing message it maps to; the
handlers in ``schoolhub.main`` turn them into the ``{success, error}`` envelope.
"""

from collections.abc import Iterable

_BEARER_CHALLENGE = {"WWW-Authenticate": "Bearer"}


class SchoolHubError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code: int = 400
    default_message: str = "Bad request"
    headers: dict[str, str] | None = None

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class AuthenticationError(SchoolHubError):
    """Base for 401 errors; always advertises the Bearer scheme."""

    status_code = 401
    default_message = "Authentication required."
    headers = _BEARER_CHALLENGE


class MissingTokenError(AuthenticationError):
    """No Authorization header (or no bearer token in it)."""

    default_message = "Access denied. No token provided."


class InvalidTokenError(AuthenticationError):
    """Signature, format or expiry failure. The message never says which."""

    default_message = "Token is not valid."


class InactiveOrUnknownUserError(AuthenticationError):
    """Token verified but the account is gone or deactivated."""

    default_message = "Token is not valid or user is inactive."


class UnauthenticatedError(AuthenticationError):
    """An authorization gate ran without an identity context."""


class InvalidCredentialsError(AuthenticationError):
    """Login failure; identical for unknown email and wrong password."""

    default_message = "Invalid credentials."


class ForbiddenRoleError(SchoolHubError):
    """Authenticated, but the caller's role is not allowed on this route."""

    status_code = 403

    def __init__(self, allowed_roles: Iterable[str]) -> None:
        self.allowed_roles = tuple(allowed_roles)
        super().__init__(f"Access denied. Required roles: {', '.join(self.allowed_roles)}")


class ForbiddenPermissionError(SchoolHubError):
    """Authenticated, but the caller's role lacks the named permission."""

    status_code = 403

    def __init__(self, permission: str) -> None:
        self.permission = permission
        super().__init__(f"Insufficient permissions. Required: {permission}")


class DuplicateEmailError(SchoolHubError):
    default_message = "User already exists with this email."


class InvalidRoleError(SchoolHubError):
    default_message = "Invalid admin role"


class SelfModificationError(SchoolHubError):
    """An actor tried to change, deactivate or delete their own account."""

    default_message = "Cannot modify your own account"


class UserNotFoundError(SchoolHubError):
    status_code = 404
    default_message = "User not found"

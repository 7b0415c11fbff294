"""Auth routes (register, login, me) and the auth dependencies (get_current_user, require_role, require_permission)."""

from collections.abc import Callable
from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from schoolhub.core.database import get_db
from schoolhub.core.exceptions import InvalidTokenError, MissingTokenError
from schoolhub.core.permissions import PermissionName, check_permission, check_role
from schoolhub.schemas.auth import (
    AuthResponse,
    CurrentUser,
    CurrentUserResponse,
    LoginRequest,
    RegisterRequest,
)
from schoolhub.services import auth as auth_service
from schoolhub.services.users import get_user, public_user

router = APIRouter()
security = HTTPBearer(auto_error=False)


def get_current_user(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[Session, Depends(get_db)],
) -> CurrentUser:
    """
    Dependency: resolve the Bearer token to an active user and attach it to request.state.user.

    Every successful call records the access (last_login, login_count).
    """
    if credentials is None or not credentials.credentials:
        # A header with another scheme is a bad token, not a missing one.
        if request.headers.get("Authorization", "").strip():
            raise InvalidTokenError()
        raise MissingTokenError()
    user = auth_service.authenticate_token(db, credentials.credentials)
    current_user = CurrentUser.model_validate(user)
    request.state.user = current_user
    return current_user


def require_role(*roles: str) -> Callable[..., CurrentUser]:
    """Dependency factory: 403 unless the authenticated user has one of roles."""
    allowed = tuple(roles)

    def role_gate(
        current_user: Annotated[CurrentUser, Depends(get_current_user)],
    ) -> CurrentUser:
        check_role(current_user, allowed)
        return current_user

    return role_gate


def require_permission(permission: PermissionName) -> Callable[..., CurrentUser]:
    """Dependency factory: 403 unless the authenticated user's role grants permission."""

    def permission_gate(
        current_user: Annotated[CurrentUser, Depends(get_current_user)],
    ) -> CurrentUser:
        check_permission(current_user, permission)
        return current_user

    return permission_gate


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    body: RegisterRequest,
    db: Annotated[Session, Depends(get_db)],
) -> AuthResponse:
    """Self-register a parent account; returns a token and the new user."""
    token, user = auth_service.register(db, body)
    return AuthResponse(token=token, user=public_user(user))


@router.post("/login", response_model=AuthResponse)
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
) -> AuthResponse:
    """
    Authenticate with email and password; returns a token.
    Include the token in the Authorization header as: Bearer <token>
    """
    token, user = auth_service.login(db, body.email, body.password)
    return AuthResponse(token=token, user=public_user(user))


@router.get("/me", response_model=CurrentUserResponse)
def me(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> CurrentUserResponse:
    """Return the caller's own record with permissions derived from the current role."""
    return CurrentUserResponse(user=public_user(get_user(db, current_user.id)))

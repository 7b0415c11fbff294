"""Authentication flows: register, login, and resolving a bearer token to a user."""

import logging
from datetime import UTC, datetime

from sqlalchemy.orm import Session, defer

from schoolhub.core.exceptions import InactiveOrUnknownUserError, InvalidCredentialsError
from schoolhub.core.permissions import DEFAULT_ROLE
from schoolhub.core.security import issue_access_token, verify_access_token, verify_password
from schoolhub.models import User
from schoolhub.schemas.auth import RegisterRequest
from schoolhub.services.users import create_account

logger = logging.getLogger(__name__)


def record_login(db: Session, user: User) -> None:
    """
    Stamp last_login and increment login_count, then commit.

    Done as a single UPDATE with login_count = login_count + 1 so the database
    serializes concurrent increments for the same user.
    """
    db.query(User).filter(User.id == user.id).update(
        {
            User.last_login: datetime.now(UTC),
            User.login_count: User.login_count + 1,
        },
        synchronize_session=False,
    )
    db.commit()


def register(db: Session, body: RegisterRequest) -> tuple[str, User]:
    """Create a parent account and return (token, user). Public registration never grants another role."""
    user = create_account(
        db,
        email=body.email,
        password=body.password,
        role=DEFAULT_ROLE,
        first_name=body.first_name,
        last_name=body.last_name,
        phone=body.phone,
    )
    logger.info("Registered parent account id=%s", user.id)
    return issue_access_token(user.id), user


def login(db: Session, email: str, password: str) -> tuple[str, User]:
    """
    Check credentials against an active account and return (token, user).

    Unknown email, inactive account and wrong password all raise the same
    InvalidCredentialsError.
    """
    user = (
        db.query(User)
        .filter(User.email == email.strip().lower(), User.is_active.is_(True))
        .first()
    )
    if user is None or not verify_password(password, user.password_hash):
        logger.info("Rejected login attempt")
        raise InvalidCredentialsError()
    record_login(db, user)
    logger.info("User id=%s logged in", user.id)
    return issue_access_token(user.id), user


def authenticate_token(db: Session, token: str) -> User:
    """
    Resolve a bearer token to an active user and record the access.

    Raises InvalidTokenError (bad/expired token) or InactiveOrUnknownUserError.
    """
    claims = verify_access_token(token)
    user = (
        db.query(User)
        .options(defer(User.password_hash))
        .filter(User.id == claims.user_id)
        .first()
    )
    if user is None or not user.is_active:
        raise InactiveOrUnknownUserError()
    record_login(db, user)
    return user

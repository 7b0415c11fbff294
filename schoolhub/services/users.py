"""User records: public view, account creation, and admin management queries."""

import logging
import math
from datetime import UTC, datetime, timedelta

from sqlalchemy import case, func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from schoolhub.core.exceptions import DuplicateEmailError, InvalidRoleError, UserNotFoundError
from schoolhub.core.permissions import (
    ADMIN_ROLES,
    HasIdentity,
    check_not_self,
    get_permissions_for_role,
)
from schoolhub.core.security import USER_ID_MAX, USER_ID_MIN, hash_password
from schoolhub.models import User
from schoolhub.schemas.auth import UserProfile, UserPublic
from schoolhub.schemas.users import (
    CreateAdminRequest,
    CreateUserRequest,
    LoginActivity,
    Pagination,
    RoleDistribution,
    SystemStats,
    UpdateUserRequest,
    UserAnalytics,
    UserStats,
)

logger = logging.getLogger(__name__)

RECENT_LOGINS_LIMIT = 20
RECENT_REGISTRATIONS_LIMIT = 10
RECENT_LOGIN_WINDOW = timedelta(hours=24)

_SORT_COLUMNS = {
    "createdAt": User.created_at,
    "email": User.email,
    "role": User.role,
    "lastLogin": User.last_login,
    "loginCount": User.login_count,
}


def public_user(user: User) -> UserPublic:
    """Client-safe view of a user with permissions derived from the current role."""
    return UserPublic(
        id=user.id,
        email=user.email,
        role=user.role,
        profile=UserProfile(
            first_name=user.first_name,
            last_name=user.last_name,
            phone=user.phone,
            avatar=user.avatar,
        ),
        permissions=get_permissions_for_role(user.role),
        is_active=user.is_active,
        last_login=user.last_login,
        login_count=user.login_count or 0,
        created_at=user.created_at,
    )


def find_user_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == email.strip().lower()).first()


def get_user(db: Session, user_id: int) -> User:
    if not USER_ID_MIN <= user_id <= USER_ID_MAX:
        # Ids outside the key range cannot exist and would overflow the bind parameter.
        raise UserNotFoundError()
    user = db.get(User, user_id)
    if user is None:
        raise UserNotFoundError()
    return user


def create_account(
    db: Session,
    *,
    email: str,
    password: str,
    role: str,
    first_name: str | None = None,
    last_name: str | None = None,
    phone: str | None = None,
) -> User:
    """Hash the password and insert a user. Raises DuplicateEmailError if the email is taken."""
    email = email.strip().lower()
    if find_user_by_email(db, email) is not None:
        raise DuplicateEmailError()
    user = User(
        email=email,
        password_hash=hash_password(password),
        role=role,
        first_name=first_name,
        last_name=last_name,
        phone=phone,
        is_active=True,
        login_count=0,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        # Lost a race with a concurrent registration of the same email.
        db.rollback()
        raise DuplicateEmailError() from e
    db.refresh(user)
    logger.info("Created user id=%s role=%s", user.id, user.role)
    return user


def create_user(db: Session, body: CreateUserRequest) -> User:
    return create_account(
        db,
        email=body.email,
        password=body.password,
        role=body.role,
        first_name=body.first_name,
        last_name=body.last_name,
        phone=body.phone,
    )


def create_admin(db: Session, body: CreateAdminRequest) -> User:
    """Create an admin or super_admin account; any other role is rejected."""
    if body.role not in ADMIN_ROLES:
        raise InvalidRoleError()
    return create_account(
        db,
        email=body.email,
        password=body.password,
        role=body.role,
        first_name=body.first_name,
        last_name=body.last_name,
        phone=body.phone,
    )


def _escape_like(term: str) -> str:
    """Make % and _ in a search term match literally."""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def list_users(
    db: Session,
    page: int = 1,
    limit: int = 10,
    role: str | None = None,
    search: str | None = None,
    sort_by: str = "createdAt",
    sort_order: str = "desc",
) -> tuple[list[User], Pagination]:
    """Filter, sort and paginate users."""
    query = db.query(User)
    if role and role != "all":
        query = query.filter(User.role == role)
    if search and search.strip():
        pattern = f"%{_escape_like(search.strip())}%"
        query = query.filter(
            or_(
                User.email.ilike(pattern, escape="\\"),
                User.first_name.ilike(pattern, escape="\\"),
                User.last_name.ilike(pattern, escape="\\"),
            )
        )

    total = query.count()

    column = _SORT_COLUMNS.get(sort_by, User.created_at)
    if sort_order == "asc":
        query = query.order_by(column.asc(), User.id.asc())
    else:
        query = query.order_by(column.desc(), User.id.desc())
    users = query.offset((page - 1) * limit).limit(limit).all()

    total_pages = math.ceil(total / limit) if limit else 0
    pagination = Pagination(
        current_page=page,
        total_pages=total_pages,
        total_users=total,
        has_next=page < total_pages,
        has_prev=page > 1,
    )
    return users, pagination


def update_user(
    db: Session, actor: HasIdentity, user_id: int, body: UpdateUserRequest
) -> User:
    """Apply role / active flag / profile changes to another user's account."""
    check_not_self(actor, user_id, "modify")
    user = get_user(db, user_id)
    if body.role is not None:
        user.role = body.role
    if body.is_active is not None:
        user.is_active = body.is_active
    if body.profile is not None:
        for field, value in body.profile.model_dump(exclude_unset=True).items():
            setattr(user, field, value)
    db.commit()
    db.refresh(user)
    logger.info("User id=%s updated user id=%s", actor.id, user_id)
    return user


def update_role(db: Session, actor: HasIdentity, user_id: int, role: str) -> User:
    check_not_self(actor, user_id, "role")
    user = get_user(db, user_id)
    user.role = role
    db.commit()
    db.refresh(user)
    logger.info("User id=%s set role of user id=%s to %s", actor.id, user_id, role)
    return user


def deactivate_user(db: Session, actor: HasIdentity, user_id: int) -> User:
    check_not_self(actor, user_id, "deactivate")
    user = get_user(db, user_id)
    user.is_active = False
    db.commit()
    db.refresh(user)
    logger.info("User id=%s deactivated user id=%s", actor.id, user_id)
    return user


def delete_user(db: Session, actor: HasIdentity, user_id: int) -> None:
    check_not_self(actor, user_id, "delete")
    user = get_user(db, user_id)
    db.delete(user)
    db.commit()
    logger.info("User id=%s deleted user id=%s", actor.id, user_id)


def _role_counts(db: Session) -> dict[str, int]:
    rows = db.query(User.role, func.count(User.id)).group_by(User.role).all()
    return {role: int(count) for role, count in rows}


def user_stats(db: Session, now: datetime | None = None) -> UserStats:
    """Totals for the admin dashboard."""
    now = now or datetime.now(UTC)
    month_start = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    return UserStats(
        total_users=db.query(User).count(),
        role_counts=_role_counts(db),
        new_this_month=db.query(User).filter(User.created_at >= month_start).count(),
        active_users=db.query(User).filter(User.is_active.is_(True)).count(),
    )


def system_stats(db: Session, now: datetime | None = None) -> SystemStats:
    """Totals for the super-admin dashboard."""
    now = now or datetime.now(UTC)
    return SystemStats(
        total_users=db.query(User).count(),
        active_users=db.query(User).filter(User.is_active.is_(True)).count(),
        recent_logins=db.query(User)
        .filter(User.last_login >= now - RECENT_LOGIN_WINDOW)
        .count(),
        role_counts=_role_counts(db),
    )


def user_analytics(db: Session) -> UserAnalytics:
    """Role distribution, most recent logins and most recent registrations."""
    distribution_rows = (
        db.query(
            User.role,
            func.count(User.id),
            func.sum(case((User.is_active.is_(True), 1), else_=0)),
        )
        .group_by(User.role)
        .order_by(User.role)
        .all()
    )
    recent_logins = (
        db.query(User)
        .filter(User.last_login.isnot(None))
        .order_by(User.last_login.desc(), User.id.desc())
        .limit(RECENT_LOGINS_LIMIT)
        .all()
    )
    recent_registrations = (
        db.query(User)
        .order_by(User.created_at.desc(), User.id.desc())
        .limit(RECENT_REGISTRATIONS_LIMIT)
        .all()
    )
    return UserAnalytics(
        role_distribution=[
            RoleDistribution(role=role, count=int(count), active=int(active or 0))
            for role, count, active in distribution_rows
        ],
        recent_logins=[
            LoginActivity(
                id=u.id,
                email=u.email,
                role=u.role,
                is_active=u.is_active,
                last_login=u.last_login,
                login_count=u.login_count or 0,
            )
            for u in recent_logins
        ],
        recent_registrations=[public_user(u) for u in recent_registrations],
    )

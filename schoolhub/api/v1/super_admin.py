"""Super-admin oversight: all users, analytics, system stats, admin creation, role and deactivation."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from schoolhub.api.v1.auth import get_current_user, require_permission, require_role
from schoolhub.core.database import get_db
from schoolhub.schemas.auth import CurrentUser
from schoolhub.schemas.users import (
    CreateAdminRequest,
    SortField,
    SortOrder,
    SystemStatsEnvelope,
    UpdateRoleRequest,
    UserAnalyticsEnvelope,
    UserData,
    UserEnvelope,
    UserListData,
    UserListEnvelope,
)
from schoolhub.services import users as user_service

router = APIRouter(dependencies=[Depends(require_role("super_admin"))])


@router.get("/users", response_model=UserListEnvelope)
def list_all_users(
    db: Annotated[Session, Depends(get_db)],
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=100)] = 10,
    role: str | None = None,
    search: str | None = None,
    sort_by: Annotated[SortField, Query(alias="sortBy")] = "createdAt",
    sort_order: Annotated[SortOrder, Query(alias="sortOrder")] = "desc",
) -> UserListEnvelope:
    users, pagination = user_service.list_users(
        db,
        page=page,
        limit=limit,
        role=role,
        search=search,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    return UserListEnvelope(
        data=UserListData(
            users=[user_service.public_user(u) for u in users],
            pagination=pagination,
        )
    )


@router.get(
    "/analytics",
    response_model=UserAnalyticsEnvelope,
    dependencies=[Depends(require_permission("canViewAnalytics"))],
)
def get_user_analytics(db: Annotated[Session, Depends(get_db)]) -> UserAnalyticsEnvelope:
    """Role distribution, the 20 most recent logins and the 10 newest accounts."""
    return UserAnalyticsEnvelope(data=user_service.user_analytics(db))


@router.get("/stats", response_model=SystemStatsEnvelope)
def get_system_stats(db: Annotated[Session, Depends(get_db)]) -> SystemStatsEnvelope:
    return SystemStatsEnvelope(data=user_service.system_stats(db))


@router.post("/admins", response_model=UserEnvelope, status_code=status.HTTP_201_CREATED)
def create_admin(
    body: CreateAdminRequest,
    db: Annotated[Session, Depends(get_db)],
) -> UserEnvelope:
    """Create an admin (default) or super_admin account."""
    user = user_service.create_admin(db, body)
    return UserEnvelope(data=UserData(user=user_service.public_user(user)))


@router.put("/users/{user_id}/role", response_model=UserEnvelope)
def update_user_role(
    user_id: int,
    body: UpdateRoleRequest,
    actor: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> UserEnvelope:
    user = user_service.update_role(db, actor, user_id, body.role)
    return UserEnvelope(data=UserData(user=user_service.public_user(user)))


@router.put("/users/{user_id}/deactivate", response_model=UserEnvelope)
def deactivate_user(
    user_id: int,
    actor: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> UserEnvelope:
    user = user_service.deactivate_user(db, actor, user_id)
    return UserEnvelope(data=UserData(user=user_service.public_user(user)))

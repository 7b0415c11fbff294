"""Admin user management: list, inspect, create, update and delete accounts."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from schoolhub.api.v1.auth import get_current_user, require_permission, require_role
from schoolhub.core.database import get_db
from schoolhub.core.permissions import ADMIN_ROLES
from schoolhub.schemas.auth import CurrentUser
from schoolhub.schemas.common import MessageResponse
from schoolhub.schemas.users import (
    CreateUserRequest,
    SortField,
    SortOrder,
    UpdateUserRequest,
    UserData,
    UserEnvelope,
    UserListData,
    UserListEnvelope,
    UserStatsEnvelope,
)
from schoolhub.services import users as user_service

router = APIRouter(dependencies=[Depends(require_role(*ADMIN_ROLES))])


@router.get("", response_model=UserListEnvelope)
def list_users(
    db: Annotated[Session, Depends(get_db)],
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=100)] = 10,
    role: str | None = None,
    search: str | None = None,
    sort_by: Annotated[SortField, Query(alias="sortBy")] = "createdAt",
    sort_order: Annotated[SortOrder, Query(alias="sortOrder")] = "desc",
) -> UserListEnvelope:
    """List users with optional role filter, search and sorting."""
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
    "/stats",
    response_model=UserStatsEnvelope,
    dependencies=[Depends(require_permission("canViewAnalytics"))],
)
def get_user_stats(db: Annotated[Session, Depends(get_db)]) -> UserStatsEnvelope:
    return UserStatsEnvelope(data=user_service.user_stats(db))


@router.get("/{user_id}", response_model=UserEnvelope)
def get_user(user_id: int, db: Annotated[Session, Depends(get_db)]) -> UserEnvelope:
    user = user_service.get_user(db, user_id)
    return UserEnvelope(data=UserData(user=user_service.public_user(user)))


@router.post("", response_model=UserEnvelope, status_code=status.HTTP_201_CREATED)
def create_user(
    body: CreateUserRequest,
    db: Annotated[Session, Depends(get_db)],
) -> UserEnvelope:
    """Create an account with any role."""
    user = user_service.create_user(db, body)
    return UserEnvelope(data=UserData(user=user_service.public_user(user)))


@router.put("/{user_id}", response_model=UserEnvelope)
def update_user(
    user_id: int,
    body: UpdateUserRequest,
    actor: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> UserEnvelope:
    """Update role, active flag or profile of another user."""
    user = user_service.update_user(db, actor, user_id, body)
    return UserEnvelope(data=UserData(user=user_service.public_user(user)))


@router.delete("/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: int,
    actor: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> MessageResponse:
    user_service.delete_user(db, actor, user_id)
    return MessageResponse(message="User deleted successfully")

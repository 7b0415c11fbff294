"""Role → permission table and the pure authorization checks built on it.

Permissions are always derived from the role; nothing here is stored.
"""

from typing import Literal, Protocol

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from schoolhub.core.exceptions import (
    ForbiddenPermissionError,
    ForbiddenRoleError,
    SelfModificationError,
    UnauthenticatedError,
)

Role = Literal["super_admin", "admin", "staff", "teacher", "parent"]

ROLE_VALUES: tuple[str, ...] = ("super_admin", "admin", "staff", "teacher", "parent")

# Least-privilege role; also the role forced on public registration.
DEFAULT_ROLE = "parent"

ADMIN_ROLES: tuple[str, ...] = ("admin", "super_admin")

PermissionName = Literal[
    "canManageUsers",
    "canManageStudents",
    "canManageStaff",
    "canManageInventory",
    "canViewAnalytics",
]


class PermissionSet(BaseModel):
    """Five named capabilities; serialized with camelCase keys."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    can_manage_users: bool = False
    can_manage_students: bool = False
    can_manage_staff: bool = False
    can_manage_inventory: bool = False
    can_view_analytics: bool = False

    def allows(self, permission: str) -> bool:
        """True if the camelCase permission name is granted; unknown names are never granted."""
        return bool(self.model_dump(by_alias=True).get(permission, False))


_FULL_ACCESS = PermissionSet(
    can_manage_users=True,
    can_manage_students=True,
    can_manage_staff=True,
    can_manage_inventory=True,
    can_view_analytics=True,
)

ROLE_PERMISSIONS: dict[str, PermissionSet] = {
    "super_admin": _FULL_ACCESS,
    "admin": _FULL_ACCESS,
    "staff": PermissionSet(can_manage_inventory=True),
    "teacher": PermissionSet(can_manage_students=True),
    "parent": PermissionSet(),
}


class HasRole(Protocol):
    role: str


class HasIdentity(Protocol):
    id: int
    role: str


def get_permissions_for_role(role: str) -> PermissionSet:
    """Exact-match lookup; unknown roles get the parent (least-privilege) set."""
    return ROLE_PERMISSIONS.get(role, ROLE_PERMISSIONS[DEFAULT_ROLE])


def has_permission(user: HasRole, permission: str) -> bool:
    return get_permissions_for_role(user.role).allows(permission)


def check_role(user: HasRole | None, allowed_roles: tuple[str, ...]) -> None:
    """Raise unless the user is present and holds one of allowed_roles."""
    if user is None:
        raise UnauthenticatedError()
    if user.role not in allowed_roles:
        raise ForbiddenRoleError(allowed_roles)


def check_permission(user: HasRole | None, permission: str) -> None:
    """Raise unless the user's role grants the named permission."""
    if user is None:
        raise UnauthenticatedError()
    if not has_permission(user, permission):
        raise ForbiddenPermissionError(permission)


SelfAction = Literal["modify", "role", "deactivate", "delete"]

_SELF_MODIFICATION_MESSAGES: dict[str, str] = {
    "modify": "Cannot modify your own account",
    "role": "Cannot modify your own role",
    "deactivate": "Cannot deactivate your own account",
    "delete": "Cannot delete your own account",
}


def check_not_self(actor: HasIdentity, target_id: int, action: SelfAction = "modify") -> None:
    """Reject any admin action an actor aims at their own account."""
    if actor.id == target_id:
        raise SelfModificationError(_SELF_MODIFICATION_MESSAGES[action])

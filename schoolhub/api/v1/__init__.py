"""API v1 routes."""

from fastapi import APIRouter

from schoolhub.api.v1 import admin_users, auth, health, super_admin

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(admin_users.router, prefix="/admin/users", tags=["admin"])
router.include_router(super_admin.router, prefix="/super-admin/users", tags=["super-admin"])

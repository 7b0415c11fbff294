"""ORM model for application users (auth and RBAC)."""

from sqlalchemy import Boolean, CheckConstraint, Column, DateTime, Integer, String, func, true

from schoolhub.models.base import Base


class User(Base):
    """
    User account for JWT authentication and role-based access control.

    role: 'super_admin', 'admin', 'staff', 'teacher' or 'parent'.
    email is stored lowercased so the unique index is case-insensitive.
    Permissions are derived from role and never stored here.
    """

    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint(
            "role IN ('super_admin', 'admin', 'staff', 'teacher', 'parent')",
            name="role",
        ),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(32), nullable=False, index=True)

    first_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=True)
    phone = Column(String(50), nullable=True)
    avatar = Column(String(1024), nullable=True)

    is_active = Column(Boolean, nullable=False, default=True, server_default=true())
    last_login = Column(DateTime(timezone=True), nullable=True)
    login_count = Column(Integer, nullable=False, default=0, server_default="0")

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

"""SQLAlchemy ORM models."""

from schoolhub.models.base import Base
from schoolhub.models.user import User

__all__ = ["Base", "User"]

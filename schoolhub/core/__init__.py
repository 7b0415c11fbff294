"""Core app configuration, database, security and permissions."""

from schoolhub.core.config import get_settings, settings
from schoolhub.core.database import get_db

__all__ = ["get_settings", "settings", "get_db"]

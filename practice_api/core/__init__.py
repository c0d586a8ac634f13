"""Core app configuration, database, security and errors."""

from practice_api.core.config import Settings, get_settings
from practice_api.core.database import get_db

__all__ = ["Settings", "get_settings", "get_db"]

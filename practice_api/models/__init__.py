"""SQLAlchemy ORM models."""

from practice_api.models.base import Base
from practice_api.models.user import DEFAULT_ROLE, ROLES, User

__all__ = ["Base", "DEFAULT_ROLE", "ROLES", "User"]

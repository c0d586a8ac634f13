"""Response schemas for user records. No schema here carries a password field."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for response bodies: snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class UserPublic(CamelModel):
    """User as returned by the API (never includes the password hash)."""

    id: str
    username: str
    email: str
    role: str
    created_at: datetime
    updated_at: datetime


class UsersPage(CamelModel):
    """Response for GET /users."""

    items: list[UserPublic]
    page: int
    limit: int
    total_pages: int
    total_count: int


class DeleteUserResponse(CamelModel):
    message: str = "User deleted successfully"
    id: str

"""User listing and deletion (bearer token required)."""

import math
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from practice_api.api.v1.deps import get_current_user
from practice_api.core.database import get_db
from practice_api.schemas.auth import CurrentUser
from practice_api.schemas.users import DeleteUserResponse, UserPublic, UsersPage
from practice_api.services.users import delete_user, list_users

router = APIRouter()

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


@router.get("", response_model=UsersPage)
def get_users(
    _user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=MAX_PAGE_SIZE)] = DEFAULT_PAGE_SIZE,
) -> UsersPage:
    """List users page by page, oldest first. Password hashes are never included."""
    users, total = list_users(db, page, limit)
    return UsersPage(
        items=[UserPublic.model_validate(u) for u in users],
        page=page,
        limit=limit,
        total_pages=math.ceil(total / limit),
        total_count=total,
    )


@router.delete("/{user_id}", response_model=DeleteUserResponse)
def remove_user(
    user_id: str,
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> DeleteUserResponse:
    """Delete a user. Allowed for the account owner or an admin."""
    delete_user(db, user_id, current_user)
    return DeleteUserResponse(id=user_id)

"""Shared route dependencies: app settings and the bearer-token guard."""

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from practice_api.core.config import Settings
from practice_api.core.database import get_db
from practice_api.core.errors import AuthError
from practice_api.core.security import decode_access_token
from practice_api.models import User
from practice_api.schemas.auth import CurrentUser

security = HTTPBearer(auto_error=False)

# Same message for every failure so callers cannot tell a missing token from a bad one.
NOT_AUTHENTICATED = "Not authenticated"


def get_app_settings(request: Request) -> Settings:
    """Dependency: the Settings the application was created with."""
    return request.app.state.settings


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    settings: Annotated[Settings, Depends(get_app_settings)],
    db: Annotated[Session, Depends(get_db)],
) -> CurrentUser:
    """Dependency: require valid Bearer JWT and return the current user. Raises 401 if missing or invalid."""
    if credentials is None:
        raise AuthError(NOT_AUTHENTICATED)
    try:
        identity = decode_access_token(credentials.credentials, settings)
    except AuthError as e:
        raise AuthError(NOT_AUTHENTICATED) from e
    user = db.query(User).filter(User.id == identity.user_id).first()
    if user is None:
        raise AuthError(NOT_AUTHENTICATED)
    return CurrentUser.model_validate(user)

"""Register and login endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from practice_api.api.v1.deps import get_app_settings
from practice_api.core.config import Settings
from practice_api.core.database import get_db
from practice_api.schemas.auth import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
)
from practice_api.schemas.users import UserPublic
from practice_api.services.users import authenticate, register_user
from practice_api.services.validation import validate_login, validate_registration

router = APIRouter()


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
)
def register(
    body: RegisterRequest,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> RegisterResponse:
    """
    Create an account with username, email and password.
    New accounts always get the 'user' role.
    """
    data = validate_registration(body)
    user = register_user(db, data, settings)
    return RegisterResponse(user=UserPublic.model_validate(user))


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> LoginResponse:
    """
    Authenticate with email and password; returns a JWT access token.
    Include the token in the Authorization header as: Bearer <token>
    """
    data = validate_login(body)
    token, user = authenticate(db, data, settings)
    return LoginResponse(token=token, user=UserPublic.model_validate(user))

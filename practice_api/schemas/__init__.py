"""Pydantic request/response schemas."""

from practice_api.schemas.auth import (
    CurrentUser,
    LoginInput,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
    RegistrationInput,
    TokenIdentity,
)
from practice_api.schemas.health import HealthResponse, MessageResponse
from practice_api.schemas.users import DeleteUserResponse, UserPublic, UsersPage

__all__ = [
    "CurrentUser",
    "DeleteUserResponse",
    "HealthResponse",
    "LoginInput",
    "LoginRequest",
    "LoginResponse",
    "MessageResponse",
    "RegisterRequest",
    "RegisterResponse",
    "RegistrationInput",
    "TokenIdentity",
    "UserPublic",
    "UsersPage",
]

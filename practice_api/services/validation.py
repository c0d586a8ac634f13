"""Check-and-normalize validation for registration and login input. No I/O."""

import re
from typing import Any

from practice_api.core.errors import ValidationError
from practice_api.core.security import (
    EMAIL_MAX_LEN,
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
)
from practice_api.schemas.auth import (
    LoginInput,
    LoginRequest,
    RegisterRequest,
    RegistrationInput,
)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def normalize_email(raw_email: str | None) -> str:
    """Normalize an email string by stripping whitespace and lowering case."""
    return (raw_email or "").strip().lower()


def _error(field: str, message: str) -> dict[str, Any]:
    return {"field": field, "message": message}


def validate_registration(body: RegisterRequest) -> RegistrationInput:
    """
    Validate a registration body and return its normalized fields.

    All violations are collected before raising, so the client sees every
    problem in one response.
    """
    errors: list[dict[str, Any]] = []

    username = (body.username or "").strip()
    if len(username) < USERNAME_MIN_LEN:
        errors.append(
            _error("username", f"Username must be at least {USERNAME_MIN_LEN} characters.")
        )
    elif len(username) > USERNAME_MAX_LEN:
        errors.append(
            _error("username", f"Username must be at most {USERNAME_MAX_LEN} characters.")
        )

    email = normalize_email(body.email)
    if len(email) > EMAIL_MAX_LEN:
        errors.append(_error("email", f"Email must be at most {EMAIL_MAX_LEN} characters."))
    elif not EMAIL_PATTERN.match(email):
        errors.append(_error("email", "Email must be a valid email address."))

    password = body.password or ""
    if len(password) < PASSWORD_MIN_LEN:
        errors.append(
            _error("password", f"Password must be at least {PASSWORD_MIN_LEN} characters.")
        )
    elif len(password) > PASSWORD_MAX_LEN:
        errors.append(
            _error("password", f"Password must be at most {PASSWORD_MAX_LEN} characters.")
        )

    if errors:
        raise ValidationError(errors)
    return RegistrationInput(username=username, email=email, password=password)


def validate_login(body: LoginRequest) -> LoginInput:
    """Require both email and password; only presence is checked here."""
    errors: list[dict[str, Any]] = []
    email = normalize_email(body.email)
    if not email:
        errors.append(_error("email", "Email is required."))
    if not body.password:
        errors.append(_error("password", "Password is required."))
    if errors:
        raise ValidationError(errors)
    return LoginInput(email=email, password=body.password)

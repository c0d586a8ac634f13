"""User registration, authentication, listing and deletion against the users table."""

import logging
from functools import lru_cache
from typing import TYPE_CHECKING

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from practice_api.core.errors import (
    AuthError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)
from practice_api.core.security import (
    create_access_token,
    hash_password,
    verify_password,
)
from practice_api.models import DEFAULT_ROLE, ROLES, User
from practice_api.schemas.auth import (
    CurrentUser,
    LoginInput,
    RegistrationInput,
    TokenIdentity,
)

if TYPE_CHECKING:
    from practice_api.core.config import Settings

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"
DUPLICATE_USER = "A user with that username or email already exists."


@lru_cache
def _dummy_hash(rounds: int) -> str:
    """Hash checked against when the email is unknown, so both login failures cost one bcrypt check."""
    return hash_password("not-a-real-password", rounds=rounds)


def register_user(
    db: Session,
    data: RegistrationInput,
    settings: "Settings",
    role: str = DEFAULT_ROLE,
) -> User:
    """
    Persist a new user with a hashed password.

    The lookup below is only a fast path; the unique indexes on username and
    email decide concurrent registrations, surfacing as IntegrityError on commit.
    """
    if role not in ROLES:
        raise ValidationError(
            [{"field": "role", "message": f"Role must be one of: {', '.join(ROLES)}."}]
        )
    existing = (
        db.query(User)
        .filter(or_(User.username == data.username, User.email == data.email))
        .first()
    )
    if existing is not None:
        raise ConflictError(DUPLICATE_USER)

    user = User(
        username=data.username,
        email=data.email,
        password_hash=hash_password(data.password, rounds=settings.BCRYPT_ROUNDS),
        role=role,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.info("Registration lost uniqueness race for email=%s", data.email)
        raise ConflictError(DUPLICATE_USER) from e
    db.refresh(user)
    logger.info("Registered user id=%s role=%s", user.id, user.role)
    return user


def authenticate(
    db: Session,
    data: LoginInput,
    settings: "Settings",
) -> tuple[str, User]:
    """
    Check credentials and issue an access token.

    Unknown email and wrong password raise the same AuthError.
    """
    user = db.query(User).filter(User.email == data.email).first()
    if user is None:
        verify_password(data.password, _dummy_hash(settings.BCRYPT_ROUNDS))
        logger.warning("Login failed: invalid credentials")
        raise AuthError(INVALID_CREDENTIALS)
    if not verify_password(data.password, user.password_hash):
        logger.warning("Login failed: invalid credentials")
        raise AuthError(INVALID_CREDENTIALS)

    token = create_access_token(
        TokenIdentity(user_id=user.id, email=user.email, role=user.role),
        settings,
    )
    return token, user


def list_users(db: Session, page: int, limit: int) -> tuple[list[User], int]:
    """Return one page of users (oldest first) and the total user count."""
    total = db.query(User).count()
    users = (
        db.query(User)
        .order_by(User.created_at, User.id)
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    return users, total


def delete_user(db: Session, target_id: str, requester: CurrentUser) -> None:
    """Delete a user; allowed for the user themself or an admin."""
    user = db.query(User).filter(User.id == target_id).first()
    if user is None:
        raise NotFoundError("User not found")
    if requester.id != user.id and requester.role != "admin":
        raise ForbiddenError("Not allowed to delete this user")

    db.delete(user)
    db.commit()
    logger.info("Deleted user id=%s by requester id=%s", target_id, requester.id)

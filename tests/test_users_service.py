"""Unit tests for practice_api.services.users with mocked sessions, plus the users table role constraint."""

import unittest
from unittest.mock import MagicMock

from sqlalchemy import create_engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from practice_api.core.errors import (
    AuthError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)
from practice_api.core.security import hash_password
from practice_api.models import ROLES, Base, User
from practice_api.schemas.auth import CurrentUser, LoginInput, RegistrationInput
from practice_api.services.users import (
    INVALID_CREDENTIALS,
    authenticate,
    delete_user,
    register_user,
)


def _settings() -> MagicMock:
    settings = MagicMock()
    settings.BCRYPT_ROUNDS = 4
    return settings


def _requester(user_id: str = "u1", role: str = "user") -> CurrentUser:
    return CurrentUser(id=user_id, username="requester", email="r@example.com", role=role)


class TestRegisterUser(unittest.TestCase):
    """register_user pre-checks duplicates and maps write-time uniqueness failures to ConflictError."""

    def setUp(self) -> None:
        self.data = RegistrationInput(username="abc", email="a@b.com", password="secret1")

    def test_existing_user_conflicts_without_writing(self) -> None:
        session = MagicMock()
        session.query.return_value.filter.return_value.first.return_value = MagicMock()
        with self.assertRaises(ConflictError):
            register_user(session, self.data, _settings())
        session.add.assert_not_called()
        session.commit.assert_not_called()

    def test_integrity_error_on_commit_becomes_conflict(self) -> None:
        session = MagicMock()
        session.query.return_value.filter.return_value.first.return_value = None
        session.commit.side_effect = IntegrityError("INSERT INTO users", {}, Exception("unique"))
        with self.assertRaises(ConflictError) as ctx:
            register_user(session, self.data, _settings())
        self.assertEqual(ctx.exception.status_code, 409)
        session.rollback.assert_called_once()

    def test_stores_hash_not_plaintext(self) -> None:
        session = MagicMock()
        session.query.return_value.filter.return_value.first.return_value = None
        user = register_user(session, self.data, _settings())
        session.add.assert_called_once_with(user)
        self.assertNotEqual(user.password_hash, "secret1")
        self.assertEqual(user.role, "user")

    def test_role_can_be_set_by_caller(self) -> None:
        session = MagicMock()
        session.query.return_value.filter.return_value.first.return_value = None
        user = register_user(session, self.data, _settings(), role="admin")
        self.assertEqual(user.role, "admin")

    def test_unknown_role_is_rejected_before_writing(self) -> None:
        session = MagicMock()
        session.query.return_value.filter.return_value.first.return_value = None
        with self.assertRaises(ValidationError) as ctx:
            register_user(session, self.data, _settings(), role="superuser")
        self.assertEqual(ctx.exception.errors[0]["field"], "role")
        session.add.assert_not_called()
        session.commit.assert_not_called()


class TestRoleConstraint(unittest.TestCase):
    """The users table itself refuses roles outside the allowed set."""

    def test_database_rejects_unknown_role(self) -> None:
        engine = create_engine("sqlite://")
        self.addCleanup(engine.dispose)
        Base.metadata.create_all(engine)
        with Session(engine) as db:
            db.add(
                User(
                    username="abc",
                    email="a@b.com",
                    password_hash=hash_password("secret1", rounds=4),
                    role="superuser",
                )
            )
            with self.assertRaises(IntegrityError):
                db.commit()

    def test_database_accepts_every_allowed_role(self) -> None:
        engine = create_engine("sqlite://")
        self.addCleanup(engine.dispose)
        Base.metadata.create_all(engine)
        with Session(engine) as db:
            for i, role in enumerate(ROLES):
                db.add(
                    User(
                        username=f"user{i}",
                        email=f"user{i}@b.com",
                        password_hash="x",
                        role=role,
                    )
                )
            db.commit()
            self.assertEqual(db.query(User).count(), len(ROLES))


class TestAuthenticate(unittest.TestCase):
    """Unknown email and wrong password fail identically."""

    def test_unknown_email_and_wrong_password_share_message(self) -> None:
        data = LoginInput(email="a@b.com", password="wrong-password")

        missing = MagicMock()
        missing.query.return_value.filter.return_value.first.return_value = None
        with self.assertRaises(AuthError) as unknown_ctx:
            authenticate(missing, data, _settings())

        user = MagicMock()
        user.password_hash = hash_password("secret1", rounds=4)
        present = MagicMock()
        present.query.return_value.filter.return_value.first.return_value = user
        with self.assertRaises(AuthError) as wrong_ctx:
            authenticate(present, data, _settings())

        self.assertEqual(unknown_ctx.exception.message, INVALID_CREDENTIALS)
        self.assertEqual(wrong_ctx.exception.message, INVALID_CREDENTIALS)


class TestDeleteUser(unittest.TestCase):
    """delete_user: 404 before 403; owner or admin may delete."""

    def _session_with(self, user: object) -> MagicMock:
        session = MagicMock()
        session.query.return_value.filter.return_value.first.return_value = user
        return session

    def test_missing_target_is_not_found(self) -> None:
        session = self._session_with(None)
        with self.assertRaises(NotFoundError):
            delete_user(session, "nope", _requester(role="admin"))
        session.delete.assert_not_called()

    def test_other_user_is_forbidden(self) -> None:
        target = MagicMock()
        target.id = "u2"
        session = self._session_with(target)
        for role in ("user", "moderator"):
            with self.subTest(role=role):
                with self.assertRaises(ForbiddenError):
                    delete_user(session, "u2", _requester("u1", role))
        session.delete.assert_not_called()

    def test_owner_and_admin_can_delete(self) -> None:
        for requester in (_requester("u2", "user"), _requester("u1", "admin")):
            with self.subTest(requester=requester.id):
                target = MagicMock()
                target.id = "u2"
                session = self._session_with(target)
                delete_user(session, "u2", requester)
                session.delete.assert_called_once_with(target)
                session.commit.assert_called_once()


if __name__ == "__main__":
    unittest.main()

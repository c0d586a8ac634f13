"""
Create a user with any role (e.g. the first admin). Run from project root:
  python -m practice_api.scripts.create_user USERNAME EMAIL PASSWORD [role]
Example:
  python -m practice_api.scripts.create_user admin admin@example.com your-secure-password admin
"""
import argparse
import logging
import sys

from practice_api.core.config import get_settings
from practice_api.core.database import build_engine, build_session_factory
from practice_api.core.errors import ConflictError, ValidationError
from practice_api.models import DEFAULT_ROLE, ROLES
from practice_api.schemas.auth import RegisterRequest
from practice_api.services.users import register_user
from practice_api.services.validation import validate_registration


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a Student Practice API user.")
    parser.add_argument("username", help="Username (3-255 chars)")
    parser.add_argument("email", help="Email address")
    parser.add_argument("password", help="Password (6-128 chars)")
    parser.add_argument("role", nargs="?", default=DEFAULT_ROLE, choices=ROLES)
    args = parser.parse_args(argv)

    try:
        data = validate_registration(
            RegisterRequest(username=args.username, email=args.email, password=args.password)
        )
    except ValidationError as e:
        for err in e.errors:
            print(f"{err['field']}: {err['message']}", file=sys.stderr)
        return 1

    settings = get_settings()
    engine = build_engine(settings)
    db = build_session_factory(engine)()
    try:
        user = register_user(db, data, settings, role=args.role)
    except ConflictError as e:
        print(e.message, file=sys.stderr)
        return 1
    finally:
        db.close()
        engine.dispose()
    print(f"Created user '{user.username}' ({user.id}) with role '{user.role}'.")
    return 0


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s %(message)s")
    sys.exit(main())

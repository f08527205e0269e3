"""
Create a user (e.g. first admin) through the signup flow. Run from project root:
  python -m acquisitions.scripts.create_user EMAIL NAME PASSWORD [role]
Example:
  python -m acquisitions.scripts.create_user admin@example.com "Site Admin" your-secure-password admin
"""
import argparse
import logging
import sys

from acquisitions.core.config import get_settings
from acquisitions.core.database import SessionLocal
from acquisitions.core.errors import RequestValidationFailed, UserCreationFailed, UserExistsError
from acquisitions.core.logging_config import configure_logging
from acquisitions.schemas.auth import SignupRequest
from acquisitions.schemas.validation import validate_body
from acquisitions.services.auth_service import signup

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Create an Acquisitions user.")
    parser.add_argument("email", help="Login email")
    parser.add_argument("name", help="Display name")
    parser.add_argument("password", help="Password (6-128 chars)")
    parser.add_argument("role", nargs="?", default="user", choices=["user", "admin"])
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(get_settings())

    try:
        body = validate_body(
            SignupRequest,
            {"email": args.email, "name": args.name, "password": args.password, "role": args.role},
            "Invalid user data",
        )
    except RequestValidationFailed as e:
        for detail in e.details or []:
            print(f"{detail['field']}: {detail['message']}", file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        user = signup(db, body.email, body.name, body.password, body.role)
    except UserExistsError:
        print(f"User '{body.email}' already exists.", file=sys.stderr)
        return 1
    except UserCreationFailed as e:
        logger.error("User creation failed: %r", e.cause)
        print(e.message, file=sys.stderr)
        return 1
    finally:
        db.close()

    print(f"Created user '{user.email}' (id={user.id}) with role '{user.role}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""
Register a user from the shell. Run from project root:
  python -m app.scripts.create_user USERNAME PASSWORD FIRST_NAME LAST_NAME PHONE
Example:
  python -m app.scripts.create_user alice secret1 Alice Smith 555-0100
"""
import argparse
import logging
import sys

from app.core.database import SessionLocal
from app.core.errors import AppError
from app.core.security import get_password_hasher
from app.services.users import register

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Register a Messagely user.")
    parser.add_argument("username", help="Username (1-255 chars)")
    parser.add_argument("password", help="Password")
    parser.add_argument("first_name")
    parser.add_argument("last_name")
    parser.add_argument("phone")
    args = parser.parse_args(argv)

    db = SessionLocal()
    try:
        user = register(
            db,
            get_password_hasher(),
            username=args.username.strip(),
            password=args.password,
            first_name=args.first_name.strip(),
            last_name=args.last_name.strip(),
            phone=args.phone.strip(),
        )
        print(f"Created user '{user.username}'.")
        return 0
    except AppError as e:
        print(e.message, file=sys.stderr)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())

"""
Create a user (e.g. the first super admin). Run from project root:
  python -m schoolhub.scripts.create_user EMAIL PASSWORD [role] [--first-name X --last-name Y]
Example:
  python -m schoolhub.scripts.create_user superadmin@school.com your-secure-password super_admin
"""
import argparse
import logging
import sys

from schoolhub.core.database import SessionLocal
from schoolhub.core.exceptions import DuplicateEmailError
from schoolhub.core.permissions import ROLE_VALUES
from schoolhub.core.security import PASSWORD_MAX_LEN, PASSWORD_MIN_LEN
from schoolhub.schemas.auth import normalize_email
from schoolhub.services.users import create_account

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a SchoolHub user (bootstrap accounts).")
    parser.add_argument("email", help="Email address (stored lowercased)")
    parser.add_argument("password", help=f"Password ({PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} chars)")
    parser.add_argument("role", nargs="?", default="super_admin", choices=ROLE_VALUES)
    parser.add_argument("--first-name", default=None)
    parser.add_argument("--last-name", default=None)
    parser.add_argument("--phone", default=None)
    args = parser.parse_args(argv)

    try:
        email = normalize_email(args.email)
    except ValueError as e:
        print(str(e), file=sys.stderr)
        return 1
    if not (PASSWORD_MIN_LEN <= len(args.password) <= PASSWORD_MAX_LEN):
        print(
            f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters.",
            file=sys.stderr,
        )
        return 1

    db = SessionLocal()
    try:
        user = create_account(
            db,
            email=email,
            password=args.password,
            role=args.role,
            first_name=args.first_name,
            last_name=args.last_name,
            phone=args.phone,
        )
        user_id = user.id
    except DuplicateEmailError:
        print(f"User '{email}' already exists.", file=sys.stderr)
        return 1
    finally:
        db.close()
    logger.info("Created user '%s' with role '%s' (id=%s).", email, args.role, user_id)
    return 0


if __name__ == "__main__":
    sys.exit(main())

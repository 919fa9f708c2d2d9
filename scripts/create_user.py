"""Create a user account directly in the database.

Usage:
  python scripts/create_user.py --email admin@example.com --password '...' --name Admin --role admin

Registration through the API always creates regular users, so this is how the
first admin gets in.
"""

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from auth.credentials import CredentialStore
from auth.models import User
from config import settings
from database import Database
import institution.models  # noqa: F401
import license.models  # noqa: F401
import subscription.models  # noqa: F401


def main() -> None:
    ap = argparse.ArgumentParser()
    ap.add_argument("--email", required=True)
    ap.add_argument("--password", required=True)
    ap.add_argument("--name", required=True)
    ap.add_argument("--role", choices=["user", "admin"], default="user")
    ap.add_argument("--institution-id", default=None)
    args = ap.parse_args()

    if not settings.DATABASE_URL:
        sys.exit("DATABASE_URL is not set")

    database = Database(settings.DATABASE_URL)
    db = database.session()
    try:
        user_id = CredentialStore(db).create_account(args.email, args.password)
        db.add(User(
            id=user_id,
            email=CredentialStore.normalize_email(args.email),
            name=args.name,
            role=args.role,
            institution_id=args.institution_id,
        ))
        db.commit()
    finally:
        db.close()

    print(f"Created {args.role} {args.email} with id {user_id}")


if __name__ == "__main__":
    main()

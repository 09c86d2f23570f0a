"""Utility script to create the first administrator account."""

from __future__ import annotations

import argparse
from getpass import getpass

from sqlalchemy.exc import SQLAlchemyError

from expense_tracker.application.use_cases.users.create_user import create_user
from expense_tracker.infrastructure.database import SessionLocal, initialize_database
from expense_tracker.infrastructure.repositories import RoleRepository
from expense_tracker.infrastructure.seed import ADMIN_ROLE


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for administrator creation."""

    parser = argparse.ArgumentParser(
        description="Create an administrator for the Expense Tracker API.",
    )
    parser.add_argument("--username", default="admin", help="Login name (default: admin)")
    parser.add_argument("--name", default="Administrator", help="Display name")
    parser.add_argument(
        "--email",
        default="admin@example.com",
        help="Email address (default: admin@example.com)",
    )
    parser.add_argument(
        "--password",
        default=None,
        help="Password. Prompted for interactively when omitted.",
    )
    return parser.parse_args()


def main() -> None:
    """Create an administrator using the provided command line arguments."""

    args = parse_args()

    password = args.password or getpass("Password for the administrator: ")
    if not password:
        raise SystemExit("No password was provided.")

    initialize_database()

    session = SessionLocal()
    try:
        admin_role = RoleRepository(session).get_by_name(ADMIN_ROLE)
        if admin_role is None:
            raise SystemExit("The admin role is missing; the database was not seeded.")
        user = create_user(
            session,
            username=args.username,
            name=args.name,
            email=args.email,
            password=password,
            role_ids=[admin_role.id],
        )
    except ValueError as exc:
        session.rollback()
        raise SystemExit(f"Could not create the user: {exc}") from exc
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Could not save the user: {exc}") from exc
    else:
        print(
            "Administrator created:\n"
            f"  ID: {user.id}\n"
            f"  Username: {user.username}\n"
            f"  Email: {user.email}"
        )
    finally:
        session.close()


if __name__ == "__main__":
    main()

"""Utility script to create a user that can sign in and receive notifications."""

from __future__ import annotations

import argparse
from getpass import getpass

from sqlalchemy.exc import SQLAlchemyError

from servicedesk.application.use_cases.users.create_user import create_user
from servicedesk.domain.entities import ROLE_ADMIN, ROLE_AGENT, ROLE_SUPERVISOR, ROLE_TECHNICIAN
from servicedesk.infrastructure.database import SessionLocal, initialize_database
from servicedesk.logging_config import configure_logging


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for user creation."""

    parser = argparse.ArgumentParser(
        description="Create a user for the service desk notification API.",
    )
    parser.add_argument(
        "--name",
        default="Administrator",
        help="Full name of the user (default: Administrator)",
    )
    parser.add_argument(
        "--email",
        default="admin@example.com",
        help="Login email of the user (default: admin@example.com)",
    )
    parser.add_argument(
        "--role",
        default=ROLE_ADMIN,
        choices=[ROLE_ADMIN, ROLE_SUPERVISOR, ROLE_TECHNICIAN, ROLE_AGENT],
        help="Role alias; admins receive every global notification (default: admin)",
    )
    parser.add_argument(
        "--password",
        default=None,
        help="Password. Prompted interactively when omitted.",
    )
    return parser.parse_args()


def main() -> None:
    """Create a user using the provided command line arguments."""

    args = parse_args()
    configure_logging()

    password = args.password or getpass("Password: ")
    if not password:
        raise SystemExit("A password is required.")

    initialize_database()

    session = SessionLocal()
    try:
        user = create_user(
            session,
            name=args.name,
            email=args.email,
            password=password,
            role_alias=args.role,
        )
    except ValueError as exc:
        session.rollback()
        raise SystemExit(f"Could not create the user: {exc}") from exc
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Database error while saving the user: {exc}") from exc
    else:
        print(
            "User created:\n"
            f"  ID: {user.id}\n"
            f"  Name: {user.name}\n"
            f"  Email: {user.email}\n"
            f"  Role: {user.role.alias}"
        )
    finally:
        session.close()


if __name__ == "__main__":
    main()

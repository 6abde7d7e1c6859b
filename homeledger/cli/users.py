"""CLI for managing user accounts.

Self-service registration is disabled by default, so accounts are created
and maintained from the command line.

Usage:
    homeledger-users create --username alice --email alice@example.com
    homeledger-users list
    homeledger-users reset-password --username alice
    homeledger-users delete --username alice

Exit Codes:
    0 - Success
    1 - Failure (validation error, unknown user, database error)
"""

import argparse
import getpass
import logging
import sys

from dotenv import load_dotenv
from sqlalchemy.exc import SQLAlchemyError

from homeledger.api.errors import AppError
from homeledger.services import SessionLocal, init_db
from homeledger.services.logging import setup_server_logging
from homeledger.services.user_service import UserService

logger = logging.getLogger("homeledger.cli.users")


def _read_password(provided: str | None) -> str:
    if provided:
        return provided
    password = getpass.getpass("Password: ")
    if password != getpass.getpass("Repeat password: "):
        raise ValueError("Passwords do not match")
    return password


def create_user(service: UserService, args: argparse.Namespace) -> None:
    user = service.create_user(args.username, args.email, _read_password(args.password))
    logger.info("User created: id=%d, username=%s, email=%s", user.id, user.username, user.email)


def list_users(service: UserService, args: argparse.Namespace) -> None:
    users = service.list_users()
    if not users:
        logger.info("No users found")
        return
    for u in users:
        logger.info(
            "%4d  %-20s  %-30s  %d properties", u.id, u.username, u.email, u.property_count
        )
    logger.info("Total: %d users", len(users))


def reset_password(service: UserService, args: argparse.Namespace) -> None:
    service.set_password(args.username, _read_password(args.password))
    logger.info("Password updated for %s", args.username)


def delete_user(service: UserService, args: argparse.Namespace) -> None:
    service.delete_user(args.username)
    logger.info("User %s deleted with all of their properties", args.username)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="homeledger-users", description="Manage HomeLedger users")
    sub = parser.add_subparsers(dest="command", required=True)

    create = sub.add_parser("create", help="Create a user")
    create.add_argument("--username", required=True)
    create.add_argument("--email", required=True)
    create.add_argument("--password", help="Prompted for when omitted")
    create.set_defaults(handler=create_user)

    listing = sub.add_parser("list", help="List users")
    listing.set_defaults(handler=list_users)

    reset = sub.add_parser("reset-password", help="Set a new password")
    reset.add_argument("--username", required=True)
    reset.add_argument("--password", help="Prompted for when omitted")
    reset.set_defaults(handler=reset_password)

    delete = sub.add_parser("delete", help="Delete a user and everything they own")
    delete.add_argument("--username", required=True)
    delete.set_defaults(handler=delete_user)

    return parser


def main(argv: list[str] | None = None) -> int:
    """
    Main entry point for the user administration CLI.

    Returns:
        Exit code: 0 for success, 1 for failure
    """
    args = build_parser().parse_args(argv)

    load_dotenv()
    setup_server_logging(log_file="logs/cli.log")

    db = SessionLocal()
    try:
        init_db()
        args.handler(UserService(db), args)
        return 0
    except AppError as e:
        logger.error("%s", e.message)
        return 1
    except ValueError as e:
        logger.error("%s", e)
        return 1
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Database error: %s", e, exc_info=True)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())

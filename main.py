"""Command-line interface for the user API service."""

from __future__ import annotations
import argparse
import logging
import sys
from getpass import getpass
from typing import Sequence

from userapi.config import Settings, load_settings
from userapi.database import Database
from userapi.users import insert_user, list_users

logger = logging.getLogger("userapi.main")

KNOWN_COMMANDS = {"serve", "init-db", "create-user", "list-users"}


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="User API utilities")
    subparsers = parser.add_subparsers(dest="command")

    parser.set_defaults(command="serve")

    subparsers.add_parser("init-db", help="Initialise the users database")
    subparsers.add_parser("list-users", help="Print every stored user")

    serve_parser = subparsers.add_parser("serve", help="Start the HTTP API")
    serve_parser.add_argument("--host", default=None, help="Bind address (default: from settings)")
    serve_parser.add_argument("--port", type=int, default=None, help="Port for the HTTP API (default: from settings)")

    create_parser = subparsers.add_parser("create-user", help="Create a user from the command line")
    create_parser.add_argument("name", help="Display name for the user")
    create_parser.add_argument("email", help="Email address for the user")

    args_list = list(argv) if argv is not None else sys.argv[1:]

    if not args_list:
        args_list = ["serve"]
    else:
        first = args_list[0]
        if first in ("-h", "--help"):
            return parser.parse_args(args_list)
        if first not in KNOWN_COMMANDS:
            if any(flag in args_list for flag in ("-h", "--help")):
                return parser.parse_args(args_list)
            args_list = ["serve", *args_list]

    return parser.parse_args(args_list)


def _initialise_database(settings: Settings) -> Database:
    database = Database(settings.database_path)
    database.initialize()
    logger.info("Database initialised at %s", settings.database_path)
    return database


def _serve(*, database: Database, host: str, port: int, log_level: str) -> None:
    from userapi.api import create_app
    import uvicorn

    logger.info("Starting user API on http://%s:%s", host, port)

    app = create_app(database=database)
    uvicorn.run(app, host=host, port=port, log_level=log_level)


def _prompt_for_password() -> str | None:
    for _ in range(3):
        password = getpass("Password: ")
        if not password:
            print("Password must not be empty. Please try again.")
            continue
        confirmation = getpass("Confirm password: ")
        if password != confirmation:
            print("Passwords do not match. Please try again.")
            continue
        return password
    return None


def _create_user(database: Database, name: str, email: str) -> int:
    name = name.strip()
    email = email.strip()
    if not name or not email:
        print("Name and email must not be empty.", file=sys.stderr)
        return 1

    password = _prompt_for_password()
    if password is None:
        print("Failed to set password after three attempts.", file=sys.stderr)
        return 1

    result = insert_user(database, name, email, password)
    if not result.success:
        print(f"Failed to create user: {result.error}", file=sys.stderr)
        return 1

    print(f"Created user #{result.last_row_id}: {name} <{email}>")
    return 0


def _list_users(database: Database) -> int:
    users = list_users(database)
    if not users:
        print("No users are currently registered.")
        return 0

    print(f"{len(users)} user(s) found:")
    print(f"{'ID':>4}  {'Name':<24}  {'Email':<32}  Updated")
    print("-" * 80)
    for user in users:
        print(f"{user.id:>4}  {user.name:<24}  {user.email:<32}  {user.updated_at or ''}")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for CLI usage."""

    settings = load_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    args = _parse_args(argv)
    database = _initialise_database(settings)

    if args.command == "serve":
        _serve(
            database=database,
            host=args.host or settings.host,
            port=args.port or settings.port,
            log_level=settings.log_level,
        )
    elif args.command == "create-user":
        return _create_user(database, args.name, args.email)
    elif args.command == "list-users":
        return _list_users(database)
    elif args.command == "init-db":
        print("Database initialisation complete.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

"""SkyElectroTech storefront management CLI.

Creates and drops the storefront collections' indexes, and issues bearer
tokens for local development.

Usage:
    python src/manage.py setup-db
    python src/manage.py drop-db
    python src/manage.py issue-token --user-id u-1 --role admin --name "Store Admin"
"""

import argparse
import sys

from rich.console import Console

from shared.auth import Actor, Role, create_access_token
from shared.db import drop_db, get_database, setup_db

console = Console()


def setup_database(database=None):
    database = database if database is not None else get_database()
    console.print(f"Creating indexes in [bold]{database.name}[/bold]...")
    setup_db(database)
    console.print("Done.")


def drop_database(database=None):
    database = database if database is not None else get_database()
    console.print(f"Dropping storefront collections in [bold]{database.name}[/bold]...")
    drop_db(database)
    console.print("Done.")


def issue_token(user_id, role=Role.USER.value, name=None, expires_minutes=60 * 24) -> str:
    return create_access_token(Actor(id=user_id, role=role, name=name), expires_minutes=expires_minutes)


def main(argv=None):
    parser = argparse.ArgumentParser(description="SkyElectroTech storefront management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create the storefront indexes")
    subparsers.add_parser("drop-db", help="Drop all storefront collections")

    token_parser = subparsers.add_parser("issue-token", help="Issue a bearer token for local development")
    token_parser.add_argument("--user-id", required=True)
    token_parser.add_argument("--role", choices=[role.value for role in Role], default=Role.USER.value)
    token_parser.add_argument("--name")
    token_parser.add_argument("--expires-minutes", type=int, default=60 * 24)

    args = parser.parse_args(argv)

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "issue-token":
        print(issue_token(args.user_id, args.role, args.name, args.expires_minutes))
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()

# src/threadline/scripts/manage.py
"""Operator commands for account administration.

Usage:
    python -m threadline.scripts.manage create-admin <username> <password>
    python -m threadline.scripts.manage issue-token <username>
    python -m threadline.scripts.manage init-db
"""

from __future__ import annotations

import argparse
import sys

from threadline.core.errors import ForumError
from threadline.core.logging import setup_logging
from threadline.core.settings import settings
from threadline.db.session import Database
from threadline.services.accounts import AccountService


def create_admin(database: Database, username: str, password: str) -> int:
    session = database.session()
    try:
        user = AccountService(session).register(username, password, is_admin=True)
    finally:
        session.close()
    print(f"Created admin {user.username} ({user.id})")
    return 0


def issue_token(database: Database, username: str) -> int:
    session = database.session()
    try:
        accounts = AccountService(session)
        user = accounts.get_by_username(username)
        if user is None:
            print(f"No such user: {username}", file=sys.stderr)
            return 1
        print(accounts.issue_token(user))
    finally:
        session.close()
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="threadline-manage", description=__doc__.splitlines()[0])
    sub = parser.add_subparsers(dest="command", required=True)

    admin = sub.add_parser("create-admin", help="Create an administrator account")
    admin.add_argument("username")
    admin.add_argument("password")

    token = sub.add_parser("issue-token", help="Print an access token for an existing user")
    token.add_argument("username")

    sub.add_parser("init-db", help="Create all database tables")
    return parser


def main(argv: list[str] | None = None, database: Database | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(settings.log_level, settings.log_format)
    owns_database = database is None
    database = database or Database(settings.effective_database_url, echo=settings.sql_debug)
    try:
        if args.command == "init-db":
            database.create_tables()
            print("Tables created")
            return 0
        if args.command == "create-admin":
            return create_admin(database, args.username, args.password)
        return issue_token(database, args.username)
    except ForumError as err:
        print(f"error: {err.message}", file=sys.stderr)
        return 1
    finally:
        if owns_database:
            database.close()


if __name__ == "__main__":
    sys.exit(main())

"""Create an administrator account in the configured database."""

from __future__ import annotations

import argparse
import logging
import sys

from portal.config import Settings, get_settings
from portal.db.database import build_engine, build_session_factory, init_schema
from portal.db.repositories import users as user_repo
from portal.errors import ConflictError

logger = logging.getLogger("portal.scripts.add_admin")

MIN_PASSWORD_LENGTH = 6


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create an administrator account")
    parser.add_argument("username", help="Login name of the new administrator")
    parser.add_argument("password", help=f"Password (at least {MIN_PASSWORD_LENGTH} characters)")
    return parser.parse_args(argv)


def add_admin(username: str, password: str, settings: Settings) -> int:
    username = username.strip()
    if not username:
        print("Username must not be empty.", file=sys.stderr)
        return 1
    if len(password) < MIN_PASSWORD_LENGTH:
        print(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long.", file=sys.stderr)
        return 1

    engine = build_engine(settings.database_url)
    try:
        if settings.auto_create_schema:
            init_schema(engine)
        session = build_session_factory(engine)()
        try:
            user = user_repo.register_user(session, username, password)
        except ConflictError as e:
            print(f"{e.message}: {username}", file=sys.stderr)
            return 1
        finally:
            session.close()
    finally:
        engine.dispose()

    print(f"Administrator '{user.username}' created with id {user.id}.")
    logger.info("admin_created: id=%s username=%s", user.id, user.username)
    return 0


def main(argv: list[str] | None = None) -> int:
    if not logging.getLogger().handlers:
        logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    args = parse_args(argv)
    return add_admin(args.username, args.password, get_settings())


if __name__ == "__main__":  # pragma: no cover - manual execution path
    sys.exit(main())

"""Database schema and migrations for the post board."""

from __future__ import annotations

import argparse
import os
import sqlite3
from contextlib import closing
from dataclasses import dataclass

from dotenv import find_dotenv, load_dotenv


@dataclass(frozen=True)
class _Migration:
    name: str
    up: tuple[str, ...]
    down: tuple[str, ...]


_INITIAL = _Migration(
    name="m20250701_070609_Todo",
    up=(
        """
        CREATE TABLE IF NOT EXISTS "user" (
            "id" INTEGER PRIMARY KEY AUTOINCREMENT,
            "name" VARCHAR NOT NULL,
            "surname" VARCHAR NOT NULL
        )
        """,
        """
        CREATE TABLE IF NOT EXISTS "post" (
            "id" INTEGER PRIMARY KEY AUTOINCREMENT,
            "title" VARCHAR NOT NULL,
            "text" VARCHAR NOT NULL,
            "user_id" INTEGER NOT NULL,
            FOREIGN KEY ("user_id") REFERENCES "user" ("id")
        )
        """,
        """
        CREATE TABLE IF NOT EXISTS "comm" (
            "id" INTEGER PRIMARY KEY AUTOINCREMENT,
            "text" VARCHAR NOT NULL,
            "post_id" INTEGER NOT NULL,
            "user_id" INTEGER NOT NULL,
            FOREIGN KEY ("post_id") REFERENCES "post" ("id"),
            FOREIGN KEY ("user_id") REFERENCES "user" ("id")
        )
        """,
    ),
    down=(
        'DROP TABLE "comm"',
        'DROP TABLE "post"',
        'DROP TABLE "user"',
    ),
)

_MIGRATIONS = (_INITIAL,)

_TRACKING_TABLE = "seaql_migrations"


def _ensure_tracking(conn: sqlite3.Connection) -> None:
    conn.execute(
        f'CREATE TABLE IF NOT EXISTS "{_TRACKING_TABLE}" '
        '("version" VARCHAR PRIMARY KEY, "applied_at" INTEGER NOT NULL)'
    )


def _applied(conn: sqlite3.Connection) -> set[str]:
    _ensure_tracking(conn)
    rows = conn.execute(f'SELECT "version" FROM "{_TRACKING_TABLE}"')
    return {version for (version,) in rows}


def migrate_up(conn: sqlite3.Connection) -> list[str]:
    """Apply every pending migration and return the names applied."""
    done = _applied(conn)
    applied = []
    for migration in _MIGRATIONS:
        if migration.name in done:
            continue
        with conn:
            for statement in migration.up:
                conn.execute(statement)
            conn.execute(
                f'INSERT INTO "{_TRACKING_TABLE}" ("version", "applied_at") '
                "VALUES (?, strftime('%s', 'now'))",
                (migration.name,),
            )
        applied.append(migration.name)
    return applied


def migrate_down(conn: sqlite3.Connection) -> list[str]:
    """Roll back every applied migration, newest first, and return their names."""
    done = _applied(conn)
    rolled_back = []
    for migration in reversed(_MIGRATIONS):
        if migration.name not in done:
            continue
        with conn:
            for statement in migration.down:
                conn.execute(statement)
            conn.execute(
                f'DELETE FROM "{_TRACKING_TABLE}" WHERE "version" = ?',
                (migration.name,),
            )
        rolled_back.append(migration.name)
    return rolled_back


def _database_path(url: str) -> str:
    """Turn a ``sqlite:`` URL or a plain path into a filesystem path."""
    path = url
    for prefix in ("sqlite:///", "sqlite://", "sqlite:"):
        if path.startswith(prefix):
            path = path[len(prefix):]
            if prefix == "sqlite:///" and not path.startswith("/"):
                path = "/" + path
            break
    return path.split("?", 1)[0]


def _connect(url: str) -> sqlite3.Connection:
    conn = sqlite3.connect(_database_path(url))
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


def main(argv=None) -> int:
    """Run the migration command line."""
    load_dotenv(find_dotenv(usecwd=True))
    parser = argparse.ArgumentParser(
        prog="postboard-migrate", description="Manage the post board schema."
    )
    parser.add_argument(
        "-u",
        "--database-url",
        default=os.environ.get("DATABASE_URL"),
        help="database URL (defaults to DATABASE_URL)",
    )
    parser.add_argument(
        "command",
        nargs="?",
        default="up",
        choices=("up", "down", "status", "refresh"),
    )
    args = parser.parse_args(argv)
    if not args.database_url:
        parser.error("no database URL given and DATABASE_URL is not set")

    with closing(_connect(args.database_url)) as conn:
        if args.command == "up":
            names = migrate_up(conn)
            for name in names:
                print(f"Applying migration '{name}'")
            if not names:
                print("No pending migrations")
        elif args.command == "down":
            for name in migrate_down(conn):
                print(f"Rolling back migration '{name}'")
        elif args.command == "refresh":
            for name in migrate_down(conn):
                print(f"Rolling back migration '{name}'")
            for name in migrate_up(conn):
                print(f"Applying migration '{name}'")
        else:
            done = _applied(conn)
            for migration in _MIGRATIONS:
                state = "Applied" if migration.name in done else "Pending"
                print(f"{migration.name}\t{state}")
    return 0
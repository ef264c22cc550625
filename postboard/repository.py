"""SQLite-backed storage for users, posts and comments."""

from __future__ import annotations

import sqlite3
import threading
from collections.abc import Iterator
from contextlib import contextmanager

from .models import Comment, Post, User
from .schema import migrate_up


class DatabaseError(Exception):
    """A query against the store failed."""


def _user(row: sqlite3.Row | None) -> User | None:
    if row is None:
        return None
    return User(id=row["id"], name=row["name"], surname=row["surname"])


def _post(row: sqlite3.Row | None) -> Post | None:
    if row is None:
        return None
    return Post(id=row["id"], title=row["title"], text=row["text"], user_id=row["user_id"])


def _comment(row: sqlite3.Row | None) -> Comment | None:
    if row is None:
        return None
    return Comment(
        id=row["id"], text=row["text"], post_id=row["post_id"], user_id=row["user_id"]
    )


class Database:
    """A connection to the store; opening it applies pending migrations."""

    def __init__(self, path) -> None:
        self._lock = threading.Lock()
        try:
            self._conn = sqlite3.connect(str(path), check_same_thread=False)
            self._conn.row_factory = sqlite3.Row
            self._conn.execute("PRAGMA foreign_keys = ON")
            migrate_up(self._conn)
        except sqlite3.Error as exc:
            raise DatabaseError(str(exc)) from exc

    def close(self) -> None:
        with self._lock:
            self._conn.close()

    def __enter__(self) -> Database:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @contextmanager
    def _transaction(self) -> Iterator[sqlite3.Connection]:
        with self._lock:
            try:
                with self._conn:
                    yield self._conn
            except sqlite3.Error as exc:
                raise DatabaseError(str(exc)) from exc

    # posts

    def find_post(self, post_id: int) -> Post | None:
        with self._transaction() as conn:
            row = conn.execute('SELECT * FROM "post" WHERE "id" = ?', (post_id,)).fetchone()
        return _post(row)

    def find_post_by_title(self, title: str, user_id: int) -> Post | None:
        with self._transaction() as conn:
            row = conn.execute(
                'SELECT * FROM "post" WHERE "title" = ? AND "user_id" = ? LIMIT 1',
                (title, user_id),
            ).fetchone()
        return _post(row)

    def insert_post(self, title: str, text: str, user_id: int) -> Post:
        with self._transaction() as conn:
            cur = conn.execute(
                'INSERT INTO "post" ("title", "text", "user_id") VALUES (?, ?, ?)',
                (title, text, user_id),
            )
        return Post(id=cur.lastrowid, title=title, text=text, user_id=user_id)

    def all_posts(self) -> list[Post]:
        with self._transaction() as conn:
            rows = conn.execute('SELECT * FROM "post" ORDER BY "id"').fetchall()
        return [_post(row) for row in rows]

    def update_post(self, post_id: int, title: str | None, text: str | None) -> Post:
        """Change the given fields of a post; ``None`` leaves a field as it is."""
        with self._transaction() as conn:
            cur = conn.execute(
                'UPDATE "post" SET "title" = COALESCE(?, "title"), '
                '"text" = COALESCE(?, "text") WHERE "id" = ?',
                (title, text, post_id),
            )
            if cur.rowcount == 0:
                raise DatabaseError(f"post {post_id} was not updated: no such record")
            row = conn.execute('SELECT * FROM "post" WHERE "id" = ?', (post_id,)).fetchone()
        return _post(row)

    def delete_post(self, post_id: int) -> int:
        with self._transaction() as conn:
            cur = conn.execute('DELETE FROM "post" WHERE "id" = ?', (post_id,))
        return cur.rowcount

    def delete_comments_for_post(self, post_id: int) -> int:
        with self._transaction() as conn:
            cur = conn.execute('DELETE FROM "comm" WHERE "post_id" = ?', (post_id,))
        return cur.rowcount

    # users

    def find_user(self, user_id: int) -> User | None:
        with self._transaction() as conn:
            row = conn.execute('SELECT * FROM "user" WHERE "id" = ?', (user_id,)).fetchone()
        return _user(row)

    def find_user_by_name(self, name: str, surname: str) -> User | None:
        with self._transaction() as conn:
            row = conn.execute(
                'SELECT * FROM "user" WHERE "name" = ? AND "surname" = ? LIMIT 1',
                (name, surname),
            ).fetchone()
        return _user(row)

    def insert_user(self, name: str, surname: str) -> User:
        with self._transaction() as conn:
            cur = conn.execute(
                'INSERT INTO "user" ("name", "surname") VALUES (?, ?)', (name, surname)
            )
        return User(id=cur.lastrowid, name=name, surname=surname)

    def all_users(self) -> list[User]:
        with self._transaction() as conn:
            rows = conn.execute('SELECT * FROM "user" ORDER BY "id"').fetchall()
        return [_user(row) for row in rows]

    def delete_user(self, user_id: int) -> int:
        with self._transaction() as conn:
            cur = conn.execute('DELETE FROM "user" WHERE "id" = ?', (user_id,))
        return cur.rowcount

    # comments

    def find_comment(self, text: str, user_id: int, post_id: int) -> Comment | None:
        with self._transaction() as conn:
            row = conn.execute(
                'SELECT * FROM "comm" WHERE "text" = ? AND "user_id" = ? '
                'AND "post_id" = ? LIMIT 1',
                (text, user_id, post_id),
            ).fetchone()
        return _comment(row)

    def insert_comment(self, text: str, post_id: int, user_id: int) -> Comment:
        with self._transaction() as conn:
            cur = conn.execute(
                'INSERT INTO "comm" ("text", "post_id", "user_id") VALUES (?, ?, ?)',
                (text, post_id, user_id),
            )
        return Comment(id=cur.lastrowid, text=text, post_id=post_id, user_id=user_id)

    def comments_for_post(self, post_id: int) -> list[Comment]:
        with self._transaction() as conn:
            rows = conn.execute(
                'SELECT * FROM "comm" WHERE "post_id" = ? ORDER BY "id"', (post_id,)
            ).fetchall()
        return [_comment(row) for row in rows]
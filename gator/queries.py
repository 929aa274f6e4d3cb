"""Database access for users, feeds and feed follows."""

from __future__ import annotations

import sqlite3
import uuid
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Callable, Iterator, Sequence, TypeVar

from .models import Feed, FeedFollowRow, User

T = TypeVar("T")

_SCHEMA = """
CREATE TABLE IF NOT EXISTS users (
    id TEXT PRIMARY KEY,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL,
    name TEXT NOT NULL UNIQUE
);
CREATE TABLE IF NOT EXISTS feeds (
    id TEXT PRIMARY KEY,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL,
    name TEXT NOT NULL,
    url TEXT NOT NULL UNIQUE,
    user_id TEXT NOT NULL REFERENCES users (id) ON DELETE CASCADE
);
CREATE TABLE IF NOT EXISTS feed_follows (
    id TEXT PRIMARY KEY,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL,
    user_id TEXT NOT NULL REFERENCES users (id) ON DELETE CASCADE,
    feed_id TEXT NOT NULL REFERENCES feeds (id) ON DELETE CASCADE,
    UNIQUE (user_id, feed_id)
);
"""

_USER_COLUMNS = "id, created_at, updated_at, name"
_FEED_COLUMNS = "id, created_at, updated_at, name, url, user_id"
_FOLLOW_SELECT = """
SELECT feed_follows.id, feed_follows.created_at, feed_follows.updated_at,
       feed_follows.user_id, feed_follows.feed_id,
       feeds.name AS feed_name, users.name AS user_name
FROM feed_follows
INNER JOIN feeds ON feed_follows.feed_id = feeds.id
INNER JOIN users ON feed_follows.user_id = users.id
"""


class NotFoundError(LookupError):
    """A query that must return one row returned none."""


def connect(db_url: str) -> sqlite3.Connection:
    """Open a database given a path, ``:memory:`` or a ``sqlite://`` URL."""
    target = db_url
    for prefix in ("sqlite:///", "sqlite://"):
        if target.startswith(prefix):
            target = target[len(prefix):]
            break
    if not target:
        target = ":memory:"
    conn = sqlite3.connect(target, isolation_level=None)
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


def create_schema(conn: sqlite3.Connection) -> None:
    """Create the users, feeds and feed_follows tables if they are missing."""
    conn.executescript(_SCHEMA)


def _param(value: Any) -> Any:
    if isinstance(value, uuid.UUID):
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat()
    return value


class Queries:
    """Typed queries over a database connection."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn
        self._in_transaction = False

    @contextmanager
    def transaction(self) -> Iterator[Queries]:
        """Run the enclosed queries in one transaction, rolled back on error."""
        if self._in_transaction:
            raise RuntimeError("transaction already in progress")
        if self._conn.in_transaction:
            self._conn.commit()
        self._conn.execute("BEGIN")
        tx = Queries(self._conn)
        tx._in_transaction = True
        try:
            yield tx
        except BaseException:
            self._conn.rollback()
            raise
        else:
            self._conn.commit()

    def _execute(self, sql: str, params: Sequence[Any] = ()) -> sqlite3.Cursor:
        cursor = self._conn.execute(sql, [_param(p) for p in params])
        if not self._in_transaction and self._conn.in_transaction:
            self._conn.commit()
        return cursor

    def _one(self, sql: str, params: Sequence[Any], build: Callable[[Sequence[Any]], T]) -> T:
        row = self._conn.execute(sql, [_param(p) for p in params]).fetchone()
        if row is None:
            raise NotFoundError("no rows in result set")
        return build(row)

    def _many(self, sql: str, params: Sequence[Any], build: Callable[[Sequence[Any]], T]) -> list[T]:
        rows = self._conn.execute(sql, [_param(p) for p in params]).fetchall()
        return [build(row) for row in rows]

    # Users

    def create_user(self, id: uuid.UUID, created_at: datetime, updated_at: datetime, name: str) -> User:
        self._execute(
            f"INSERT INTO users ({_USER_COLUMNS}) VALUES (?, ?, ?, ?)",
            (id, created_at, updated_at, name),
        )
        return self.get_user_by_id(id)

    def delete_users(self) -> None:
        self._execute("DELETE FROM users")

    def get_user(self, name: str) -> User:
        return self._one(f"SELECT {_USER_COLUMNS} FROM users WHERE name = ?", (name,), User.from_row)

    def get_user_by_id(self, id: uuid.UUID) -> User:
        return self._one(f"SELECT {_USER_COLUMNS} FROM users WHERE id = ?", (id,), User.from_row)

    def get_users(self) -> list[User]:
        return self._many(f"SELECT {_USER_COLUMNS} FROM users", (), User.from_row)

    # Feeds

    def create_feed(
        self,
        id: uuid.UUID,
        created_at: datetime,
        updated_at: datetime,
        name: str,
        url: str,
        user_id: uuid.UUID,
    ) -> Feed:
        self._execute(
            f"INSERT INTO feeds ({_FEED_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?)",
            (id, created_at, updated_at, name, url, user_id),
        )
        return self._one(f"SELECT {_FEED_COLUMNS} FROM feeds WHERE id = ?", (id,), Feed.from_row)

    def get_feed_by_url(self, url: str) -> Feed:
        return self._one(f"SELECT {_FEED_COLUMNS} FROM feeds WHERE url = ?", (url,), Feed.from_row)

    def get_feeds(self) -> list[Feed]:
        return self._many(f"SELECT {_FEED_COLUMNS} FROM feeds", (), Feed.from_row)

    # Feed follows

    def create_feed_follow(
        self,
        id: uuid.UUID,
        created_at: datetime,
        updated_at: datetime,
        user_id: uuid.UUID,
        feed_id: uuid.UUID,
    ) -> FeedFollowRow:
        self._execute(
            "INSERT INTO feed_follows (id, created_at, updated_at, user_id, feed_id) VALUES (?, ?, ?, ?, ?)",
            (id, created_at, updated_at, user_id, feed_id),
        )
        return self._one(_FOLLOW_SELECT + "WHERE feed_follows.id = ?", (id,), FeedFollowRow.from_row)

    def delete_feed_follow(self, feed_id: uuid.UUID, user_id: uuid.UUID) -> None:
        self._execute("DELETE FROM feed_follows WHERE feed_id = ? AND user_id = ?", (feed_id, user_id))

    def get_feed_follows_for_user(self, user_id: uuid.UUID) -> list[FeedFollowRow]:
        return self._many(_FOLLOW_SELECT + "WHERE feed_follows.user_id = ?", (user_id,), FeedFollowRow.from_row)
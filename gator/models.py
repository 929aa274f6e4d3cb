"""Records stored in the database."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Sequence


def _to_uuid(value: Any) -> uuid.UUID:
    if isinstance(value, uuid.UUID):
        return value
    if isinstance(value, bytes):
        return uuid.UUID(bytes=value)
    return uuid.UUID(str(value))


def _to_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value))


@dataclass(frozen=True)
class User:
    id: uuid.UUID
    created_at: datetime
    updated_at: datetime
    name: str

    @classmethod
    def from_row(cls, row: Sequence[Any]) -> User:
        """Build from a row of id, created_at, updated_at, name."""
        id_, created_at, updated_at, name = row
        return cls(_to_uuid(id_), _to_datetime(created_at), _to_datetime(updated_at), str(name))


@dataclass(frozen=True)
class Feed:
    id: uuid.UUID
    created_at: datetime
    updated_at: datetime
    name: str
    url: str
    user_id: uuid.UUID

    @classmethod
    def from_row(cls, row: Sequence[Any]) -> Feed:
        """Build from a row of id, created_at, updated_at, name, url, user_id."""
        id_, created_at, updated_at, name, url, user_id = row
        return cls(
            _to_uuid(id_),
            _to_datetime(created_at),
            _to_datetime(updated_at),
            str(name),
            str(url),
            _to_uuid(user_id),
        )


@dataclass(frozen=True)
class FeedFollow:
    id: uuid.UUID
    created_at: datetime
    updated_at: datetime
    user_id: uuid.UUID
    feed_id: uuid.UUID

    @classmethod
    def from_row(cls, row: Sequence[Any]) -> FeedFollow:
        """Build from a row of id, created_at, updated_at, user_id, feed_id."""
        id_, created_at, updated_at, user_id, feed_id = row
        return cls(
            _to_uuid(id_),
            _to_datetime(created_at),
            _to_datetime(updated_at),
            _to_uuid(user_id),
            _to_uuid(feed_id),
        )


@dataclass(frozen=True)
class FeedFollowRow:
    """A feed follow together with the names of its feed and user."""

    id: uuid.UUID
    created_at: datetime
    updated_at: datetime
    user_id: uuid.UUID
    feed_id: uuid.UUID
    feed_name: str
    user_name: str

    @classmethod
    def from_row(cls, row: Sequence[Any]) -> FeedFollowRow:
        """Build from a feed follow row followed by feed_name and user_name."""
        *follow, feed_name, user_name = row
        base = FeedFollow.from_row(follow)
        return cls(
            base.id,
            base.created_at,
            base.updated_at,
            base.user_id,
            base.feed_id,
            str(feed_name),
            str(user_name),
        )
"""Handlers for each command of the command line."""

from __future__ import annotations

import sqlite3
import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Iterator

from .commands import Command, CommandError, State
from .models import Feed, User
from .queries import NotFoundError
from .rss import fetch_feed

AGG_FEED_URL = "https://www.wagslane.dev/index.xml"
SEPARATOR = "====================================="

_DB_ERRORS = (sqlite3.Error, NotFoundError)


@contextmanager
def _failing(action: str, errors: tuple[type[BaseException], ...] = _DB_ERRORS) -> Iterator[None]:
    try:
        yield
    except errors as err:
        raise CommandError(f"couldn't {action}: {err}") from err


def _require_args(cmd: Command, usage: str, count: int) -> None:
    if len(cmd.args) != count:
        raise CommandError(f"usage: {cmd.name} {usage}")


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _format_time(value: datetime) -> str:
    fraction = f".{value.microsecond:06d}".rstrip("0") if value.microsecond else ""
    if value.tzinfo is None:
        offset, zone = "+0000", "UTC"
    else:
        offset, zone = value.strftime("%z"), value.tzname() or ""
    return f"{value:%Y-%m-%d %H:%M:%S}{fraction} {offset} {zone}".rstrip()


def format_feed(feed: Feed, user: User) -> str:
    return "\n".join(
        [
            f"* ID:            {feed.id}",
            f"* Created:       {_format_time(feed.created_at)}",
            f"* Updated:       {_format_time(feed.updated_at)}",
            f"* Name:          {feed.name}",
            f"* URL:           {feed.url}",
            f"* User:          {user.name}",
        ]
    )


def format_feed_follow(user_name: str, feed_name: str) -> str:
    return f"* User:          {user_name}\n* Feed:          {feed_name}"


def format_user(user: User) -> str:
    return f" * ID:      {user.id}\n * Name:    {user.name}"


def handle_agg(state: State, cmd: Command) -> None:
    with _failing("fetch feed", (OSError, ValueError)):
        feed = fetch_feed(AGG_FEED_URL)
    print(f"Feed: {feed}")


def handle_add_feed(state: State, cmd: Command, user: User) -> None:
    _require_args(cmd, "<name> <url>", 2)
    name, url = cmd.args
    with _failing("create feed"):
        feed = state.db.create_feed(uuid.uuid4(), _now(), _now(), name, url, user.id)
    with _failing("create feed follow"):
        follow = state.db.create_feed_follow(uuid.uuid4(), _now(), _now(), user.id, feed.id)

    print("Feed created successfully:")
    print(format_feed(feed, user))
    print()
    print("Feed followed successfully:")
    print(format_feed_follow(follow.user_name, follow.feed_name))
    print(SEPARATOR)


def handle_list_feeds(state: State, cmd: Command) -> None:
    with _failing("get feeds"):
        feeds = state.db.get_feeds()
    if not feeds:
        print("No feeds found.")
        return

    print(f"Found {len(feeds)} feeds:")
    for feed in feeds:
        with _failing("get user"):
            user = state.db.get_user_by_id(feed.user_id)
        print(format_feed(feed, user))
        print(SEPARATOR)


def handle_follow(state: State, cmd: Command, user: User) -> None:
    _require_args(cmd, "<feed_url>", 1)
    with _failing("get feed"):
        feed = state.db.get_feed_by_url(cmd.args[0])
    with _failing("create feed follow"):
        follow = state.db.create_feed_follow(uuid.uuid4(), _now(), _now(), user.id, feed.id)
    print("Feed follow created:")
    print(format_feed_follow(follow.user_name, follow.feed_name))


def handle_list_feed_follows(state: State, cmd: Command, user: User) -> None:
    with _failing("get feed follows"):
        follows = state.db.get_feed_follows_for_user(user.id)
    if not follows:
        print("No feed follows found for this user.")
        return

    print(f"Feed follows for user {user.name}:")
    for follow in follows:
        print(f"* {follow.feed_name}")


def handle_unfollow(state: State, cmd: Command, user: User) -> None:
    _require_args(cmd, "<feed_url>", 1)
    with _failing("get feed"):
        feed = state.db.get_feed_by_url(cmd.args[0])
    with _failing("delete feed follow"):
        state.db.delete_feed_follow(feed.id, user.id)
    print(f"{feed.name} unfollowed successfully!")


def handle_reset(state: State, cmd: Command) -> None:
    with _failing("delete users"):
        state.db.delete_users()
    print("Database reset successfully!")


def handle_register(state: State, cmd: Command) -> None:
    _require_args(cmd, "<name>", 1)
    with _failing("create user"):
        user = state.db.create_user(uuid.uuid4(), _now(), _now(), cmd.args[0])
    with _failing("set current user", (OSError,)):
        state.cfg.set_user(user.name)
    print("User created successfully:")
    print(format_user(user))


def handle_login(state: State, cmd: Command) -> None:
    _require_args(cmd, "<name>", 1)
    name = cmd.args[0]
    with _failing("find user"):
        state.db.get_user(name)
    with _failing("set current user", (OSError,)):
        state.cfg.set_user(name)
    print("User switched successfully!")


def handle_list_users(state: State, cmd: Command) -> None:
    with _failing("list users"):
        users = state.db.get_users()
    for user in users:
        if user.name == state.cfg.current_user_name:
            print(f"* {user.name} (current)")
        else:
            print(f"* {user.name}")
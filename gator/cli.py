"""Command-line entry point."""

from __future__ import annotations

import sqlite3
import sys
from contextlib import closing
from typing import Sequence

from . import config, handlers
from .commands import Command, CommandError, Commands, State, logged_in
from .queries import Queries, connect, create_schema

USAGE = "Usage: cli <command> [args...]"

_RUN_ERRORS = (CommandError, LookupError, sqlite3.Error, OSError, ValueError)


def build_commands() -> Commands:
    """Return the registry of every command the program knows."""
    cmds = Commands()
    cmds.register("register", handlers.handle_register)
    cmds.register("login", handlers.handle_login)
    cmds.register("reset", handlers.handle_reset)
    cmds.register("users", handlers.handle_list_users)
    cmds.register("agg", handlers.handle_agg)
    cmds.register("addfeed", logged_in(handlers.handle_add_feed))
    cmds.register("feeds", handlers.handle_list_feeds)
    cmds.register("follow", logged_in(handlers.handle_follow))
    cmds.register("following", logged_in(handlers.handle_list_feed_follows))
    cmds.register("unfollow", logged_in(handlers.handle_unfollow))
    return cmds


def _fail(message: str) -> int:
    print(message, file=sys.stderr)
    return 1


def main(argv: Sequence[str] | None = None) -> int:
    """Run one command; returns the process exit status."""
    args = list(sys.argv[1:] if argv is None else argv)

    try:
        cfg = config.read()
    except (OSError, ValueError) as err:
        return _fail(f"error reading config: {err}")

    try:
        conn = connect(cfg.db_url)
        create_schema(conn)
    except sqlite3.Error as err:
        return _fail(f"error connecting to db: {err}")

    with closing(conn):
        state = State(db=Queries(conn), cfg=cfg)
        cmds = build_commands()
        if not args:
            return _fail(USAGE)
        try:
            cmds.run(state, Command(args[0], args[1:]))
        except _RUN_ERRORS as err:
            return _fail(str(err))
    return 0


if __name__ == "__main__":
    sys.exit(main())
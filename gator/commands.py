"""Command registry and the state shared by command handlers."""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import wraps
from typing import Callable

from .config import Config
from .models import User
from .queries import Queries


class CommandError(Exception):
    """A command could not be carried out."""


@dataclass(frozen=True)
class Command:
    name: str
    args: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "args", tuple(self.args))


@dataclass
class State:
    db: Queries
    cfg: Config


Handler = Callable[[State, Command], None]
UserHandler = Callable[[State, Command, User], None]


@dataclass
class Commands:
    """Maps command names to their handlers."""

    _handlers: dict[str, Handler] = field(default_factory=dict)

    def register(self, name: str, handler: Handler) -> None:
        self._handlers[name] = handler

    def run(self, state: State, cmd: Command) -> None:
        """Run the handler registered for ``cmd.name``."""
        try:
            handler = self._handlers[cmd.name]
        except KeyError:
            raise CommandError("command not found") from None
        handler(state, cmd)

    def __contains__(self, name: object) -> bool:
        return name in self._handlers


def logged_in(handler: UserHandler) -> Handler:
    """Wrap a handler so it receives the current user, looked up by name."""

    @wraps(handler)
    def wrapper(state: State, cmd: Command) -> None:
        user = state.db.get_user(state.cfg.current_user_name)
        handler(state, cmd, user)

    return wrapper
#!/usr/bin/env python3
# pathcrypt/commands/commands.py
from __future__ import annotations

"""
Command registry and the `@command` decorator.

Names and aliases share one case-insensitive namespace; registering a key
that is already taken is an error rather than a silent replacement.
"""

import inspect
from typing import Any, Callable, Iterable

from .command_types import Command


class CommandRegistry:
    """Maps every name and alias to its `Command`."""

    def __init__(self) -> None:
        self._by_key: dict[str, Command] = {}
        self._commands: list[Command] = []

    def register(self, cmd: Command) -> None:
        keys = cmd.keys
        taken = [k for k in keys if k in self._by_key]
        if taken or len(set(keys)) != len(keys):
            clash = ", ".join(taken) or cmd.name
            raise ValueError(f"Command name already registered: {clash}")
        for key in keys:
            self._by_key[key] = cmd
        self._commands.append(cmd)

    def get(self, name: str) -> Command | None:
        return self._by_key.get(name.strip().lower())

    def all(self) -> list[Command]:
        """Registered commands in registration order, aliases not repeated."""
        return list(self._commands)

    def names(self) -> list[str]:
        """Every lookup key (names and aliases), sorted."""
        return sorted(self._by_key)


REGISTRY = CommandRegistry()


def _keyword_params(func: Callable[..., Any]) -> tuple[tuple[str, ...], tuple[str, ...]]:
    params, required = [], []
    for p in inspect.signature(func).parameters.values():
        if p.kind in (p.VAR_POSITIONAL, p.VAR_KEYWORD):
            continue
        params.append(p.name)
        if p.default is p.empty:
            required.append(p.name)
    return tuple(params), tuple(required)


def command(
    name: str | None = None,
    *,
    description: str | None = None,
    example: str = "",
    aliases: Iterable[str] = (),
    registry: CommandRegistry | None = None,
) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """
    Register the decorated function as a command.

    The name defaults to the function name with underscores turned into
    dashes, the description to its docstring.
    """

    def wrapper(func: Callable[..., Any]) -> Callable[..., Any]:
        params, required = _keyword_params(func)
        (registry or REGISTRY).register(Command(
            name=name or func.__name__.replace("_", "-"),
            callback=func,
            description=(description or func.__doc__ or "").strip(),
            example=example,
            aliases=tuple(aliases),
            params=params,
            required=required,
        ))
        return func

    return wrapper

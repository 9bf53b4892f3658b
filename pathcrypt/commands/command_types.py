#!/usr/bin/env python3
# pathcrypt/commands/command_types.py
from __future__ import annotations

"""
Records shared by the registry, the plugins and the dispatcher.

A `Command` knows which keyword arguments its callback takes and which of
them are required, so a caller can be told what is wrong before anything
runs. Every crypto command answers with a `CommandResult`.
"""

from dataclasses import dataclass
from typing import Any, Callable, Mapping


@dataclass(slots=True)
class CommandResult:
    """
    Outcome of one command.

    Attributes:
        ok: False when the command, or any file it touched, failed.
        message: One-line summary for the console.
        data: Per-file result dicts, or None when nothing was attempted.
    """
    ok: bool = True
    message: str = ""
    data: Any = None


@dataclass(frozen=True, slots=True)
class Command:
    name: str
    callback: Callable[..., Any]
    description: str = ""
    example: str = ""
    aliases: tuple[str, ...] = ()
    params: tuple[str, ...] = ()
    required: tuple[str, ...] = ()

    @property
    def keys(self) -> tuple[str, ...]:
        """Lookup keys: the name and every alias, lower-cased."""
        return tuple(k.lower() for k in (self.name, *self.aliases))

    def unexpected(self, kwargs: Mapping[str, Any]) -> list[str]:
        return sorted(k for k in kwargs if k not in self.params)

    def missing(self, kwargs: Mapping[str, Any]) -> list[str]:
        return [k for k in self.required if k not in kwargs]

    def usage(self) -> str:
        text = self.example or self.name
        return f"{text} ({self.description})" if self.description else text

    def invoke(self, **kwargs: Any) -> Any:
        return self.callback(**kwargs)

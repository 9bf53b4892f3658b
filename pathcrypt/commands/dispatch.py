#!/usr/bin/env python3
# pathcrypt/commands/dispatch.py
from __future__ import annotations

"""
Run a registered command by name or alias.

Problems with the call itself (unknown command, unknown or missing
arguments, values that do not parse) come back as a failed `CommandResult`
instead of an exception.
"""

import difflib
import logging
from typing import Any

from .command_types import CommandResult
from .commands import REGISTRY, CommandRegistry

log = logging.getLogger(__name__)


def _suggest(name: str, registry: CommandRegistry) -> str:
    matches = difflib.get_close_matches(name.lower(), registry.names(), n=3, cutoff=0.6)
    return f" Did you mean: {', '.join(matches)}?" if matches else ""


def run_command(name: str, registry: CommandRegistry | None = None, /, **kwargs: Any) -> CommandResult:
    """Look up `name` and call it with `kwargs`.

    Returns:
        The command's own `CommandResult`; a plain return value is wrapped
        as a successful result with its text as the message.
    """
    registry = registry or REGISTRY
    cmd = registry.get(name)
    if cmd is None:
        return CommandResult(ok=False, message=f"Unknown command: {name}.{_suggest(name, registry)}")

    unexpected = cmd.unexpected(kwargs)
    if unexpected:
        return CommandResult(
            ok=False,
            message=f"{cmd.name}: unexpected argument(s): {', '.join(unexpected)}. Usage: {cmd.usage()}",
        )
    missing = cmd.missing(kwargs)
    if missing:
        return CommandResult(
            ok=False,
            message=f"{cmd.name}: missing argument(s): {', '.join(missing)}. Usage: {cmd.usage()}",
        )

    log.debug("running command %s", cmd.name)
    try:
        result = cmd.invoke(**kwargs)
    except ValueError as exc:
        log.warning("%s rejected its arguments: %s", cmd.name, exc)
        return CommandResult(ok=False, message=f"{cmd.name}: {exc}")

    if isinstance(result, CommandResult):
        return result
    return CommandResult(ok=True, message="" if result is None else str(result))

#!/usr/bin/env python3
# pathcrypt/commands/__init__.py
from __future__ import annotations

"""
Command registration and dispatch.

Provides:
- `Command` and `CommandResult` records.
- The shared `REGISTRY` and the `command` decorator.
- `load_commands` for plugin discovery and `run_command` to call one.
"""

from .command_types import Command, CommandResult
from .commands import REGISTRY, CommandRegistry, command
from .dispatch import run_command
from .loader import load_commands

__all__ = [
    "Command",
    "CommandResult",
    "REGISTRY",
    "CommandRegistry",
    "command",
    "load_commands",
    "run_command",
]

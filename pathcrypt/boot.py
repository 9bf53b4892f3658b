#!/usr/bin/env python3
# pathcrypt/boot.py
from __future__ import annotations
"""
Startup for collaborators that drive pathcrypt through its commands.

Loads configuration, initializes the `pathcrypt` logger from it and
registers the plugin commands. Each step is reported on the console.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable

from .commands import REGISTRY, CommandResult, load_commands, run_command
from .config import CryptoConfig, load_config
from .ui import colorize, init_logger, print_line


@dataclass(slots=True)
class BootState:
    config: CryptoConfig
    logger: logging.Logger
    loaded_count: int

    def run(self, name: str, **kwargs: Any) -> CommandResult:
        """Dispatch a command registered during boot."""
        return run_command(name, **kwargs)


def _step(label: str, fn: Callable[[], Any], *, quiet: bool = False) -> Any:
    """Run a boot step with status output."""
    try:
        out = fn()
    except Exception as exc:
        print_line(
            colorize(f"[FAILED] {label} ({type(exc).__name__}: {exc})", "red")
        )
        raise
    if not quiet:
        print_line(colorize(f"[  OK  ] {label}", "green"))
    return out


def boot_sequence(*, quiet: bool = False) -> BootState:
    config: CryptoConfig = _step("Load configuration", load_config, quiet=quiet)

    logger = _step(
        "Initialize logger",
        lambda: init_logger(
            "pathcrypt",
            level=config.log_level or logging.INFO,
            logfile=str(config.log_file_path) if config.log_file_path else None,
        ),
        quiet=quiet,
    )

    _step("Load plugin commands", load_commands, quiet=quiet)
    loaded_count = _step("Count command definitions",
                         lambda: len(REGISTRY.all()), quiet=quiet)

    return BootState(config=config, logger=logger, loaded_count=loaded_count)

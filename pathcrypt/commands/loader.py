#!/usr/bin/env python3
# pathcrypt/commands/loader.py
from __future__ import annotations

"""
Plugin discovery.

Every subpackage of the plugin package that ships an `entrypoint.py` is
imported once; its `@command` decorators do the registering.
"""

import importlib
import pkgutil
from pathlib import Path

DEFAULT_PLUGIN_PACKAGE = "pathcrypt.plugins"


def load_commands(commands_package: str = DEFAULT_PLUGIN_PACKAGE) -> int:
    """
    Import all plugin entrypoints under the given package.

    Returns:
        Number of plugin entrypoints found.
    """
    package = importlib.import_module(commands_package)
    search_path = [str(p) for p in getattr(package, "__path__", [])]
    if not search_path:
        raise RuntimeError(f"'{commands_package}' is not a package")

    found = 0
    for modinfo in pkgutil.iter_modules(search_path):
        if not modinfo.ispkg or modinfo.name.startswith("_"):
            continue
        plugin_dir = Path(modinfo.module_finder.path) / modinfo.name
        if (plugin_dir / "entrypoint.py").exists():
            importlib.import_module(f"{commands_package}.{modinfo.name}.entrypoint")
            found += 1
    return found

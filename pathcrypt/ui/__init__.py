#!/usr/bin/env python3
# pathcrypt/ui/__init__.py
from __future__ import annotations
# Re-export convenient top-level API
from .ansi import ANSI, strip_ansi, enable_windows_vt, colorize
from .console import PRINT_MUTEX, print_line
from .logging import init_logger, ColorizingStreamHandler, PlainFormatter
from .table import format_table, print_table

__all__ = [
    "ANSI",
    "strip_ansi",
    "enable_windows_vt",
    "colorize",
    "PRINT_MUTEX",
    "print_line",
    "init_logger",
    "ColorizingStreamHandler",
    "PlainFormatter",
    "format_table",
    "print_table",
]

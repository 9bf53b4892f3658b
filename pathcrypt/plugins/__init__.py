#!/usr/bin/env python3
# pathcrypt/plugins/__init__.py
from __future__ import annotations
"""Command plugins; each subpackage exposes an `entrypoint.py`."""

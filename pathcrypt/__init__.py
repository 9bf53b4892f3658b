#!/usr/bin/env python3
# pathcrypt/__init__.py
from __future__ import annotations
"""
pathcrypt: password-based encryption of files and directory trees.

Encrypted artifacts are [32B salt][16B IV][AES-256-CBC ciphertext], keyed by
PBKDF2-HMAC-SHA256 over the password.
"""

from .security import (  # noqa: F401
    protect_path,
    unprotect_path,
    encrypt_bytes,
    decrypt_bytes,
    OperationResult,
    PathNotFoundError,
)

__version__ = "1.0.0"

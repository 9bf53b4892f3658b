#!/usr/bin/env python3
# pathcrypt/security/encryption/__init__.py
from __future__ import annotations
"""
Encryption package.

Import submodules explicitly to avoid circular imports, e.g.:

from pathcrypt.security.encryption.path_crypto import protect_path, unprotect_path
from pathcrypt.security.encryption.cbc_stream import encrypt_stream, decrypt_stream
from pathcrypt.security.encryption.envelope import encode, decode
"""

__all__: list[str] = []

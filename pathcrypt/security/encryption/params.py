#!/usr/bin/env python3
# pathcrypt/security/encryption/params.py
from __future__ import annotations

"""
Format constants for the salt || iv || AES-256-CBC envelope.

None of these are stored in the artifact. Changing any of them makes
previously written files undecryptable, so they are fixed here rather than
exposed through configuration.
"""

from typing import Final

SALT_SIZE: Final[int] = 32
IV_SIZE: Final[int] = 16
HEADER_SIZE: Final[int] = SALT_SIZE + IV_SIZE

KEY_SIZE: Final[int] = 32           # AES-256
BLOCK_SIZE: Final[int] = 16         # AES block, bytes
PADDING_BITS: Final[int] = BLOCK_SIZE * 8

KDF_HASH: Final[str] = "sha256"
PBKDF2_ITERATIONS: Final[int] = 100_000

DEFAULT_SUFFIX: Final[str] = ".enc"
DECRYPTED_FALLBACK_SUFFIX: Final[str] = ".dec"

# 64 KiB plaintext/ciphertext chunks when streaming
DEFAULT_CHUNK_SIZE: Final[int] = 64 * 1024

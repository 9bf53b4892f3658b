#!/usr/bin/env python3
# pathcrypt/security/encryption/kdf.py
from __future__ import annotations

"""
Password-based key derivation (PBKDF2-HMAC-SHA256).

The iteration count and hash are implicit format constants (see `params`);
the envelope only stores the salt.
"""

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from .params import KEY_SIZE, PBKDF2_ITERATIONS, SALT_SIZE
from .secret_buffer import SecretBuffer


def derive_key(
    password: SecretBuffer | bytes | bytearray | memoryview,
    salt: bytes,
    *,
    length: int = KEY_SIZE,
    iterations: int = PBKDF2_ITERATIONS,
) -> SecretBuffer:
    """Derive a symmetric key from a password and salt.

    Args:
        password: Password bytes, ideally already held in a SecretBuffer.
        salt: 32-byte random salt read from or written to the envelope.
        length: Key length in bytes (32 for AES-256).
        iterations: PBKDF2 round count.

    Returns:
        A SecretBuffer the caller must close once the cipher is done.

    Raises:
        ValueError: On a wrong-size salt or non-positive parameters.
    """
    if len(salt) != SALT_SIZE:
        raise ValueError(f"salt must be {SALT_SIZE} bytes, got {len(salt)}")
    if length <= 0 or iterations <= 0:
        raise ValueError("length and iterations must be positive")

    material = password.buffer if isinstance(password, SecretBuffer) else password
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=length,
        salt=bytes(salt),
        iterations=iterations,
    )
    # derive() hands back immutable bytes; copy into a wipeable buffer right away
    return SecretBuffer(kdf.derive(material))

#!/usr/bin/env python3
# pathcrypt/security/encryption/random_source.py
from __future__ import annotations

"""
Cryptographically secure random bytes for salts and IVs.

Backed only by the OS CSPRNG. If it cannot be used the call fails; there is
no fallback to `random` or any time/PID seeded generator.
"""

import os

from ..errors import RandomSourceUnavailableError
from .params import IV_SIZE, SALT_SIZE


def random_bytes(n: int) -> bytes:
    """Return `n` bytes from the OS CSPRNG.

    Raises:
        ValueError: If `n` is negative.
        RandomSourceUnavailableError: If the OS entropy source is unusable.
    """
    if n < 0:
        raise ValueError("n must be >= 0")
    try:
        return os.urandom(n)
    except (NotImplementedError, OSError) as exc:
        raise RandomSourceUnavailableError(
            f"OS random source unavailable: {exc}") from exc


def new_salt() -> bytes:
    return random_bytes(SALT_SIZE)


def new_iv() -> bytes:
    return random_bytes(IV_SIZE)

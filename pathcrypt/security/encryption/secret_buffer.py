#!/usr/bin/env python3
# pathcrypt/security/encryption/secret_buffer.py
from __future__ import annotations

"""
Zeroable holder for passwords and derived keys.

Python `str` and `bytes` are immutable and cannot be wiped, so secrets are
kept in a `bytearray` that is overwritten with zeros on `close()` or when the
`with` block exits, whichever comes first.
"""

from typing import Union

SecretLike = Union[str, bytes, bytearray, memoryview, "SecretBuffer"]


class SecretBuffer:
    """Mutable secret bytes with guaranteed wipe on close."""

    __slots__ = ("_buf", "_closed")

    def __init__(self, data: bytes | bytearray | memoryview = b"") -> None:
        self._buf = bytearray(data)
        self._closed = False

    @classmethod
    def from_secret(cls, secret: SecretLike) -> "SecretBuffer":
        """Copy a password-like value into a new buffer (UTF-8 for str)."""
        if isinstance(secret, SecretBuffer):
            return cls(secret.view())
        if isinstance(secret, str):
            return cls(secret.encode("utf-8"))
        if isinstance(secret, (bytes, bytearray, memoryview)):
            return cls(secret)
        raise TypeError(
            f"password must be str, bytes-like or SecretBuffer, got {type(secret).__name__}")

    def view(self) -> memoryview:
        """Read-only view of the secret bytes without copying."""
        if self._closed:
            raise ValueError("SecretBuffer is closed")
        return memoryview(self._buf).toreadonly()

    @property
    def buffer(self) -> bytearray:
        """The backing bytearray (for APIs that accept bytes-like keys)."""
        if self._closed:
            raise ValueError("SecretBuffer is closed")
        return self._buf

    @property
    def closed(self) -> bool:
        return self._closed

    def wipe(self) -> None:
        """Overwrite the contents with zeros in place."""
        for i in range(len(self._buf)):
            self._buf[i] = 0

    def close(self) -> None:
        if self._closed:
            return
        self.wipe()
        self._closed = True

    def __len__(self) -> int:
        return len(self._buf)

    def __enter__(self) -> "SecretBuffer":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "closed" if self._closed else f"{len(self._buf)} bytes"
        return f"<SecretBuffer {state}>"

#!/usr/bin/env python3
# pathcrypt/security/encryption/envelope.py
from __future__ import annotations
"""
On-disk envelope: [salt 32B][iv 16B][ciphertext ...].

There is no magic number, version tag or length prefix. The header is raw
concatenation and everything after byte 48 is a single CBC ciphertext stream.

Public API
----------
encode(salt, iv, ciphertext) -> bytes
decode(data) -> Envelope
write_header(out_f, salt, iv) -> None
read_header(in_f) -> tuple[bytes, bytes]
"""

from dataclasses import dataclass
from typing import BinaryIO

from ..errors import MalformedEnvelopeError
from .params import HEADER_SIZE, IV_SIZE, SALT_SIZE


@dataclass(frozen=True, slots=True)
class Envelope:
    salt: bytes
    iv: bytes
    ciphertext: bytes

    def to_bytes(self) -> bytes:
        return encode(self.salt, self.iv, self.ciphertext)


def _check_header_parts(salt: bytes, iv: bytes) -> None:
    if len(salt) != SALT_SIZE:
        raise ValueError(f"salt must be {SALT_SIZE} bytes, got {len(salt)}")
    if len(iv) != IV_SIZE:
        raise ValueError(f"iv must be {IV_SIZE} bytes, got {len(iv)}")


def encode(salt: bytes, iv: bytes, ciphertext: bytes) -> bytes:
    """Concatenate salt || iv || ciphertext."""
    _check_header_parts(salt, iv)
    return bytes(salt) + bytes(iv) + bytes(ciphertext)


def decode(data: bytes) -> Envelope:
    """Split an artifact into its parts.

    Raises:
        MalformedEnvelopeError: If `data` is shorter than the 48-byte header.
    """
    if len(data) < HEADER_SIZE:
        raise MalformedEnvelopeError(
            f"Encrypted data too short: {len(data)} bytes (minimum {HEADER_SIZE})")
    return Envelope(
        salt=bytes(data[:SALT_SIZE]),
        iv=bytes(data[SALT_SIZE:HEADER_SIZE]),
        ciphertext=bytes(data[HEADER_SIZE:]),
    )


def write_header(out_f: BinaryIO, salt: bytes, iv: bytes) -> None:
    """Write the salt and IV at the current position of `out_f`."""
    _check_header_parts(salt, iv)
    out_f.write(salt)
    out_f.write(iv)


def read_header(in_f: BinaryIO) -> tuple[bytes, bytes]:
    """Read (salt, iv) from the start of an envelope stream.

    Raises:
        MalformedEnvelopeError: If fewer than 48 bytes are available.
    """
    header = b""
    while len(header) < HEADER_SIZE:
        chunk = in_f.read(HEADER_SIZE - len(header))
        if not chunk:
            break
        header += chunk
    if len(header) != HEADER_SIZE:
        raise MalformedEnvelopeError(
            f"File too small to be a valid encrypted file: {len(header)} bytes (minimum {HEADER_SIZE})")
    return header[:SALT_SIZE], header[SALT_SIZE:]

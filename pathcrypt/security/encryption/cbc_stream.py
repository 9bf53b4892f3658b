#!/usr/bin/env python3
# pathcrypt/security/encryption/cbc_stream.py
from __future__ import annotations
"""
AES-256-CBC transcoder with PKCS7 padding.

Streams chunk by chunk so large files are never held in memory. Padding is
always applied, so an empty plaintext still yields one full block.

There is no authentication tag in this format: a failed padding check after
decryption is the only signal for a wrong password or damaged ciphertext,
and the two cannot be told apart.

Public API
----------
encrypt_stream(in_f, out_f, *, key, iv, chunk_size=65536) -> int
decrypt_stream(in_f, out_f, *, key, iv, chunk_size=65536) -> int
encrypt_bytes(plaintext, *, key, iv) -> bytes
decrypt_bytes(ciphertext, *, key, iv) -> bytes
"""

import io
from typing import BinaryIO

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from ..errors import DecryptionFailedError
from .params import DEFAULT_CHUNK_SIZE, IV_SIZE, KEY_SIZE, PADDING_BITS

KeyLike = bytes | bytearray | memoryview


def _cipher(key: KeyLike, iv: bytes) -> Cipher:
    if len(key) != KEY_SIZE:
        raise ValueError(f"key must be {KEY_SIZE} bytes")
    if len(iv) != IV_SIZE:
        raise ValueError(f"iv must be {IV_SIZE} bytes")
    return Cipher(algorithms.AES(key), modes.CBC(iv))


def _check_chunk_size(chunk_size: int) -> None:
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")


def encrypt_stream(
    in_f: BinaryIO,
    out_f: BinaryIO,
    *,
    key: KeyLike,
    iv: bytes,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> int:
    """Pad and encrypt everything readable from `in_f` into `out_f`.

    Returns:
        Number of ciphertext bytes written.
    """
    _check_chunk_size(chunk_size)
    encryptor = _cipher(key, iv).encryptor()
    padder = padding.PKCS7(PADDING_BITS).padder()

    written = 0
    while True:
        pt = in_f.read(chunk_size)
        if not pt:
            break
        ct = encryptor.update(padder.update(pt))
        out_f.write(ct)
        written += len(ct)

    ct = encryptor.update(padder.finalize()) + encryptor.finalize()
    out_f.write(ct)
    return written + len(ct)


def decrypt_stream(
    in_f: BinaryIO,
    out_f: BinaryIO,
    *,
    key: KeyLike,
    iv: bytes,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> int:
    """Decrypt and unpad everything readable from `in_f` into `out_f`.

    Output is written as it is produced; callers writing to a real
    destination must discard it when this raises.

    Returns:
        Number of plaintext bytes written.

    Raises:
        DecryptionFailedError: Bad padding, truncated or empty ciphertext.
    """
    _check_chunk_size(chunk_size)
    decryptor = _cipher(key, iv).decryptor()
    unpadder = padding.PKCS7(PADDING_BITS).unpadder()

    written = 0
    try:
        while True:
            ct = in_f.read(chunk_size)
            if not ct:
                break
            pt = unpadder.update(decryptor.update(ct))
            out_f.write(pt)
            written += len(pt)
        # raises ValueError on a partial final block or invalid padding
        pt = unpadder.update(decryptor.finalize()) + unpadder.finalize()
    except ValueError as exc:
        raise DecryptionFailedError() from exc

    out_f.write(pt)
    return written + len(pt)


def encrypt_bytes(plaintext: bytes, *, key: KeyLike, iv: bytes) -> bytes:
    out = io.BytesIO()
    encrypt_stream(io.BytesIO(plaintext), out, key=key, iv=iv)
    return out.getvalue()


def decrypt_bytes(ciphertext: bytes, *, key: KeyLike, iv: bytes) -> bytes:
    out = io.BytesIO()
    decrypt_stream(io.BytesIO(ciphertext), out, key=key, iv=iv)
    return out.getvalue()

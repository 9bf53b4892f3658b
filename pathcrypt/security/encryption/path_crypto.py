#!/usr/bin/env python3
# pathcrypt/security/encryption/path_crypto.py
from __future__ import annotations
"""
Password-based encryption of files and directory trees.

These utilities orchestrate:
  - Planning the files to touch (`traversal`)
  - Per-file key derivation, streaming AES-256-CBC and envelope framing
  - Crash-safe destination writes and source disposal
  - One `OperationResult` per file, in discovery order

Public API
----------
protect_path(path, password, *, recurse, force, remove_source, output_path, ...) -> list[OperationResult]
unprotect_path(path, password, *, recurse, force, keep_encrypted, output_path, ...) -> list[OperationResult]
encrypt_file(source, destination, password, *, overwrite, chunk_size) -> None
decrypt_file(source, destination, password, *, overwrite, chunk_size) -> None
encrypt_bytes(plaintext, password) -> bytes
decrypt_bytes(artifact, password) -> bytes
"""

import logging
import os
import threading
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import TYPE_CHECKING, Callable, Sequence

from ..atomic import atomic_destination
from ..results import OperationReporter, OperationResult
from ..traversal import TraversalPolicy, WorkItem, plan_decryption, plan_encryption
from . import cbc_stream, envelope
from .kdf import derive_key
from .params import DEFAULT_CHUNK_SIZE
from .random_source import new_iv, new_salt
from .secret_buffer import SecretBuffer, SecretLike

if TYPE_CHECKING:
    from ...config import CryptoConfig

log = logging.getLogger(__name__)

PathLike = str | os.PathLike[str]


# ------------------------------ single file ------------------------------

def encrypt_file(
    source: Path,
    destination: Path,
    password: SecretBuffer,
    *,
    overwrite: bool = False,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> None:
    """Encrypt `source` into a fresh envelope at `destination`.

    A new salt and IV are drawn on every call, so the same input and password
    never produce the same artifact.
    """
    salt, iv = new_salt(), new_iv()
    with Path(source).open("rb") as fi, atomic_destination(
            Path(destination), overwrite=overwrite, mode_from=Path(source)) as fo:
        envelope.write_header(fo, salt, iv)
        with derive_key(password, salt) as key:
            cbc_stream.encrypt_stream(
                fi, fo, key=key.buffer, iv=iv, chunk_size=chunk_size)


def decrypt_file(
    source: Path,
    destination: Path,
    password: SecretBuffer,
    *,
    overwrite: bool = False,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> None:
    """Decrypt the envelope at `source` into `destination`.

    The header is validated before the destination is touched; a padding
    failure discards the partial output.

    Raises:
        MalformedEnvelopeError: Input shorter than the 48-byte header.
        DecryptionFailedError: Wrong password or damaged ciphertext.
    """
    with Path(source).open("rb") as fi:
        salt, iv = envelope.read_header(fi)
        with derive_key(password, salt) as key, \
                atomic_destination(
                    Path(destination), overwrite=overwrite, mode_from=Path(source)) as fo:
            cbc_stream.decrypt_stream(
                fi, fo, key=key.buffer, iv=iv, chunk_size=chunk_size)


# ------------------------------ in memory ------------------------------

def encrypt_bytes(plaintext: bytes, password: SecretLike) -> bytes:
    """Return a complete envelope (salt || iv || ciphertext) for `plaintext`."""
    salt, iv = new_salt(), new_iv()
    with _open_password(password) as pw, derive_key(pw, salt) as key:
        ciphertext = cbc_stream.encrypt_bytes(plaintext, key=key.buffer, iv=iv)
    return envelope.encode(salt, iv, ciphertext)


def decrypt_bytes(artifact: bytes, password: SecretLike) -> bytes:
    """Recover the plaintext from a complete envelope."""
    env = envelope.decode(artifact)
    with _open_password(password) as pw, derive_key(pw, env.salt) as key:
        return cbc_stream.decrypt_bytes(env.ciphertext, key=key.buffer, iv=env.iv)


# ------------------------------ batches ------------------------------

def _open_password(password: SecretLike) -> SecretBuffer:
    buf = SecretBuffer.from_secret(password)
    if not len(buf):
        buf.close()
        raise ValueError("password must not be empty")
    return buf


def _settings(
    config: "CryptoConfig | None",
    chunk_size: int | None,
    max_workers: int | None,
    encrypted_suffix: str | None,
) -> tuple[int, int, str]:
    if config is None and None in (chunk_size, max_workers, encrypted_suffix):
        # Lazy import to avoid cycles
        from ...config import load_config
        config = load_config()
    return (
        chunk_size if chunk_size is not None else config.chunk_size,
        max_workers if max_workers is not None else config.max_workers,
        encrypted_suffix if encrypted_suffix is not None else config.encrypted_suffix,
    )


def _run_batch(
    items: Sequence[WorkItem],
    reporter: OperationReporter,
    transform: Callable[[WorkItem], None],
    *,
    max_workers: int,
    cancel: threading.Event | None,
) -> list[OperationResult]:
    """Run every item, serially or on a thread pool, keeping discovery order.

    Cancellation is only observed between files, never inside one.
    """

    def run_one(item: WorkItem) -> OperationResult | None:
        if cancel is not None and cancel.is_set():
            return None
        return reporter.run(item, transform)

    if max_workers <= 1 or len(items) <= 1:
        results: list[OperationResult] = []
        for item in items:
            res = run_one(item)
            if res is None:
                break
            results.append(res)
    else:
        with ThreadPoolExecutor(max_workers=min(max_workers, len(items))) as pool:
            results = [r for r in pool.map(run_one, items) if r is not None]

    skipped = len(items) - len(results)
    if skipped:
        log.info("%s cancelled; %d file(s) not processed",
                 reporter.operation, skipped)
    return results


def _summarize(operation: str, root: PathLike, results: Sequence[OperationResult]) -> None:
    ok = sum(1 for r in results if r.success)
    log.info("%s: %d/%d file(s) succeeded under %s",
             operation, ok, len(results), root)


def protect_path(
    path: PathLike,
    password: SecretLike,
    *,
    recurse: bool = False,
    force: bool = False,
    remove_source: bool = False,
    output_path: PathLike | None = None,
    max_workers: int | None = None,
    cancel: threading.Event | None = None,
    chunk_size: int | None = None,
    encrypted_suffix: str | None = None,
    config: "CryptoConfig | None" = None,
) -> list[OperationResult]:
    """Encrypt a file, or the files of a directory, with a password.

    Each file `name` becomes `name<suffix>` (default `.enc`) unless
    `output_path` is given. Per-file failures are returned, not raised.

    Args:
        path: File or directory to encrypt.
        password: Secret as str, bytes-like or SecretBuffer.
        recurse: Include the whole subtree of a directory.
        force: Overwrite existing destinations.
        remove_source: Delete each plaintext after it was encrypted.
        output_path: Destination file (file root) or directory (directory root).
        max_workers: Threads to fan files out over (1 = serial).
        cancel: Event checked between files; set it to stop the batch.
        chunk_size: Streaming chunk size in bytes.
        encrypted_suffix: Suffix appended to encrypted files.
        config: Loaded configuration supplying the defaults above.

    Returns:
        One OperationResult per processed file, in discovery order.

    Raises:
        PathNotFoundError: If `path` does not exist (nothing is attempted).
        OSError: If a directory `path` cannot be listed.
        ValueError: If the password is empty or an option is invalid.
    """
    chunk, workers, suffix = _settings(
        config, chunk_size, max_workers, encrypted_suffix)
    policy = TraversalPolicy(
        recurse=recurse,
        overwrite=force,
        remove_source=remove_source,
        output_path=Path(output_path) if output_path is not None else None,
        encrypted_suffix=suffix,
    )
    items = plan_encryption(path, policy)
    log.debug("encrypt: %d file(s) planned under %s", len(items), path)

    reporter = OperationReporter(
        "encrypt", overwrite=policy.overwrite, remove_source=policy.remove_source)
    with _open_password(password) as pw:
        def transform(item: WorkItem) -> None:
            encrypt_file(item.source, item.destination, pw,
                         overwrite=policy.overwrite, chunk_size=chunk)

        results = _run_batch(items, reporter, transform,
                             max_workers=workers, cancel=cancel)

    _summarize("encrypt", path, results)
    return results


def unprotect_path(
    path: PathLike,
    password: SecretLike,
    *,
    recurse: bool = False,
    force: bool = False,
    keep_encrypted: bool = False,
    output_path: PathLike | None = None,
    max_workers: int | None = None,
    cancel: threading.Event | None = None,
    chunk_size: int | None = None,
    encrypted_suffix: str | None = None,
    config: "CryptoConfig | None" = None,
) -> list[OperationResult]:
    """Decrypt a file, or the encrypted files of a directory.

    In a directory only files ending in the encrypted suffix are touched;
    a single file is attempted whatever its name. The encrypted input is
    deleted after a successful decryption unless `keep_encrypted`.

    Returns:
        One OperationResult per processed file, in discovery order.

    Raises:
        PathNotFoundError: If `path` does not exist (nothing is attempted).
        OSError: If a directory `path` cannot be listed.
        ValueError: If the password is empty or an option is invalid.
    """
    chunk, workers, suffix = _settings(
        config, chunk_size, max_workers, encrypted_suffix)
    policy = TraversalPolicy(
        recurse=recurse,
        overwrite=force,
        remove_source=not keep_encrypted,
        output_path=Path(output_path) if output_path is not None else None,
        encrypted_suffix=suffix,
    )
    items = plan_decryption(path, policy)
    log.debug("decrypt: %d file(s) planned under %s", len(items), path)

    reporter = OperationReporter(
        "decrypt", overwrite=policy.overwrite, remove_source=policy.remove_source)
    with _open_password(password) as pw:
        def transform(item: WorkItem) -> None:
            decrypt_file(item.source, item.destination, pw,
                         overwrite=policy.overwrite, chunk_size=chunk)

        results = _run_batch(items, reporter, transform,
                             max_workers=workers, cancel=cancel)

    _summarize("decrypt", path, results)
    return results

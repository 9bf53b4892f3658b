#!/usr/bin/env python3
# pathcrypt/security/__init__.py
from __future__ import annotations

"""
Package for password-based path encryption.

Provides:
- Batch operations over files and trees (`protect_path`, `unprotect_path`).
- Traversal planning as a pure function of `TraversalPolicy`.
- Per-file `OperationResult` records and the error taxonomy.
"""

from .errors import (
    PathCryptError,
    PathNotFoundError,
    DestinationExistsError,
    DecryptionFailedError,
    MalformedEnvelopeError,
    RandomSourceUnavailableError,
)
from .traversal import TraversalPolicy, WorkItem, plan_encryption, plan_decryption
from .results import OperationResult, OperationReporter
from .encryption.secret_buffer import SecretBuffer
from .encryption.path_crypto import (
    protect_path,
    unprotect_path,
    encrypt_file,
    decrypt_file,
    encrypt_bytes,
    decrypt_bytes,
)

__all__ = [
    "PathCryptError",
    "PathNotFoundError",
    "DestinationExistsError",
    "DecryptionFailedError",
    "MalformedEnvelopeError",
    "RandomSourceUnavailableError",
    "TraversalPolicy",
    "WorkItem",
    "plan_encryption",
    "plan_decryption",
    "OperationResult",
    "OperationReporter",
    "SecretBuffer",
    "protect_path",
    "unprotect_path",
    "encrypt_file",
    "decrypt_file",
    "encrypt_bytes",
    "decrypt_bytes",
]

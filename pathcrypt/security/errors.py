#!/usr/bin/env python3
# pathcrypt/security/errors.py
from __future__ import annotations

"""
Failure taxonomy for path encryption.

Only `PathNotFoundError` is meant to escape a batch call; every other error
is caught per file and turned into a failed `OperationResult` whose
`error_kind` is the class-level `kind` below.
"""


class PathCryptError(Exception):
    """Base class for all pathcrypt failures."""

    kind: str = "PathCryptError"


class PathNotFoundError(PathCryptError, FileNotFoundError):
    """The root path handed to a batch operation does not exist."""

    kind = "PathNotFound"

    def __init__(self, path: object) -> None:
        super().__init__(f"Path not found: {path}")
        self.path = str(path)


class DestinationExistsError(PathCryptError, FileExistsError):
    """The output already exists and overwrite was not requested."""

    kind = "DestinationExists"

    def __init__(self, path: object) -> None:
        super().__init__(
            f"Destination already exists: {path} (use force to overwrite)")
        self.path = str(path)


class DecryptionFailedError(PathCryptError, ValueError):
    """Padding check failed after decryption (wrong password or damaged data)."""

    kind = "DecryptionFailed"

    def __init__(self, message: str = "Decryption failed. Invalid password or corrupted file.") -> None:
        super().__init__(message)


class MalformedEnvelopeError(PathCryptError, ValueError):
    """Artifact too short to hold the salt and IV header."""

    kind = "MalformedEnvelope"


class RandomSourceUnavailableError(PathCryptError, RuntimeError):
    """The operating system CSPRNG could not be used."""

    kind = "RandomSourceUnavailable"


IO_ERROR_KIND = "IOError"


def error_kind(exc: BaseException) -> str:
    """Map an exception caught during a file transform to its taxonomy name."""
    if isinstance(exc, PathCryptError):
        return exc.kind
    return IO_ERROR_KIND


def describe_error(exc: BaseException) -> str:
    """Human-readable message, keeping the system text of OS errors intact."""
    if isinstance(exc, PathCryptError):
        return str(exc)
    if isinstance(exc, OSError) and exc.strerror:
        if exc.filename is not None:
            return f"{exc.strerror}: {exc.filename}"
        return exc.strerror
    return str(exc) or type(exc).__name__

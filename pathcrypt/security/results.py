#!/usr/bin/env python3
# pathcrypt/security/results.py
from __future__ import annotations
"""
Per-file outcome records and the reporter that produces them.

The reporter never lets a per-file failure escape: domain errors and OS
errors become a failed `OperationResult` and the batch carries on.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable

from .errors import DestinationExistsError, PathCryptError, describe_error, error_kind
from .traversal import WorkItem

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class OperationResult:
    """
    Outcome of transforming one file.

    Attributes:
        success: True if the destination was written (and the source disposed
            of, when requested).
        source_path: Absolute input path.
        destination_path: Absolute output path.
        error: Human-readable reason, only set on failure.
        error_kind: Taxonomy name (DestinationExists, DecryptionFailed,
            MalformedEnvelope, IOError, ...), only set on failure.
    """
    success: bool
    source_path: Path
    destination_path: Path
    error: str | None = None
    error_kind: str | None = None

    @property
    def ok(self) -> bool:
        return self.success

    @classmethod
    def succeeded(cls, item: WorkItem) -> "OperationResult":
        return cls(True, item.source, item.destination)

    @classmethod
    def failed(cls, item: WorkItem, exc: BaseException) -> "OperationResult":
        return cls(False, item.source, item.destination,
                   error=describe_error(exc), error_kind=error_kind(exc))

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "source_path": str(self.source_path),
            "destination_path": str(self.destination_path),
            "error": self.error,
            "error_kind": self.error_kind,
        }


class OperationReporter:
    """Wraps each file transform in an `OperationResult`.

    Args:
        operation: Verb used in log lines ("encrypt" / "decrypt").
        overwrite: Allow replacing an existing destination.
        remove_source: Delete the source after a successful transform.
    """

    def __init__(self, operation: str, *, overwrite: bool = False, remove_source: bool = False) -> None:
        self.operation = operation
        self.overwrite = overwrite
        self.remove_source = remove_source

    def run(self, item: WorkItem, transform: Callable[[WorkItem], None]) -> OperationResult:
        """Run `transform(item)` and record the outcome."""
        try:
            if not self.overwrite and item.destination.exists():
                raise DestinationExistsError(item.destination)
            transform(item)
        except (PathCryptError, OSError) as exc:
            log.warning("%s failed for %s: %s", self.operation,
                        item.source, describe_error(exc))
            return OperationResult.failed(item, exc)

        if self.remove_source and item.source != item.destination:
            try:
                item.source.unlink()
            except OSError as exc:
                log.warning("could not remove %s after %s: %s",
                            item.source, self.operation, describe_error(exc))
                return OperationResult.failed(item, exc)
            log.debug("removed source %s", item.source)

        log.debug("%s %s -> %s", self.operation, item.source, item.destination)
        return OperationResult.succeeded(item)

#!/usr/bin/env python3
# pathcrypt/security/traversal.py
from __future__ import annotations
"""
Turns one caller-supplied path into the ordered list of files to transform.

Everything here is a pure function of the path, the filesystem listing and a
`TraversalPolicy`; no cipher code is involved.

Public API
----------
plan_encryption(path, policy) -> list[WorkItem]
plan_decryption(path, policy) -> list[WorkItem]
iter_files(root, recurse) -> Iterator[Path]
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

from .atomic import is_temp_artifact
from .encryption.params import DECRYPTED_FALLBACK_SUFFIX, DEFAULT_SUFFIX
from .errors import PathNotFoundError


@dataclass(frozen=True, slots=True)
class TraversalPolicy:
    """
    Behavioural flags for one batch call.

    For decryption `remove_source` means "do not keep the encrypted input".
    `output_path` is the destination file for a single-file root, or a
    destination directory mirroring the tree for a directory root.
    """
    recurse: bool = False
    overwrite: bool = False
    remove_source: bool = False
    output_path: Path | None = None
    encrypted_suffix: str = DEFAULT_SUFFIX

    def __post_init__(self) -> None:
        sfx = self.encrypted_suffix
        if not sfx.startswith(".") or len(sfx) < 2 or "/" in sfx or os.sep in sfx:
            raise ValueError(
                f"encrypted_suffix must look like '.enc', got {sfx!r}")


@dataclass(frozen=True, slots=True)
class WorkItem:
    source: Path
    destination: Path


def has_suffix(name: str, suffix: str) -> bool:
    """Case-insensitive suffix test that never matches the bare suffix."""
    return len(name) > len(suffix) and name.lower().endswith(suffix.lower())


def encrypted_name(name: str, suffix: str = DEFAULT_SUFFIX) -> str:
    return name + suffix


def decrypted_name(name: str, suffix: str = DEFAULT_SUFFIX) -> str:
    """Strip the encrypted suffix, or append `.dec` when it is absent."""
    if has_suffix(name, suffix):
        return name[: -len(suffix)]
    return name + DECRYPTED_FALLBACK_SUFFIX


def _resolve_root(path: str | os.PathLike[str]) -> Path:
    root = Path(path).expanduser()
    if not root.exists():
        raise PathNotFoundError(path)
    return root.resolve()


def _as_abs(path: str | os.PathLike[str]) -> Path:
    return Path(path).expanduser().absolute()


def iter_files(root: Path, recurse: bool) -> Iterator[Path]:
    """Yield regular files under `root` in sorted order.

    Immediate children only unless `recurse`. Temp files from interrupted
    writes are never yielded.
    """
    candidates = root.rglob("*") if recurse else root.iterdir()
    for p in sorted(candidates):
        if p.is_file() and not is_temp_artifact(p):
            yield p


def _single_destination(source: Path, default_name: str, output_path: Path | None) -> Path:
    if output_path is None:
        return source.with_name(default_name)
    out = _as_abs(output_path)
    if out.is_dir():
        return out / default_name
    return out


def _tree_destination(root: Path, source: Path, name: str, output_root: Path | None) -> Path:
    if output_root is None:
        return source.with_name(name)
    return _as_abs(output_root) / source.parent.relative_to(root) / name


def plan_encryption(path: str | os.PathLike[str], policy: TraversalPolicy) -> list[WorkItem]:
    """List (source, destination) pairs for an encryption call.

    A file root is taken regardless of its name. In a directory, files that
    already carry the encrypted suffix are skipped.

    Raises:
        PathNotFoundError: If `path` does not exist.
        OSError: If a directory root exists but cannot be listed
            (for example `PermissionError`).
    """
    root = _resolve_root(path)
    sfx = policy.encrypted_suffix
    if not root.is_dir():
        dest = _single_destination(
            root, encrypted_name(root.name, sfx), policy.output_path)
        return [WorkItem(root, dest)]

    return [
        WorkItem(src, _tree_destination(
            root, src, encrypted_name(src.name, sfx), policy.output_path))
        for src in iter_files(root, policy.recurse)
        if not has_suffix(src.name, sfx)
    ]


def plan_decryption(path: str | os.PathLike[str], policy: TraversalPolicy) -> list[WorkItem]:
    """List (source, destination) pairs for a decryption call.

    A file root is attempted whatever its name. In a directory, only files
    carrying the encrypted suffix are included.

    Raises:
        PathNotFoundError: If `path` does not exist.
        OSError: If a directory root exists but cannot be listed
            (for example `PermissionError`).
    """
    root = _resolve_root(path)
    sfx = policy.encrypted_suffix
    if not root.is_dir():
        dest = _single_destination(
            root, decrypted_name(root.name, sfx), policy.output_path)
        return [WorkItem(root, dest)]

    return [
        WorkItem(src, _tree_destination(
            root, src, decrypted_name(src.name, sfx), policy.output_path))
        for src in iter_files(root, policy.recurse)
        if has_suffix(src.name, sfx)
    ]

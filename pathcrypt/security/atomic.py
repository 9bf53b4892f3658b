#!/usr/bin/env python3
# pathcrypt/security/atomic.py
from __future__ import annotations
"""
Crash-safe destination writes.

Output goes to a temp file in the destination directory, is flushed and
fsynced, then published under the final name. On any failure the temp file
is removed and an existing destination is left untouched.

Without overwrite the publish step itself refuses an existing name
(`os.link`, or an `O_EXCL` placeholder where hard links are unsupported),
so two writers racing for one destination cannot both succeed.
"""

import errno
import os
import shutil
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Iterator

from .errors import DestinationExistsError

TEMP_PREFIX = ".pathcrypt-"
TEMP_SUFFIX = ".tmp"

# link(2) failures that mean "no hard links here", not "name taken"
_NO_HARDLINKS = {errno.EPERM, errno.EMLINK, errno.ENOTSUP, errno.EOPNOTSUPP}


def is_temp_artifact(path: Path) -> bool:
    """True for leftovers of an interrupted atomic write."""
    return path.name.startswith(TEMP_PREFIX) and path.name.endswith(TEMP_SUFFIX)


def _publish_exclusive(tmp: Path, destination: Path) -> None:
    try:
        os.link(tmp, destination)
        return
    except FileExistsError:
        raise DestinationExistsError(destination) from None
    except OSError as exc:
        if exc.errno not in _NO_HARDLINKS:
            raise

    try:
        fd = os.open(destination, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o600)
    except FileExistsError:
        raise DestinationExistsError(destination) from None
    os.close(fd)
    try:
        os.replace(tmp, destination)
    except BaseException:
        destination.unlink(missing_ok=True)
        raise


@contextmanager
def atomic_destination(
    destination: Path,
    *,
    overwrite: bool = False,
    mode_from: Path | None = None,
) -> Iterator[BinaryIO]:
    """Yield a binary file that becomes `destination` only if the block succeeds.

    The file is created 0600; pass `mode_from` to give it that file's
    permission bits instead.

    Raises:
        DestinationExistsError: If `destination` exists and `overwrite` is False,
            whether it was there before writing or appeared meanwhile.
    """
    destination = Path(destination)
    if not overwrite and destination.exists():
        raise DestinationExistsError(destination)
    destination.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(
        prefix=TEMP_PREFIX, suffix=TEMP_SUFFIX, dir=destination.parent)
    tmp = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as fo:
            yield fo
            fo.flush()
            os.fsync(fo.fileno())
        if mode_from is not None:
            shutil.copymode(mode_from, tmp)
        if overwrite:
            os.replace(tmp, destination)
        else:
            _publish_exclusive(tmp, destination)
    finally:
        tmp.unlink(missing_ok=True)

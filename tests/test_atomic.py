"""Tests for crash-safe destination writes."""

from __future__ import annotations

import errno
import os
import stat

import pytest

from pathcrypt.security import atomic
from pathcrypt.security.atomic import atomic_destination, is_temp_artifact
from pathcrypt.security.errors import DestinationExistsError


def _leftovers(directory):
    return [p for p in directory.iterdir() if is_temp_artifact(p)]


def test_successful_write_lands_atomically(tmp_path):
    dest = tmp_path / "nested" / "out.bin"
    with atomic_destination(dest) as fo:
        fo.write(b"payload")
        assert not dest.exists()
    assert dest.read_bytes() == b"payload"
    assert _leftovers(dest.parent) == []


def test_failure_discards_temp_and_keeps_destination(tmp_path):
    dest = tmp_path / "out.bin"
    dest.write_bytes(b"original")
    with pytest.raises(RuntimeError):
        with atomic_destination(dest, overwrite=True) as fo:
            fo.write(b"half written")
            raise RuntimeError("boom")
    assert dest.read_bytes() == b"original"
    assert _leftovers(tmp_path) == []


def test_existing_destination_requires_overwrite(tmp_path):
    dest = tmp_path / "out.bin"
    dest.write_bytes(b"original")
    with pytest.raises(DestinationExistsError):
        with atomic_destination(dest) as fo:
            fo.write(b"new")
    assert dest.read_bytes() == b"original"

    with atomic_destination(dest, overwrite=True) as fo:
        fo.write(b"new")
    assert dest.read_bytes() == b"new"


def test_destination_appearing_mid_write_is_not_replaced(tmp_path):
    dest = tmp_path / "out.bin"
    with pytest.raises(DestinationExistsError):
        with atomic_destination(dest) as fo:
            fo.write(b"mine")
            dest.write_bytes(b"theirs")
    assert dest.read_bytes() == b"theirs"
    assert _leftovers(tmp_path) == []


@pytest.mark.parametrize("link_errno", [errno.EPERM, errno.EOPNOTSUPP])
def test_exclusive_publish_without_hard_links(tmp_path, monkeypatch, link_errno):
    def no_links(src, dst, *args, **kwargs):
        raise OSError(link_errno, os.strerror(link_errno))

    monkeypatch.setattr(atomic.os, "link", no_links)
    dest = tmp_path / "out.bin"
    with atomic_destination(dest) as fo:
        fo.write(b"payload")
    assert dest.read_bytes() == b"payload"
    assert _leftovers(tmp_path) == []

    dest.unlink()
    with pytest.raises(DestinationExistsError):
        with atomic_destination(dest) as fo:
            dest.write_bytes(b"raced")
            fo.write(b"late")
    assert dest.read_bytes() == b"raced"
    assert _leftovers(tmp_path) == []


@pytest.mark.skipif(os.name == "nt", reason="POSIX permission bits")
@pytest.mark.parametrize("mode", [0o600, 0o640, 0o755])
def test_mode_is_copied_from_source(tmp_path, mode):
    src = tmp_path / "src.bin"
    src.write_bytes(b"x")
    src.chmod(mode)
    dest = tmp_path / "dest.bin"
    with atomic_destination(dest, mode_from=src) as fo:
        fo.write(b"y")
    assert stat.S_IMODE(dest.stat().st_mode) == mode


@pytest.mark.skipif(os.name == "nt", reason="POSIX permission bits")
def test_new_file_is_private_without_mode_source(tmp_path):
    dest = tmp_path / "dest.bin"
    with atomic_destination(dest) as fo:
        fo.write(b"y")
    assert stat.S_IMODE(dest.stat().st_mode) == 0o600

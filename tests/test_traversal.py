"""Tests for traversal planning (no cryptography involved)."""

from __future__ import annotations

from pathlib import Path

import pytest

from pathcrypt.security.errors import PathNotFoundError
from pathcrypt.security.traversal import (
    TraversalPolicy,
    decrypted_name,
    has_suffix,
    iter_files,
    plan_decryption,
    plan_encryption,
)


def _names(items, root: Path):
    return [item.source.relative_to(root.resolve()).as_posix() for item in items]


def test_missing_root_is_fatal(tmp_path):
    with pytest.raises(PathNotFoundError):
        plan_encryption(tmp_path / "nope", TraversalPolicy())
    with pytest.raises(PathNotFoundError):
        plan_decryption(tmp_path / "nope", TraversalPolicy())


def test_encryption_plan_respects_recurse(tree):
    flat = plan_encryption(tree, TraversalPolicy())
    deep = plan_encryption(tree, TraversalPolicy(recurse=True))
    assert _names(flat, tree) == ["a.txt", "b.txt"]
    assert _names(deep, tree) == ["a.txt", "b.txt", "sub/c.txt"]
    for item in deep:
        assert item.destination == item.source.with_name(item.source.name + ".enc")
        assert item.source.is_absolute() and item.destination.is_absolute()


def test_directory_encryption_skips_existing_artifacts(tree):
    (tree / "old.txt.enc").write_bytes(b"x" * 64)
    assert "old.txt.enc" not in _names(plan_encryption(tree, TraversalPolicy()), tree)


def test_single_file_is_encrypted_whatever_its_name(tree):
    target = tree / "already.enc"
    target.write_bytes(b"data")
    [item] = plan_encryption(target, TraversalPolicy())
    assert item.destination.name == "already.enc.enc"


def test_decryption_plan_filters_by_suffix(tree):
    (tree / "a.txt.enc").write_bytes(b"x")
    (tree / "sub" / "c.txt.ENC").write_bytes(b"x")
    flat = plan_decryption(tree, TraversalPolicy())
    deep = plan_decryption(tree, TraversalPolicy(recurse=True))
    assert _names(flat, tree) == ["a.txt.enc"]
    assert _names(deep, tree) == ["a.txt.enc", "sub/c.txt.ENC"]
    assert [i.destination.name for i in deep] == ["a.txt", "c.txt"]


def test_single_file_decryption_without_suffix(tree):
    [item] = plan_decryption(tree / "a.txt", TraversalPolicy())
    assert item.destination.name == "a.txt.dec"


def test_custom_suffix(tree):
    (tree / "a.txt.locked").write_bytes(b"x")
    policy = TraversalPolicy(encrypted_suffix=".locked")
    assert _names(plan_decryption(tree, policy), tree) == ["a.txt.locked"]
    assert [i.destination.name for i in plan_encryption(tree, policy)] == [
        "a.txt.locked", "b.txt.locked"]


def test_output_path_for_single_file(tree, tmp_path):
    out = tmp_path / "out" / "secret.bin"
    [item] = plan_encryption(tree / "a.txt", TraversalPolicy(output_path=out))
    assert item.destination == out.absolute()

    outdir = tmp_path / "outdir"
    outdir.mkdir()
    [item] = plan_encryption(tree / "a.txt", TraversalPolicy(output_path=outdir))
    assert item.destination == outdir.absolute() / "a.txt.enc"


def test_output_path_for_directory_mirrors_layout(tree, tmp_path):
    out = tmp_path / "mirror"
    items = plan_encryption(tree, TraversalPolicy(recurse=True, output_path=out))
    assert [i.destination for i in items] == [
        out.absolute() / "a.txt.enc",
        out.absolute() / "b.txt.enc",
        out.absolute() / "sub" / "c.txt.enc",
    ]


def test_interrupted_temp_files_are_not_listed(tree):
    (tree / ".pathcrypt-abc123.tmp").write_bytes(b"partial")
    assert [p.name for p in iter_files(tree, recurse=False)] == ["a.txt", "b.txt"]


@pytest.mark.parametrize("suffix", ["enc", ".", "", "./x"])
def test_policy_rejects_bad_suffix(suffix):
    with pytest.raises(ValueError):
        TraversalPolicy(encrypted_suffix=suffix)


def test_name_helpers():
    assert has_suffix("A.TXT.ENC", ".enc")
    assert not has_suffix(".enc", ".enc")
    assert decrypted_name("report.pdf.enc") == "report.pdf"
    assert decrypted_name(".enc") == ".enc.dec"

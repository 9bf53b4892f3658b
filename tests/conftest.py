from __future__ import annotations

import logging
import os
from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run every test from an empty CWD with no PATHCRYPT_* environment."""
    for key in list(os.environ):
        if key.startswith("PATHCRYPT_"):
            monkeypatch.delenv(key)
    cwd = tmp_path / "cwd"
    cwd.mkdir()
    monkeypatch.chdir(cwd)
    return cwd


@pytest.fixture
def tree(tmp_path: Path) -> Path:
    """root/{a.txt,b.txt,sub/c.txt}"""
    root = tmp_path / "tree"
    (root / "sub").mkdir(parents=True)
    (root / "a.txt").write_bytes(b"alpha contents\n")
    (root / "b.txt").write_bytes(b"")
    (root / "sub" / "c.txt").write_bytes(b"gamma " * 1000)
    return root


@pytest.fixture
def restore_pathcrypt_logger():
    logger = logging.getLogger("pathcrypt")
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield logger
    for h in list(logger.handlers):
        if h not in handlers:
            logger.removeHandler(h)
            h.close()
    logger.setLevel(level)
    logger.propagate = propagate

"""Tests for configuration precedence and validation."""

from __future__ import annotations

import json

import pytest

from pathcrypt.config import load_config


def test_defaults(isolated_config):
    cfg = load_config()
    assert cfg.encrypted_suffix == ".enc"
    assert cfg.chunk_size == 64 * 1024
    assert cfg.max_workers == 1
    assert cfg.log_level is None
    assert cfg.log_file_path is None
    assert cfg.extra == {}


def test_toml_file_with_nested_table(isolated_config):
    (isolated_config / "pathcrypt.toml").write_text(
        '[pathcrypt]\nchunk_size = 4096\nmax_workers = 3\nlog_level = "debug"\n',
        encoding="utf-8",
    )
    cfg = load_config()
    assert (cfg.chunk_size, cfg.max_workers, cfg.log_level) == (4096, 3, "DEBUG")


def test_flat_json_and_ini_keys(isolated_config):
    (isolated_config / "pathcrypt.ini").write_text(
        "[pathcrypt]\nencrypted_suffix = .ini\n", encoding="utf-8")
    (isolated_config / "pathcrypt.json").write_text(
        json.dumps({"encrypted_suffix": ".json", "log_file_path": "out.log"}), encoding="utf-8")
    cfg = load_config()
    # json is read after ini
    assert cfg.encrypted_suffix == ".json"
    assert cfg.log_file_path == (isolated_config / "out.log").resolve()


def test_environment_overrides_files(isolated_config, monkeypatch):
    (isolated_config / ".env").write_text(
        "# comment\nPATHCRYPT_MAX_WORKERS=2\nOTHER_APP=ignored\n", encoding="utf-8")
    assert load_config().max_workers == 2
    monkeypatch.setenv("PATHCRYPT_MAX_WORKERS", "8")
    cfg = load_config()
    assert cfg.max_workers == 8
    assert "OTHER_APP" not in cfg.extra and "PATHCRYPT_OTHER_APP" not in cfg.extra


def test_unknown_keys_are_kept(isolated_config, monkeypatch):
    monkeypatch.setenv("PATHCRYPT_FUTURE_FLAG", "1")
    assert load_config().extra == {"PATHCRYPT_FUTURE_FLAG": "1"}


@pytest.mark.parametrize(
    "key,value",
    [
        ("PATHCRYPT_CHUNK_SIZE", "1000"),      # not a block multiple
        ("PATHCRYPT_CHUNK_SIZE", "0"),
        ("PATHCRYPT_CHUNK_SIZE", "lots"),
        ("PATHCRYPT_MAX_WORKERS", "0"),
        ("PATHCRYPT_LOG_LEVEL", "chatty"),
        ("PATHCRYPT_ENCRYPTED_SUFFIX", "enc"),
    ],
)
def test_invalid_values_raise(isolated_config, monkeypatch, key, value):
    monkeypatch.setenv(key, value)
    with pytest.raises(ValueError):
        load_config()

"""Tests for the command registry, dispatch, the crypto plugin and boot."""

from __future__ import annotations

import pytest

from pathcrypt.boot import boot_sequence
from pathcrypt.commands import (
    REGISTRY,
    CommandRegistry,
    CommandResult,
    command,
    load_commands,
    run_command,
)


@pytest.fixture
def loaded():
    load_commands()
    return REGISTRY


@pytest.fixture
def demo_registry():
    registry = CommandRegistry()

    @command(name="hello", aliases=["hi"], example="hello who=you", registry=registry)
    def hello(*, who: str, loud: bool = False):
        """Say hello."""
        text = f"hello {who}"
        return text.upper() if loud else text

    return registry


def test_registry_aliases_and_collisions(demo_registry):
    cmd = demo_registry.get("HI")
    assert cmd is demo_registry.get("hello")
    assert cmd.description == "Say hello."
    assert cmd.params == ("who", "loud")
    assert cmd.required == ("who",)
    assert demo_registry.names() == ["hello", "hi"]
    assert demo_registry.all() == [cmd]

    with pytest.raises(ValueError):
        @command(name="hi", registry=demo_registry)
        def clash():
            pass
    assert demo_registry.all() == [cmd]


def test_run_command_wraps_plain_return(demo_registry):
    res = run_command("hi", demo_registry, who="you", loud=True)
    assert res == CommandResult(ok=True, message="HELLO YOU")


def test_run_command_unknown_name_suggests(loaded):
    res = run_command("encrpyt")
    assert not res.ok
    assert "Unknown command" in res.message
    assert "encrypt" in res.message


def test_run_command_rejects_bad_arguments(demo_registry):
    extra = run_command("hello", demo_registry, who="x", colour="red")
    assert not extra.ok and "colour" in extra.message

    missing = run_command("hello", demo_registry)
    assert not missing.ok
    assert "who" in missing.message
    assert "hello who=you" in missing.message


def test_unparseable_flag_is_reported(loaded, tree):
    res = run_command("encrypt", path=str(tree), password="pw", recurse="maybe")
    assert not res.ok
    assert "maybe" in res.message
    assert list(tree.rglob("*.enc")) == []


def test_crypto_plugin_is_discovered(loaded):
    assert load_commands() == 1
    assert loaded.get("encrypt") is not None
    assert loaded.get("unprotect") is loaded.get("decrypt")
    assert "password" in loaded.get("encrypt").params


def test_encrypt_and_decrypt_commands(loaded, tree, capsys):
    enc = run_command("protect", path=str(tree), password="pw", recurse="true", remove_source="yes")
    assert enc.ok
    assert len(enc.data) == 3
    assert "3/3" in enc.message
    assert "OK" in capsys.readouterr().out

    dec = run_command("decrypt", path=str(tree), password="pw", recurse=True)
    assert dec.ok
    assert {d["destination_path"] for d in dec.data} == {
        str((tree / "a.txt").resolve()),
        str((tree / "b.txt").resolve()),
        str((tree / "sub" / "c.txt").resolve()),
    }


def test_command_reports_partial_failure(loaded, tree):
    run_command("encrypt", path=str(tree), password="pw")
    again = run_command("encrypt", path=str(tree), password="pw")
    assert not again.ok
    assert {d["error_kind"] for d in again.data} == {"DestinationExists"}


def test_command_missing_path(loaded, tmp_path, capsys):
    res = run_command("decrypt", path=str(tmp_path / "gone"), password="pw")
    assert not res.ok
    assert res.data is None
    assert "Path not found" in capsys.readouterr().out


def test_boot_sequence(isolated_config, monkeypatch, restore_pathcrypt_logger, capsys, tree):
    log_file = isolated_config / "pathcrypt.log"
    monkeypatch.setenv("PATHCRYPT_LOG_FILE_PATH", str(log_file))
    monkeypatch.setenv("PATHCRYPT_LOG_LEVEL", "DEBUG")

    state = boot_sequence()
    assert state.config.log_file_path == log_file.resolve()
    assert state.loaded_count >= 2
    assert state.logger.name == "pathcrypt"
    out = capsys.readouterr().out
    assert "Load configuration" in out and "Load plugin commands" in out

    res = state.run("encrypt", path=str(tree / "a.txt"), password="pw")
    assert res.ok
    for h in state.logger.handlers:
        h.flush()
    assert "running command encrypt" in log_file.read_text(encoding="utf-8")

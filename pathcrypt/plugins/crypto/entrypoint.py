# pathcrypt/plugins/crypto/entrypoint.py
from __future__ import annotations

from typing import Any, Sequence

from pathcrypt.commands import command, CommandResult
from pathcrypt.security import (
    OperationResult,
    PathNotFoundError,
    protect_path,
    unprotect_path,
)
from pathcrypt.ui import colorize, print_line, print_table

_BOOL_TRUE = {"1", "true", "yes", "y", "on"}
_BOOL_FALSE = {"0", "false", "no", "n", "off"}


# -------------------------- helpers --------------------------

def _as_bool(val: Any) -> bool:
    if isinstance(val, bool):
        return val
    s = str(val).strip().lower()
    if s in _BOOL_TRUE:
        return True
    if s in _BOOL_FALSE:
        return False
    raise ValueError(f"Expected boolean, got: {val!r}")


def _as_opt_int(val: Any) -> int | None:
    if val is None or str(val).strip() == "":
        return None
    return int(str(val).strip())


def _print_results(results: Sequence[OperationResult]) -> None:
    if not results:
        print_line("(no files matched)")
        return
    rows = []
    for r in results:
        status = colorize("OK", "green") if r.ok else colorize("FAILED", "red")
        rows.append([status, r.source_path, r.destination_path, r.error or ""])
    print_table(rows, headers=["Status", "Source", "Destination", "Error"])


def _to_command_result(verb: str, results: Sequence[OperationResult]) -> CommandResult:
    failed = sum(1 for r in results if not r.ok)
    message = f"{verb}: {len(results) - failed}/{len(results)} file(s) succeeded"
    return CommandResult(
        ok=failed == 0,
        message=message,
        data=[r.to_dict() for r in results],
    )


# ----------------------- commands (decorator) -----------------------

@command(
    name="encrypt",
    description="Encrypt a file or directory with a password (writes <name>.enc).",
    example="encrypt path=docs password=... recurse=true remove_source=false",
    aliases=["protect"],
)
def encrypt_cmd(
    *,
    path: str,
    password: str,
    recurse: bool | str = False,
    force: bool | str = False,
    remove_source: bool | str = False,
    output: str | None = None,
    workers: int | str | None = None,
) -> CommandResult:
    """Encrypt `path` and print one row per file."""
    try:
        results = protect_path(
            path,
            password,
            recurse=_as_bool(recurse),
            force=_as_bool(force),
            remove_source=_as_bool(remove_source),
            output_path=output or None,
            max_workers=_as_opt_int(workers),
        )
    except PathNotFoundError as exc:
        print_line(colorize(f"[ERROR] {exc}", "red"))
        return CommandResult(ok=False, message=str(exc), data=None)

    _print_results(results)
    return _to_command_result("encrypt", results)


@command(
    name="decrypt",
    description="Decrypt a .enc file or the .enc files of a directory.",
    example="decrypt path=docs password=... recurse=true keep_encrypted=true",
    aliases=["unprotect"],
)
def decrypt_cmd(
    *,
    path: str,
    password: str,
    recurse: bool | str = False,
    force: bool | str = False,
    keep_encrypted: bool | str = False,
    output: str | None = None,
    workers: int | str | None = None,
) -> CommandResult:
    """Decrypt `path` and print one row per file."""
    try:
        results = unprotect_path(
            path,
            password,
            recurse=_as_bool(recurse),
            force=_as_bool(force),
            keep_encrypted=_as_bool(keep_encrypted),
            output_path=output or None,
            max_workers=_as_opt_int(workers),
        )
    except PathNotFoundError as exc:
        print_line(colorize(f"[ERROR] {exc}", "red"))
        return CommandResult(ok=False, message=str(exc), data=None)

    _print_results(results)
    return _to_command_result("decrypt", results)

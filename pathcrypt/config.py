#!/usr/bin/env python3
# pathcrypt/config.py
from __future__ import annotations

"""
Configuration loader (stdlib-only).

Precedence (low → high):
  1) Built-in defaults
  2) Files in CWD: .env, pathcrypt.ini, pathcrypt.json, pathcrypt.toml
  3) Environment variables (PATHCRYPT_* only)

Keys may be written with or without the PATHCRYPT_ prefix in files, and
nested tables are flattened ({"pathcrypt": {"chunk_size": 1}} →
PATHCRYPT_CHUNK_SIZE).

Validation:
  - ENCRYPTED_SUFFIX: str starting with '.', at least one more character
  - CHUNK_SIZE: int > 0 and a multiple of 16
  - MAX_WORKERS: int >= 1
  - LOG_LEVEL: None or one of {'DEBUG','INFO','WARNING','ERROR','CRITICAL'}
  - LOG_FILE_PATH: None or normalized path

Cipher, KDF and header sizes are format constants and cannot be configured.
"""

from dataclasses import dataclass, field
from typing import Any, Mapping
from pathlib import Path
import configparser
import json
import os
import re
import tomllib

from .security.encryption.params import BLOCK_SIZE, DEFAULT_CHUNK_SIZE, DEFAULT_SUFFIX

PREFIX = "PATHCRYPT_"

# ---------- defaults ----------

DEFAULTS: dict[str, Any] = {
    "PATHCRYPT_ENCRYPTED_SUFFIX": DEFAULT_SUFFIX,
    "PATHCRYPT_CHUNK_SIZE": DEFAULT_CHUNK_SIZE,
    "PATHCRYPT_MAX_WORKERS": 1,
    "PATHCRYPT_LOG_LEVEL": None,      # 'DEBUG'/'INFO'/'WARNING'/'ERROR'/'CRITICAL'
    "PATHCRYPT_LOG_FILE_PATH": None,
}


# ---------- data model ----------

@dataclass(frozen=True)
class CryptoConfig:
    encrypted_suffix: str
    chunk_size: int
    max_workers: int
    log_level: str | None
    log_file_path: Path | None

    # Unrecognized PATHCRYPT_* keys preserved for debugging/forward-compat
    extra: dict[str, Any] = field(default_factory=dict)


# ---------- file loaders (stdlib) ----------

def _load_env_file(path: Path) -> dict[str, str]:
    """Very small .env parser: KEY=VALUE, supports quotes; ignores comments/blank lines."""
    out: dict[str, str] = {}
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return out

    line_re = re.compile(r"""^\s*(?:export\s+)?([A-Za-z_][A-Za-z0-9_]*)\s*=\s*(.*?)\s*$""")
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        m = line_re.match(line)
        if not m:
            continue
        k, v = m.group(1), m.group(2)
        if (v.startswith("'") and v.endswith("'")) or (v.startswith('"') and v.endswith('"')):
            v = v[1:-1]
        out[k] = v
    return out


def _load_ini_file(path: Path) -> dict[str, str]:
    cfg = configparser.ConfigParser()
    try:
        with path.open(encoding="utf-8") as f:
            cfg.read_file(f)
    except FileNotFoundError:
        return {}
    flat: dict[str, str] = {}
    for sec in cfg.sections():
        for k, v in cfg.items(sec):
            flat[k.upper()] = v
    return flat


def _load_json_file(path: Path) -> dict[str, Any]:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (FileNotFoundError, json.JSONDecodeError):
        return {}


def _load_toml_file(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except (FileNotFoundError, tomllib.TOMLDecodeError):
        return {}


def _flatten_mapping(obj: Any, prefix: str = "") -> dict[str, Any]:
    """
    Flatten nested dicts to UPPER_SNAKE keys.
    Example: {'pathcrypt': {'chunk_size': 1}} -> {'PATHCRYPT_CHUNK_SIZE': 1}
    """
    flat: dict[str, Any] = {}
    if isinstance(obj, Mapping):
        for k, v in obj.items():
            key = f"{prefix}_{k}" if prefix else str(k)
            if isinstance(v, Mapping):
                flat.update(_flatten_mapping(v, key))
            else:
                flat[str(key).upper()] = v
    return flat


def _find_config_files() -> list[Path]:
    cwd = Path.cwd()
    return [
        cwd / ".env",
        cwd / "pathcrypt.ini",
        cwd / "pathcrypt.json",
        cwd / "pathcrypt.toml",
    ]


# ---------- normalization & coercion ----------

def _as_int(val: Any) -> int:
    if isinstance(val, int) and not isinstance(val, bool):
        return val
    try:
        return int(str(val).strip())
    except Exception as exc:  # noqa: BLE001
        raise ValueError(f"Expected integer, got: {val!r}") from exc


def _as_opt_str(val: Any) -> str | None:
    return None if val is None or str(val).strip().lower() in {"", "none"} else str(val)


def _as_log_level(val: Any) -> str | None:
    lv = _as_opt_str(val)
    if lv is None:
        return None
    up = lv.upper()
    allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
    if up not in allowed:
        raise ValueError(
            f"LOG_LEVEL must be one of {sorted(allowed)}, got {lv!r}")
    return up


def _as_opt_path(val: Any) -> Path | None:
    v = _as_opt_str(val)
    if v is None:
        return None
    # expand both ~ and env vars
    return Path(os.path.expandvars(os.path.expanduser(v))).resolve()


def _normalize_keys(d: Mapping[str, Any]) -> dict[str, Any]:
    """Upper-case keys and add the PATHCRYPT_ prefix where it is missing."""
    out: dict[str, Any] = {}
    for k, v in d.items():
        key = str(k).upper()
        out[key if key.startswith(PREFIX) else PREFIX + key] = v
    return out


# ---------- merge & load ----------

def _merge_sources() -> dict[str, Any]:
    merged: dict[str, Any] = dict(DEFAULTS)

    for file in _find_config_files():
        if file.name == ".env":
            merged.update(_normalize_keys(
                {k: v for k, v in _load_env_file(file).items() if k.upper().startswith(PREFIX)}))
        elif file.suffix == ".ini":
            merged.update(_normalize_keys(_load_ini_file(file)))
        elif file.suffix == ".json":
            merged.update(_normalize_keys(
                _flatten_mapping(_load_json_file(file))))
        elif file.suffix == ".toml":
            merged.update(_normalize_keys(
                _flatten_mapping(_load_toml_file(file))))

    # Environment variables override all; only take PATHCRYPT_* keys
    merged.update({k: v for k, v in os.environ.items()
                   if k.startswith(PREFIX)})
    return merged


# ---------- validation ----------

def _validate_and_build(config: dict[str, Any]) -> CryptoConfig:
    suffix = _as_opt_str(config.get("PATHCRYPT_ENCRYPTED_SUFFIX")) or DEFAULT_SUFFIX
    chunk_size = _as_int(config.get("PATHCRYPT_CHUNK_SIZE", DEFAULT_CHUNK_SIZE))
    max_workers = _as_int(config.get("PATHCRYPT_MAX_WORKERS", 1))
    log_level = _as_log_level(config.get("PATHCRYPT_LOG_LEVEL"))
    log_file_path = _as_opt_path(config.get("PATHCRYPT_LOG_FILE_PATH"))

    if not suffix.startswith(".") or len(suffix) < 2 or "/" in suffix or "\\" in suffix:
        raise ValueError(
            f"ENCRYPTED_SUFFIX must look like '.enc', got {suffix!r}")
    if chunk_size <= 0 or chunk_size % BLOCK_SIZE:
        raise ValueError(
            f"CHUNK_SIZE must be a positive multiple of {BLOCK_SIZE}")
    if max_workers < 1:
        raise ValueError("MAX_WORKERS must be >= 1")

    recognized = set(DEFAULTS.keys())
    extra = {k: v for k, v in config.items() if k not in recognized}

    return CryptoConfig(
        encrypted_suffix=suffix,
        chunk_size=chunk_size,
        max_workers=max_workers,
        log_level=log_level,
        log_file_path=log_file_path,
        extra=extra,
    )


# ---------- public API ----------

def load_config() -> CryptoConfig:
    """
    Load, merge, normalize, and validate configuration.
    No filesystem side-effects.
    """
    return _validate_and_build(_merge_sources())

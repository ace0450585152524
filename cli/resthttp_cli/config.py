from __future__ import annotations

import os
import sys
import tomllib
from dataclasses import dataclass, field
from typing import Any

import tomli_w
from platformdirs import user_config_dir

from . import console

APP_NAME = "resthttp"
CONFIG_FILENAME = "config.toml"
ENV_BASE_URL = "RESTHTTP_BASE_URL"
DEFAULT_TIMEOUT_S = 10.0

_WARNED_BASE_URLS: set[str] = set()


@dataclass
class AuthConfig:
    username: str = ""
    password: str = field(default="", repr=False)


@dataclass
class AppConfig:
    base_url: str
    auth: AuthConfig
    verify_ssl: bool = True
    timeout_s: float = DEFAULT_TIMEOUT_S


def config_path() -> str:
    return f"{user_config_dir(APP_NAME)}/{CONFIG_FILENAME}"


def default_config() -> AppConfig:
    return AppConfig(
        base_url="http://127.0.0.1:8080",
        auth=AuthConfig(),
        verify_ssl=True,
        timeout_s=DEFAULT_TIMEOUT_S,
    )


def normalize_base_url(raw: str | None, *, warn: bool = False) -> str:
    """Strip trailing slashes and add a scheme when none is given.

    Loopback hosts get plain http; anything else is assumed to be https.
    """
    value = (raw or "").strip().rstrip("/")
    if not value or "://" in value:
        return value

    host = value.split("/", 1)[0].rsplit(":", 1)[0].lower()
    scheme = "http" if host == "localhost" or host.startswith("127.") else "https"
    normalized = f"{scheme}://{value}"
    if warn and normalized not in _WARNED_BASE_URLS and sys.stderr.isatty():
        _WARNED_BASE_URLS.add(normalized)
        console.warn(f"base_url has no scheme, using {normalized}")
    return normalized


def _coerce_timeout(value: Any, fallback: float) -> float:
    if isinstance(value, bool):
        return fallback
    try:
        timeout = float(value)
    except (TypeError, ValueError):
        return fallback
    return timeout if timeout > 0 else fallback


def to_toml(cfg: AppConfig) -> dict[str, Any]:
    return {
        "base_url": cfg.base_url,
        "verify_ssl": cfg.verify_ssl,
        "timeout_s": cfg.timeout_s,
        "auth": {
            "username": cfg.auth.username,
            "password": cfg.auth.password,
        },
    }


def _apply_section(cfg: AppConfig, data: dict[str, Any]) -> AppConfig:
    base_url = normalize_base_url(str(data.get("base_url") or ""), warn=True)
    auth_raw = data.get("auth") if isinstance(data.get("auth"), dict) else {}
    username = str(data.get("username") or auth_raw.get("username") or cfg.auth.username)
    password = str(data.get("password") or auth_raw.get("password") or cfg.auth.password)
    verify_ssl = data.get("verify_ssl")
    return AppConfig(
        base_url=base_url or cfg.base_url,
        auth=AuthConfig(username=username, password=password),
        verify_ssl=verify_ssl if isinstance(verify_ssl, bool) else cfg.verify_ssl,
        timeout_s=_coerce_timeout(data.get("timeout_s"), cfg.timeout_s),
    )


def from_toml(data: dict[str, Any]) -> AppConfig:
    return _apply_section(default_config(), data)


def load_config() -> AppConfig:
    path = config_path()
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
        return from_toml(data)
    except FileNotFoundError:
        return default_config()


def apply_profile(cfg: AppConfig, profile: str | None) -> AppConfig:
    if not profile:
        return cfg
    path = config_path()
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        return cfg

    profiles_raw = data.get("profiles") or {}
    if not isinstance(profiles_raw, dict):
        return cfg
    prof = profiles_raw.get(profile)
    if not isinstance(prof, dict):
        console.warn(f"Profile not found: {profile}")
        return cfg
    return _apply_section(cfg, prof)


def save_config(cfg: AppConfig) -> str:
    path = config_path()
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "wb") as f:
        f.write(tomli_w.dumps(to_toml(cfg)).encode("utf-8"))
    os.chmod(path, 0o600)
    return path


def resolve_base_url(cfg: AppConfig, override: str | None = None) -> str:
    raw = override or os.getenv(ENV_BASE_URL, "").strip() or cfg.base_url
    return normalize_base_url(raw, warn=True)

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from typing import Any

import tomli_w
from platformdirs import user_config_dir

from bakery_client.config_types import DEFAULT_BASE_URL, ClientConfig, RequestOptions

from . import console

APP_NAME = "bakery"
CONFIG_FILENAME = "config.toml"
ENV_API_BASE_URL = "BAKERY_API_BASE_URL"

_WARNED_BASE_URL_SCHEME = False


@dataclass
class AuthConfig:
    token: str = ""
    token_type: str = "bearer"
    role: str = ""
    full_name: str = ""


@dataclass
class RequestConfig:
    timeout_s: float = 30.0
    max_retries: int = 2
    retry_delay_s: float = 1.0
    max_delay_s: float | None = None


@dataclass
class AppConfig:
    base_url: str
    auth: AuthConfig
    request: RequestConfig = field(default_factory=RequestConfig)


def config_path() -> str:
    return f"{user_config_dir(APP_NAME)}/{CONFIG_FILENAME}"


def default_config() -> AppConfig:
    return AppConfig(
        base_url=DEFAULT_BASE_URL,
        auth=AuthConfig(),
        request=RequestConfig(),
    )


def normalize_base_url(raw: str | None, *, warn: bool = False) -> str:
    value = (raw or "").strip()
    if not value:
        return ""
    value = value.rstrip("/")
    lowered = value.lower()
    if lowered.startswith("http://") or lowered.startswith("https://"):
        return value

    host = value.split("/", 1)[0]
    host = host.split(":", 1)[0].lower()
    if host in {"localhost", "127.0.0.1", "0.0.0.0"}:
        scheme = "http://"
    else:
        scheme = "https://"

    normalized = f"{scheme}{value}"
    if warn:
        _warn_missing_scheme(normalized)
    return normalized


def _warn_missing_scheme(normalized: str) -> None:
    global _WARNED_BASE_URL_SCHEME
    if _WARNED_BASE_URL_SCHEME:
        return
    if not _is_interactive():
        return
    console.warn(f"base_url missing scheme, assuming {normalized}")
    _WARNED_BASE_URL_SCHEME = True


def _is_interactive() -> bool:
    import sys
    return bool(sys.stderr.isatty() or sys.stdout.isatty())


def ensure_parent_dir(path: str) -> None:
    os.makedirs(os.path.dirname(path), exist_ok=True)


def to_toml(cfg: AppConfig) -> dict[str, Any]:
    return _prune_none(
        {
            "base_url": cfg.base_url,
            "auth": {
                "token": cfg.auth.token,
                "token_type": cfg.auth.token_type,
                "role": cfg.auth.role,
                "full_name": cfg.auth.full_name,
            },
            "request": {
                "timeout_s": cfg.request.timeout_s,
                "max_retries": cfg.request.max_retries,
                "retry_delay_s": cfg.request.retry_delay_s,
                "max_delay_s": cfg.request.max_delay_s,
            },
        }
    )


def _prune_none(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: _prune_none(v) for k, v in value.items() if v is not None}
    if isinstance(value, list):
        return [_prune_none(item) for item in value if item is not None]
    return value


def _number(raw: Any, default: float) -> float:
    if isinstance(raw, bool):
        return default
    if isinstance(raw, (int, float)):
        return float(raw)
    return default


def from_toml(data: dict[str, Any]) -> AppConfig:
    cfg = default_config()
    base_url = normalize_base_url(str(data.get("base_url") or ""), warn=True)
    if base_url:
        cfg.base_url = base_url

    auth_raw = data.get("auth") or {}
    if isinstance(auth_raw, dict):
        cfg.auth = AuthConfig(
            token=str(auth_raw.get("token") or ""),
            token_type=str(auth_raw.get("token_type") or "bearer"),
            role=str(auth_raw.get("role") or ""),
            full_name=str(auth_raw.get("full_name") or ""),
        )

    req_raw = data.get("request") or {}
    if isinstance(req_raw, dict):
        defaults = RequestConfig()
        max_delay = req_raw.get("max_delay_s")
        cfg.request = RequestConfig(
            timeout_s=_number(req_raw.get("timeout_s"), defaults.timeout_s),
            max_retries=max(0, int(_number(req_raw.get("max_retries"), defaults.max_retries))),
            retry_delay_s=_number(req_raw.get("retry_delay_s"), defaults.retry_delay_s),
            max_delay_s=_number(max_delay, 0.0) if max_delay is not None else None,
        )
    return cfg


def load_config() -> AppConfig:
    path = config_path()
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
        return from_toml(data)
    except FileNotFoundError:
        return default_config()


def resolve_base_url(cfg: AppConfig, override: str | None = None) -> str:
    if override:
        return normalize_base_url(override, warn=True)
    env_value = os.getenv(ENV_API_BASE_URL, "").strip()
    if env_value:
        return normalize_base_url(env_value, warn=True)
    return normalize_base_url(cfg.base_url, warn=True) or DEFAULT_BASE_URL


def client_config(cfg: AppConfig, *, base_url_override: str | None = None, version: str | None = None) -> ClientConfig:
    req = cfg.request
    return ClientConfig(
        base_url=resolve_base_url(cfg, base_url_override),
        defaults=RequestOptions(
            timeout_s=req.timeout_s,
            max_retries=req.max_retries,
            retry_delay_s=req.retry_delay_s,
            max_delay_s=req.max_delay_s,
        ),
        client_version=version,
    )


def save_config(cfg: AppConfig) -> str:
    path = config_path()
    ensure_parent_dir(path)
    with open(path, "wb") as f:
        f.write(tomli_w.dumps(to_toml(cfg)).encode("utf-8"))
    os.chmod(path, 0o600)
    return path

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

DEFAULT_BASE_URL = "http://localhost:54321/"

_TRUTHY = frozenset({"1", "true", "t", "yes", "y", "on"})
_FALSY = frozenset({"0", "false", "f", "no", "n", "off"})


@dataclass(frozen=True)
class SDKConfig:
    """Connection settings for the hosted database REST API."""

    base_url: str = DEFAULT_BASE_URL
    api_key: str | None = None
    timeout_seconds: float = 30.0
    verify_ssl: bool = True
    retry_max_attempts: int = 3
    retry_backoff_ms: int = 250

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "SDKConfig":
        env = os.environ if environ is None else environ
        return cls(
            base_url=normalize_base_url(env.get("ASSET_API_URL", "")),
            api_key=env.get("ASSET_API_KEY", "").strip() or None,
            timeout_seconds=float(env.get("ASSET_API_TIMEOUT_SECONDS") or cls.timeout_seconds),
            verify_ssl=parse_bool(env.get("ASSET_API_VERIFY_SSL"), default=True),
            retry_max_attempts=max(1, int(env.get("ASSET_API_RETRY_MAX_ATTEMPTS") or cls.retry_max_attempts)),
            retry_backoff_ms=max(0, int(env.get("ASSET_API_RETRY_BACKOFF_MS") or cls.retry_backoff_ms)),
        )


def normalize_base_url(value: str) -> str:
    stripped = value.strip()
    if not stripped:
        return DEFAULT_BASE_URL
    return stripped.rstrip("/") + "/"


def parse_bool(value: str | bool | None, default: bool = True) -> bool:
    if isinstance(value, bool):
        return value
    token = (value or "").strip().lower()
    if token in _TRUTHY:
        return True
    if token in _FALSY:
        return False
    return default

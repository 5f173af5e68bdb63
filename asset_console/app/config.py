from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from clients.asset_backend_sdk.config import DEFAULT_BASE_URL, SDKConfig


class AppConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="ASSET_CONSOLE_", env_file=".env", extra="ignore")

    api_url: str = DEFAULT_BASE_URL
    api_key: str | None = None
    access_token: str | None = None
    timeout_seconds: float = Field(default=30.0, gt=0)
    verify_ssl: bool = True
    retry_max_attempts: int = Field(default=3, ge=1)
    retry_backoff_ms: int = Field(default=250, ge=0)
    default_page_size: int = Field(default=10, ge=1)
    page_size_options: tuple[int, ...] = (10, 25, 50, 100)
    log_level: str = "INFO"

    @field_validator("api_url")
    @classmethod
    def _normalize_api_url(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise ValueError("ASSET_CONSOLE_API_URL must not be empty")
        return normalized if normalized.endswith("/") else f"{normalized}/"

    @field_validator("page_size_options")
    @classmethod
    def _check_page_sizes(cls, value: tuple[int, ...]) -> tuple[int, ...]:
        if not value or any(size < 1 for size in value):
            raise ValueError("ASSET_CONSOLE_PAGE_SIZE_OPTIONS must list page sizes >= 1")
        return value

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown ASSET_CONSOLE_LOG_LEVEL: {value}")
        return level

    def sdk_config(self) -> SDKConfig:
        return SDKConfig(
            base_url=self.api_url,
            api_key=self.api_key or None,
            timeout_seconds=self.timeout_seconds,
            verify_ssl=self.verify_ssl,
            retry_max_attempts=self.retry_max_attempts,
            retry_backoff_ms=self.retry_backoff_ms,
        )

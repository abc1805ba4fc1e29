"""Portal configuration.

Values come from, highest first: the process environment, the file named
by ``MEDPORTAL_ENV_FILE``, ``config/.env.dev``, then ``config/.env``.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from pydantic import SecretStr, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE_VARIABLE = "MEDPORTAL_ENV_FILE"


def _project_root() -> Path:
    here = Path(__file__).resolve().parent
    for candidate in (here, *here.parents):
        if (candidate / "config").is_dir() or (candidate / ".git").is_dir():
            return candidate
    return Path(__file__).resolve().parents[2]


def get_config_dir() -> Path:
    return _project_root() / "config"


def _env_file() -> Path | None:
    explicit = os.environ.get(ENV_FILE_VARIABLE)
    if explicit:
        path = Path(explicit)
        if not path.is_absolute():
            path = _project_root() / path
        if path.exists():
            return path

    for name in (".env.dev", ".env"):
        path = get_config_dir() / name
        if path.exists():
            return path
    return None


class Settings(BaseSettings):
    """Portal settings, one field per environment variable."""

    model_config = SettingsConfigDict(
        env_file=_env_file(),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Hosted backend (BAAS_ prefix)
    baas_url: str = "http://localhost:54321"
    baas_anon_key: SecretStr = SecretStr("")
    http_timeout: float = 10.0

    # Accounts
    account_email_domain: str = "saniatrmel.hospital"
    fixed_logins_enabled: bool = True

    # Persisted key-value store shared by every open portal window
    storage_url: str = "sqlite:///medportal-storage.db"
    storage_relay_interval: float = 0.5

    # Navigation
    sign_in_route: str = "/login"

    # Logging (LOG_ prefix)
    log_level: str = "INFO"

    @field_validator("account_email_domain", mode="before")
    @classmethod
    def _validate_email_domain(cls, v: object) -> str:
        """Store the domain without a leading '@'."""
        return str(v or "").strip().lstrip("@").lower()

    @field_validator("storage_relay_interval")
    @classmethod
    def _validate_relay_interval(cls, v: float) -> float:
        if v <= 0:
            msg = "storage_relay_interval must be positive"
            raise ValueError(msg)
        return v

    @computed_field  # type: ignore[prop-decorator]
    @property
    def auth_url(self) -> str:
        """Base URL of the hosted auth API."""
        return f"{self.baas_url.rstrip('/')}/auth/v1"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def rest_url(self) -> str:
        """Base URL of the hosted row API."""
        return f"{self.baas_url.rstrip('/')}/rest/v1"


@lru_cache()
def get_settings() -> Settings:
    return Settings()


def clear_settings_cache() -> None:
    """Forget the cached settings so the next call rereads the environment."""
    get_settings.cache_clear()

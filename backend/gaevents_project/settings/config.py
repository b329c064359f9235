"""Pydantic-backed configuration for Django settings."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parent.parent.parent
DEFAULT_ENV_FILE = BASE_DIR / ".env"


class AppSettings(BaseSettings):
    """Environment-driven configuration for the Django project."""

    debug: bool = False
    secret_key: str = "development-secret-key"
    allowed_hosts: list[str] = Field(default_factory=list)
    cors_allowed_origins: list[str] = Field(default_factory=list)
    database_url: str | None = None
    db_conn_max_age: int = 60
    redis_url: str | None = Field(
        default=None,
        validation_alias=AliasChoices("REDIS_URL", "DJANGO_REDIS_URL"),
    )
    job_queue_max_attempts: int = Field(
        default=3,
        validation_alias=AliasChoices("JOB_QUEUE_MAX_ATTEMPTS", "DJANGO_JOB_QUEUE_MAX_ATTEMPTS"),
    )
    google_analytics_tracking_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "GOOGLE_ANALYTICS_TRACKING_ID",
            "DJANGO_GOOGLE_ANALYTICS_TRACKING_ID",
        ),
    )
    google_analytics_enabled: bool = Field(
        default=True,
        validation_alias=AliasChoices(
            "GOOGLE_ANALYTICS_ENABLED",
            "DJANGO_GOOGLE_ANALYTICS_ENABLED",
        ),
    )
    google_analytics_use_ssl: bool = Field(
        default=True,
        validation_alias=AliasChoices(
            "GOOGLE_ANALYTICS_USE_SSL",
            "DJANGO_GOOGLE_ANALYTICS_USE_SSL",
        ),
    )
    google_analytics_anonymize_ip: bool = Field(
        default=True,
        validation_alias=AliasChoices(
            "GOOGLE_ANALYTICS_ANONYMIZE_IP",
            "DJANGO_GOOGLE_ANALYTICS_ANONYMIZE_IP",
        ),
    )
    google_analytics_send_user_id: bool = Field(
        default=False,
        validation_alias=AliasChoices(
            "GOOGLE_ANALYTICS_SEND_USER_ID",
            "DJANGO_GOOGLE_ANALYTICS_SEND_USER_ID",
        ),
    )
    google_analytics_queue_name: str | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "GOOGLE_ANALYTICS_QUEUE_NAME",
            "DJANGO_GOOGLE_ANALYTICS_QUEUE_NAME",
        ),
    )
    google_analytics_client_id_session_key: str = Field(
        default="google_analytics_client_id",
        validation_alias=AliasChoices(
            "GOOGLE_ANALYTICS_CLIENT_ID_SESSION_KEY",
            "DJANGO_GOOGLE_ANALYTICS_CLIENT_ID_SESSION_KEY",
        ),
    )
    google_analytics_http_uri: str = Field(
        default="/gaid",
        validation_alias=AliasChoices(
            "GOOGLE_ANALYTICS_HTTP_URI",
            "DJANGO_GOOGLE_ANALYTICS_HTTP_URI",
        ),
    )
    google_analytics_default_category: str = Field(
        default="App",
        validation_alias=AliasChoices(
            "GOOGLE_ANALYTICS_DEFAULT_CATEGORY",
            "DJANGO_GOOGLE_ANALYTICS_DEFAULT_CATEGORY",
        ),
    )
    google_analytics_debug: bool = Field(
        default=False,
        validation_alias=AliasChoices(
            "GOOGLE_ANALYTICS_DEBUG",
            "DJANGO_GOOGLE_ANALYTICS_DEBUG",
        ),
    )
    google_analytics_timeout: float = Field(
        default=5.0,
        validation_alias=AliasChoices(
            "GOOGLE_ANALYTICS_TIMEOUT",
            "DJANGO_GOOGLE_ANALYTICS_TIMEOUT",
        ),
    )

    model_config = SettingsConfigDict(
        env_prefix="DJANGO_",
        case_sensitive=False,
        extra="allow",
    )

    @field_validator("allowed_hosts", "cors_allowed_origins", mode="before")
    @classmethod
    def _split_csv(cls, value: Any) -> list[str]:
        if value is None or value == "":
            return []
        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        if isinstance(value, list):
            return value
        return [str(value).strip()] if str(value).strip() else []

    @field_validator("google_analytics_http_uri", mode="after")
    @classmethod
    def _leading_slash(cls, value: str) -> str:
        value = value.strip() or "/gaid"
        return value if value.startswith("/") else f"/{value}"


@lru_cache()
def get_settings(env_file: str | os.PathLike[str] | None = None) -> AppSettings:
    """Load settings from environment and optional .env file with caching."""

    kwargs: dict[str, Any] = {}
    env_file_path: Path | None = None

    if env_file:
        env_file_path = Path(env_file)
    elif os.getenv("DJANGO_ENV_FILE"):
        env_file_path = Path(os.environ["DJANGO_ENV_FILE"])
    elif DEFAULT_ENV_FILE.exists():
        env_file_path = DEFAULT_ENV_FILE

    if env_file_path is not None:
        kwargs["_env_file"] = env_file_path
        kwargs["_env_file_encoding"] = "utf-8"

    return AppSettings(**kwargs)


__all__ = [
    "AppSettings",
    "BASE_DIR",
    "DEFAULT_ENV_FILE",
    "get_settings",
]

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration for hosts embedding the webhook router.

    Values are loaded from ``RAZOR_WEBHOOK_*`` environment variables and may
    be overridden via CLI flags.
    """

    log_level: str = "INFO"
    log_format: Literal["plain", "json"] = "plain"

    # Reject registrations once wiring is done and dispatch has started.
    freeze_registry: bool = False

    model_config = SettingsConfigDict(
        env_prefix="RAZOR_WEBHOOK_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()

"""Runtime configuration, read from ``STOCKROOM_*`` environment variables or ``.env``."""

from __future__ import annotations

from datetime import timedelta
from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="STOCKROOM_", env_file=".env", extra="ignore")

    data_dir: Path = Path("data")
    reservation_hold_seconds: int = Field(default=900, gt=0)
    sweep_interval_seconds: float = Field(default=60.0, gt=0)
    checkout_max_attempts: int = Field(default=3, ge=1)
    log_level: str = "INFO"
    log_json: bool = False

    @property
    def hold_window(self) -> timedelta:
        return timedelta(seconds=self.reservation_hold_seconds)


@lru_cache
def get_settings() -> Settings:
    return Settings()

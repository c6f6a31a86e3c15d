"""Application settings loaded from the environment."""

from __future__ import annotations

from datetime import time
from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="UNISPACE_",
        env_file=".env",
        extra="ignore",
    )

    database_url: str = "sqlite:///./unispace.db"
    environment: Literal["development", "production", "test"] = "development"
    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = Field(default=8000, ge=1, le=65535)

    opening_time: time = time(8, 0)
    closing_time: time = time(22, 0)
    slot_minutes: int = Field(default=30, gt=0)

    # bcrypt cost factor; tests drop this to the minimum of 4.
    password_rounds: int = Field(default=12, ge=4, le=31)

    cors_origins: list[str] = ["*"]

    seed_on_startup: bool = False
    admin_email: str = "admin@unispace.edu"
    admin_password: SecretStr = SecretStr("admin123")

    @model_validator(mode="after")
    def _opening_before_closing(self) -> Settings:
        if self.closing_time <= self.opening_time:
            raise ValueError("closing_time must be after opening_time")
        return self

    @property
    def expose_error_detail(self) -> bool:
        """Whether 500 responses may carry the underlying exception text."""
        return self.environment != "production"


@lru_cache
def get_settings() -> Settings:
    return Settings()

"""
Configuration and settings for the fortune frontend.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-backed settings for the frontend service."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8080)
    log_level: str = Field(default="INFO")

    backend_dns: str = Field(default="localhost")
    backend_port: int = Field(default=9000)
    backend_timeout_seconds: float = Field(default=5.0, gt=0)

    static_dir: str = Field(default="static")

    @property
    def backend_url(self) -> str:
        return f"http://{self.backend_dns}:{self.backend_port}"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()

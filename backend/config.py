"""
Configuration and settings for the fortune backend.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-backed settings for the backend service."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    host: str = Field(default="0.0.0.0")
    port: int = Field(default=9000)
    log_level: str = Field(default="INFO")

    # Cache (Redis). Leaving REDIS_DNS unset disables the cache entirely.
    redis_dns: Optional[str] = Field(default=None)
    redis_port: int = Field(default=6379)
    redis_hash_key: str = Field(default="fortunes")

    cache_connect_attempts: int = Field(default=5, ge=1)
    cache_retry_delay_seconds: float = Field(default=2.0, ge=0)
    cache_timeout_seconds: float = Field(default=2.0, gt=0)

    @property
    def redis_url(self) -> Optional[str]:
        if not self.redis_dns:
            return None
        return f"redis://{self.redis_dns}:{self.redis_port}"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()

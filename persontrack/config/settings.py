"""
Pydantic-based configuration settings for the PersonTrack client.

Author: Yobie Benjamin
Date: 2026-10-19
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, HttpUrl, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from persontrack.client.models import Endpoints


class ClientSettings(BaseSettings):
    """
    Configuration for a detection session client.

    Configuration can be provided via:
    - Environment variables with PERSONTRACK_ prefix
    - .env file in current directory
    - Direct instantiation with kwargs

    Example:
        ```python
        settings = ClientSettings(base_url="http://detector.local:8000")
        client = SessionClient("lobby-cam", settings=settings)
        ```
    """

    model_config = SettingsConfigDict(
        env_prefix="PERSONTRACK_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Service location
    base_url: HttpUrl = HttpUrl("http://localhost:8000")
    start_session_path: str = "/start_session/"
    send_person_path: str = "/person_detection/"
    stop_session_path: str = "/stop_session/"

    # Transport
    request_timeout_seconds: float = Field(default=10.0, gt=0)
    max_workers: int = Field(default=4, ge=1, le=64)
    max_consecutive_failures: int = Field(default=5, ge=1)
    proxy_url: str | None = None

    # Reconciliation policy: lost replies are tolerated unless this is set
    escalate_transport_loss: bool = False

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_file: Path | None = None
    log_rotation: str = "10 MB"
    log_retention: str = "7 days"

    @field_validator("start_session_path", "send_person_path", "stop_session_path")
    @classmethod
    def validate_path(cls, v: str) -> str:
        """Endpoint paths are joined onto the base URL and must be absolute."""
        if not v.startswith("/"):
            raise ValueError(f"Endpoint path must start with '/': {v}")
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v

    def endpoints(self) -> Endpoints:
        """Return the immutable endpoint table for this configuration."""
        return Endpoints(
            base_url=self.base_url,
            start_session=self.start_session_path,
            send_person=self.send_person_path,
            stop_session=self.stop_session_path,
        )

    def to_dict(self) -> dict:
        """Convert settings to dictionary."""
        return self.model_dump()


@lru_cache
def get_settings(env_file: str | None = None) -> ClientSettings:
    """
    Get cached settings instance.

    To reload settings, clear the cache with `get_settings.cache_clear()`.

    Args:
        env_file: Optional path to .env file

    Returns:
        Settings instance
    """
    if env_file:
        return ClientSettings(_env_file=env_file)

    return ClientSettings()

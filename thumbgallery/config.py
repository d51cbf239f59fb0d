# thumbgallery/config.py
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import (
    DEFAULT_WATCH_POLL_INTERVAL_SECONDS,
    DEFAULT_WATCH_QUEUE_SIZE,
    DEFAULT_WATCH_SETTLE_SECONDS,
)
from .enums import LogLevel
from .exceptions import ConfigurationError


def _is_same_or_nested(first: Path, second: Path) -> bool:
    """True if the two directories are identical or one contains the other."""
    first = first.expanduser().resolve()
    second = second.expanduser().resolve()
    return first == second or first in second.parents or second in first.parents


class Settings(BaseSettings):
    environment: str = "development"

    # ============= PATH CONFIGURATION =============
    # All three roots are created on startup if missing

    image_folder: Path = Field(..., description="Root of the source image tree")
    thumbnail_folder: Path = Field(
        ..., description="Root of the thumbnail cache tree (mirrors image_folder)"
    )
    static_folder: Path = Field(..., description="Root of other static assets")

    # Thumbnail generation
    thumbnail_size: int = Field(
        default=150,
        ge=16,
        le=2048,
        description="Edge of the square box thumbnails are fitted into",
    )
    thumbnail_quality: int = Field(
        default=80, ge=1, le=100, description="WebP encoder quality"
    )

    # Watch session
    watch_queue_size: int = Field(
        default=DEFAULT_WATCH_QUEUE_SIZE,
        ge=1,
        description="Capacity of the event queue; producers block when full",
    )
    watch_poll_interval: float = Field(
        default=DEFAULT_WATCH_POLL_INTERVAL_SECONDS,
        gt=0,
        le=60,
        description="Seconds between stop-signal checks in the watch loop",
    )
    watch_settle_seconds: float = Field(
        default=DEFAULT_WATCH_SETTLE_SECONDS,
        ge=0,
        le=30,
        description="A created file must keep its size this long before processing",
    )
    watch_before_reconcile: bool = Field(
        default=True,
        description=(
            "Subscribe to filesystem events before the startup pass so nothing "
            "created during it is missed (may transcode a file twice)"
        ),
    )

    # API
    api_host: str = Field(default="0.0.0.0", description="API host to bind to")
    api_port: int = Field(
        default=3000, ge=1, le=65535, description="API port to bind to"
    )

    # Logging
    log_level: LogLevel = Field(
        default=LogLevel.INFO,
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    log_file: Optional[str] = Field(
        default=None, description="Log file path (optional)"
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v) -> LogLevel:
        """Validate log level is one of the allowed values"""
        if isinstance(v, LogLevel):
            return v
        allowed_levels = LogLevel.__members__.keys()
        v_upper = str(v).upper()
        if v_upper not in allowed_levels:
            raise ValueError(
                f"Invalid log level '{v}'. Must be one of: {', '.join(allowed_levels)}"
            )
        return LogLevel[v_upper]

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment is one of the allowed values"""
        allowed_envs = ["development", "staging", "production"]
        v_lower = v.lower()
        if v_lower not in allowed_envs:
            raise ValueError(
                f"Invalid environment '{v}'. Must be one of: {', '.join(allowed_envs)}"
            )
        return v_lower

    @model_validator(mode="after")
    def validate_separate_trees(self) -> "Settings":
        """The cache tree must not live inside the watched image tree or vice versa"""
        if _is_same_or_nested(self.image_folder, self.thumbnail_folder):
            raise ValueError(
                "image_folder and thumbnail_folder must be separate, non-nested "
                f"directories (got {self.image_folder} and {self.thumbnail_folder})"
            )
        return self

    def ensure_directories(self) -> None:
        """
        Create all required directories if they don't exist

        Raises:
            ConfigurationError: A folder could not be created
        """
        for directory in (self.static_folder, self.image_folder, self.thumbnail_folder):
            try:
                directory.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise ConfigurationError(f"Cannot create folder {directory}: {e}") from e

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Process-wide settings, loaded once from the environment."""
    return Settings()  # type: ignore[call-arg]

"""
Tic-Tac-Fade - Application Settings

Loads configuration from environment variables (and an optional ``.env``
file) using Pydantic Settings, and configures standard-library logging.
"""

import logging
from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings

from tictacfade.engine.base import BoardShape, MatchConfig

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET"}


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Coordinator server
    host: str = "0.0.0.0"
    port: int = 5000
    cors_allowed_origins: list[str] = ["*"]

    # Client
    server_url: str = "http://localhost:5000"
    request_timeout: float = 10.0

    # Application
    debug: bool = False
    log_level: str = "INFO"

    # Rules
    compact_capacity: int = 5
    volumetric_capacity: int = 18
    room_code_length: int = 6

    # Presentation
    eviction_blink_seconds: float = 1.5
    eviction_fade_seconds: float = 1.0
    fade_tick_seconds: float = 0.05

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LEVELS:
            raise ValueError(f"Unknown log level {value!r}.")
        return level

    @field_validator("room_code_length")
    @classmethod
    def check_room_code_length(cls, value: int) -> int:
        if not 4 <= value <= 12:
            raise ValueError(f"Room code length must be 4-12, got {value}.")
        return value

    def match_config(self, shape: BoardShape = BoardShape.COMPACT) -> MatchConfig:
        """Build the match rules for a board shape from these settings."""
        capacity = (
            self.compact_capacity if shape is BoardShape.COMPACT else self.volumetric_capacity
        )
        return MatchConfig.for_shape(shape, capacity)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached singleton settings instance."""
    return Settings()


def configure_logging(settings: Settings | None = None) -> None:
    """Configure the root logger from settings (DEBUG overrides LOG_LEVEL)."""
    settings = settings or get_settings()
    level = logging.DEBUG if settings.debug else settings.log_level
    logging.basicConfig(level=level, format=LOG_FORMAT, force=True)

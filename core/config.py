"""Configuration for the Crazy Eights server and CLI."""

from __future__ import annotations

import logging
import os
import sys

from pydantic import BaseModel, Field

DEFAULT_CORS_ORIGINS = [
    "http://localhost:5173",
    "http://localhost:3000",
]


class Settings(BaseModel):
    """Server settings."""

    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"
    # How long the computer "thinks" before each move
    think_delay_ms: int = Field(1500, ge=0)
    strategy: str = "first-match"
    cors_origins: list[str] = Field(default_factory=lambda: list(DEFAULT_CORS_ORIGINS))

    @property
    def think_delay(self) -> float:
        """Think delay in seconds."""
        return self.think_delay_ms / 1000


def load_settings() -> Settings:
    """Build settings from ``EIGHTS_*`` environment variables.

    ``FRONTEND_URL``, when set, is appended to the allowed CORS origins.
    """
    data: dict = {}
    env_map = {
        "EIGHTS_HOST": "host",
        "EIGHTS_PORT": "port",
        "EIGHTS_LOG_LEVEL": "log_level",
        "EIGHTS_THINK_DELAY_MS": "think_delay_ms",
        "EIGHTS_STRATEGY": "strategy",
    }
    for env_name, key in env_map.items():
        value = os.environ.get(env_name)
        if value:
            data[key] = value

    settings = Settings(**data)

    prod_url = os.environ.get("FRONTEND_URL")
    if prod_url and prod_url not in settings.cors_origins:
        settings.cors_origins.append(prod_url)

    return settings


def setup_logging(level: str = "INFO") -> None:
    """Configure logging for the application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )

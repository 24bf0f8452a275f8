"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from portion_tracker.domain.portions import NUTRIENTS

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    backend_base_url: str = "http://localhost:3000"
    request_timeout_seconds: float = 10
    timezone: str = "UTC"
    nutrients: str | None = None
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_nutrients(raw: str | None) -> tuple[str, ...]:
    """Parse the tracked nutrient list from env, keeping the given order."""
    if raw is None or not raw.strip():
        return NUTRIENTS
    nutrients: list[str] = []
    for chunk in raw.split(","):
        value = chunk.strip().lower()
        if value and value not in nutrients:
            nutrients.append(value)
    return tuple(nutrients) or NUTRIENTS

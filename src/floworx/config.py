from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_json: bool = True
    service_name: str = "floworx-synth"

    # ------------------------------------------------------------------
    # Generated workflow defaults
    # ------------------------------------------------------------------
    poll_cron_expression: str = "=0 */2 * * * *"  # trigger polls the inbox every 2 minutes

    # Extra lookup entries merged over the built-in tables, e.g.
    # FLOWORX_INDUSTRY_DESCRIPTIONS='{"roofing": "roofing service business"}'
    industry_descriptions: dict[str, str] = {}
    response_time_phrases: dict[str, str] = {}
    default_services: dict[str, str] = {}

    # ------------------------------------------------------------------
    # HTTP surface
    # ------------------------------------------------------------------
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]

    class Config:
        env_file = ".env"
        env_prefix = "FLOWORX_"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

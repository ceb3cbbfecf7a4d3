import logging
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Application settings loaded from environment variables or .env file."""

    # Supabase Configuration
    supabase_url: Optional[str] = Field(
        None, description="URL for the Supabase project."
    )
    supabase_key: Optional[str] = Field(
        None, description="Anon key for the Supabase project."
    )

    # Table names on the hosted backend
    teams_table: str = Field("teams", description="Mutable team rows.")
    feed_table: str = Field(
        "classificacao_nba", description="External standings feed snapshot."
    )
    players_table: str = Field(
        "nba_jogadores_stats", description="Per-player season averages."
    )
    injuries_table: str = Field(
        "nba_injured_players", description="Injury / availability report."
    )
    realtime_channel: str = Field(
        "nba-realtime-global", description="Realtime channel for change events."
    )

    # Fetch behaviour
    fetch_retry_attempts: int = Field(
        3,
        ge=1,
        le=10,
        description="Total attempts for a fetch that fails at the network level.",
    )

    # Logging Configuration
    log_level: str = Field(
        "INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)."
    )

    # Pydantic Settings Configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )


def load_settings() -> AppSettings:
    """Loads and validates application settings."""
    try:
        settings = AppSettings()
        log_level_upper = settings.log_level.upper()
        # Validate log_level even if loaded from .env
        if log_level_upper not in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
            logging.warning(
                f"Invalid LOG_LEVEL '{settings.log_level}' found in .env or default. Using INFO."
            )
            settings.log_level = "INFO"
        else:
            settings.log_level = log_level_upper
        return settings
    except Exception as e:
        logging.exception(f"Error loading application settings: {e}")
        raise SystemExit("Failed to load application settings. Exiting.")


settings: AppSettings = load_settings()

"""
Service-specific configuration for the ingestion phase.

This config controls:
- How many rows one run generates and writes
- How far in the past the generated timestamps start
- Whether the phase runs at all

    INGESTION__MAX_ROWS=100000
    INGESTION__SECONDS_IN_PAST=0
    INGESTION__ENABLED=true
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class IngestionSettings(BaseSettings):
    """
    Ingestion settings.

    Values come from environment variables prefixed with `INGESTION__`.
    """

    max_rows: int = Field(default=100_000, ge=0, description="Total page views to generate and write.")
    seconds_in_past: float = Field(
        default=0.0,
        ge=0.0,
        description="Offset of the run's first timestamp before now, in seconds.",
    )
    enabled: bool = Field(default=True, description="Run the ingestion phase.")

    model_config = SettingsConfigDict(env_prefix="INGESTION__", case_sensitive=False, extra="ignore")


@lru_cache()
def get_ingestion_settings() -> IngestionSettings:
    """
    Cached accessor for IngestionSettings.

    Returns:
        IngestionSettings: validated ingestion configuration.
    """
    return IngestionSettings()

"""
Service-specific configuration for the page-view generator.

This module ONLY handles synthetic event generation settings
(site, chunk size, correlation probabilities, auxiliary field odds).

It reads from the ROOT .env using namespaced keys:

    GENERATOR__SITE=showdown
    GENERATOR__CHUNK_SIZE=100
    GENERATOR__SAME_USER_PROBABILITY=0.5
    GENERATOR__SAME_SESSION_PROBABILITY=0.5
    GENERATOR__SAME_PAGE_PROBABILITY=0.5
    GENERATOR__SEED=42
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class GeneratorSettings(BaseSettings):
    """
    Settings controlling synthetic page-view generation.

    Values come from environment variables prefixed with `GENERATOR__`.
    """

    site: str = Field(default="showdown")
    chunk_size: int = Field(default=100, ge=1, description="Events per chunk handed to the writer.")

    same_user_probability: float = Field(default=0.5, ge=0.0, le=1.0)
    same_session_probability: float = Field(default=0.5, ge=0.0, le=1.0)
    same_page_probability: float = Field(default=0.5, ge=0.0, le=1.0)

    referrer_probability: float = Field(default=0.2, ge=0.0, le=1.0)
    google_referrer_share: float = Field(default=0.4, ge=0.0, le=1.0)
    utm_source_probability: float = Field(default=0.1, ge=0.0, le=1.0)
    utm_campaign_probability: float = Field(default=0.1, ge=0.0, le=1.0)
    desktop_share: float = Field(default=0.5, ge=0.0, le=1.0)

    max_time_on_page_sec: int = Field(default=60, ge=1)

    seed: Optional[int] = Field(
        default=None,
        description="Seed for identifiers and auxiliary fields; unset means non-deterministic.",
    )

    model_config = SettingsConfigDict(env_prefix="GENERATOR__", case_sensitive=False, extra="ignore")


@lru_cache()
def get_generator_settings() -> GeneratorSettings:
    """
    Cached accessor for GeneratorSettings.

    Returns:
        GeneratorSettings: validated generator configuration.
    """
    return GeneratorSettings()

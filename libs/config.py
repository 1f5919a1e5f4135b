"""
Global configuration system for all showdown services.

Provides globally shared configuration:
- AWS account settings (profile, region)
- Firehose delivery stream feeding the Athena table
- Timestream database/table
- Athena database, result location and workgroup
- Generic service-level runtime settings

Service-specific settings (generator, ingestion, benchmark) live in
their own modules and must NOT be added here.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

PROJECT_ROOT: Path = Path(__file__).resolve().parents[1]
DEFAULT_ENV_PATH: Path = PROJECT_ROOT / ".env"


class AWSConfig(BaseSettings):
    """AWS session settings shared by every client."""

    profile: str = Field(
        default="systanics-prod-exported",
        description="Named profile from the shared credentials file. Empty uses the default chain.",
    )
    region: str = Field(default="eu-west-1")

    model_config = SettingsConfigDict(env_prefix="AWS__", extra="ignore")


class FirehoseConfig(BaseSettings):
    """Append-only log sink (Firehose -> S3 -> Glue table)."""

    delivery_stream: str = Field(default="showdown-athena-analytic-page-views-firehose")

    model_config = SettingsConfigDict(env_prefix="FIREHOSE__", extra="ignore")


class TimestreamConfig(BaseSettings):
    """Time-series sink and query target."""

    database: str = Field(default="showdown-timestream-ts-db")
    table: str = Field(default="showdown-timestream-ts-table")

    model_config = SettingsConfigDict(env_prefix="TIMESTREAM__", extra="ignore")


class AthenaConfig(BaseSettings):
    """Athena query engine settings."""

    database: str = Field(default="showdown-athena-db")
    table: str = Field(default="page_views")
    output_location: str = Field(default="s3://showdown-athena-db/athena-results")
    workgroup: str = Field(default="primary")

    model_config = SettingsConfigDict(env_prefix="ATHENA__", extra="ignore")


class ServiceConfig(BaseSettings):
    """Generic service-level config."""

    log_level: str = Field(default="INFO")
    environment: str = Field(default="local")

    model_config = SettingsConfigDict(env_prefix="SERVICE__", extra="ignore")


class AppConfig(BaseSettings):
    """Root global configuration object."""

    aws: AWSConfig = Field(default_factory=AWSConfig)
    firehose: FirehoseConfig = Field(default_factory=FirehoseConfig)
    timestream: TimestreamConfig = Field(default_factory=TimestreamConfig)
    athena: AthenaConfig = Field(default_factory=AthenaConfig)
    service: ServiceConfig = Field(default_factory=ServiceConfig)

    model_config = SettingsConfigDict(
        env_nested_delimiter="__",
        extra="ignore",
    )

    @classmethod
    @lru_cache(maxsize=1)
    def load(cls) -> "AppConfig":
        try:
            env_file = str(DEFAULT_ENV_PATH) if DEFAULT_ENV_PATH.exists() else None
            return cls(_env_file=env_file)
        except ValidationError as exc:
            raise RuntimeError("Invalid configuration values.") from exc

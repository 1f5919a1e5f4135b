"""
Service-specific configuration for the query benchmark.

    BENCHMARK__RUNS=10
    BENCHMARK__HOURS_BEHIND=3
    BENCHMARK__POLL_INTERVAL_SEC=0.2
    BENCHMARK__SITE=showdown
    BENCHMARK__ENABLED=true
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BenchmarkSettings(BaseSettings):
    """
    Benchmark harness settings.

    Values come from environment variables prefixed with `BENCHMARK__`.
    """

    runs: int = Field(default=10, ge=1, description="Timed runs per engine and test case.")
    hours_behind: int = Field(default=3, ge=1, description="Width of the queried time window, in hours.")
    site: str = Field(default="showdown")
    row_limit: int = Field(default=1000, ge=1, description="LIMIT used by the top-N test cases.")
    poll_interval_sec: float = Field(
        default=0.2,
        gt=0.0,
        description="Delay between Athena query-state polls.",
    )
    enabled: bool = Field(default=True, description="Run the benchmark phase.")

    model_config = SettingsConfigDict(env_prefix="BENCHMARK__", case_sensitive=False, extra="ignore")


@lru_cache()
def get_benchmark_settings() -> BenchmarkSettings:
    """
    Cached accessor for BenchmarkSettings.
    """
    return BenchmarkSettings()

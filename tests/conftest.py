# tests/conftest.py

###### IMPORT TOOLS ######
# global imports
import asyncio
import logging
from datetime import datetime, timezone
from typing import List, Sequence

import pytest

# local imports
from apps.generator.src.core.config import GeneratorSettings
from libs import PageView, TimeSeriesRecord


###### FAKE SINKS ######
class FakeLogSink:
    """Records every batch; reports a fixed failed count per call."""

    def __init__(self, failed: int = 0, error: Exception | None = None):
        self.failed = failed
        self.error = error
        self.batches: List[List[PageView]] = []

    async def put_batch(self, page_views: Sequence[PageView]) -> int:
        await asyncio.sleep(0)
        self.batches.append(list(page_views))
        if self.error is not None:
            raise self.error
        return self.failed


class FakeTimeSeriesSink:
    """Records every batch; ingests everything unless a shortfall is set."""

    def __init__(self, shortfall: int = 0, error: Exception | None = None):
        self.shortfall = shortfall
        self.error = error
        self.batches: List[List[TimeSeriesRecord]] = []

    async def write_records(self, records: Sequence[TimeSeriesRecord]) -> int:
        await asyncio.sleep(0)
        self.batches.append(list(records))
        if self.error is not None:
            raise self.error
        return len(records) - self.shortfall


###### FIXTURES ######
@pytest.fixture
def generator_settings() -> GeneratorSettings:
    """Seeded settings so generated runs are reproducible."""
    return GeneratorSettings(seed=7)


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2023, 3, 1, 10, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def page_view() -> PageView:
    return PageView(
        site="showdown",
        user_id="user-1",
        session_id="session-1",
        page_id="page-1",
        page_url="/home.html",
        page_opened_at="2023-03-01T10:00:00.000Z",
        page_opened_at_date="2023-03-01",
        time_on_page=17,
        country_iso="BE",
        device_type="desktop",
        is_bot=False,
        referrer="google.com",
    )


@pytest.fixture
def log_sink_factory():
    return FakeLogSink


@pytest.fixture
def timeseries_sink_factory():
    return FakeTimeSeriesSink


@pytest.fixture
def quiet_logger() -> logging.Logger:
    return logging.getLogger("tests.showdown")

# tests/test_ingestion/test_ingestion_service.py


###### IMPORT TOOLS ######
# global imports
import pytest

# local imports
from apps.generator.src.data.generator import PageViewGenerator
from apps.ingestion.src.service.dual_writer import DualSinkWriter
from apps.ingestion.src.service.ingestion_service import IngestionService


class FailingOnSecondCall:
    def __init__(self):
        self.calls = 0

    async def write_records(self, records):
        self.calls += 1
        if self.calls == 2:
            raise RuntimeError("timestream unavailable")
        return len(records)


###### TESTS ######
@pytest.mark.asyncio
async def test_250_rows_in_three_chunks(generator_settings, log_sink_factory, timeseries_sink_factory, quiet_logger):
    log_sink, ts_sink = log_sink_factory(), timeseries_sink_factory()
    service = IngestionService(
        PageViewGenerator(generator_settings),
        DualSinkWriter(log_sink, ts_sink, logger=quiet_logger),
        quiet_logger,
    )
    seen = []

    report = await service.run(max_rows=250, on_progress=seen.append)

    assert seen == [100, 200, 250]
    assert report.progress == [100, 200, 250]
    assert report.rows_ingested == 250
    assert report.chunks_written == 3
    assert [len(b) for b in log_sink.batches] == [100, 100, 50]
    assert [len(b) for b in ts_sink.batches] == [100, 100, 50]


@pytest.mark.asyncio
async def test_chunks_arrive_in_generation_order(generator_settings, log_sink_factory, timeseries_sink_factory, quiet_logger):
    log_sink, ts_sink = log_sink_factory(), timeseries_sink_factory()
    service = IngestionService(
        PageViewGenerator(generator_settings),
        DualSinkWriter(log_sink, ts_sink, logger=quiet_logger),
        quiet_logger,
    )

    await service.run(max_rows=230)

    times = [int(r.time) for batch in ts_sink.batches for r in batch]
    assert times == sorted(times)
    assert len(set(times)) == 230


@pytest.mark.asyncio
async def test_partial_failures_are_totalled(generator_settings, log_sink_factory, timeseries_sink_factory, quiet_logger):
    service = IngestionService(
        PageViewGenerator(generator_settings),
        DualSinkWriter(log_sink_factory(failed=2), timeseries_sink_factory(shortfall=1), logger=quiet_logger),
        quiet_logger,
    )

    report = await service.run(max_rows=300)

    assert report.rows_ingested == 300
    assert report.log_failures == 6
    assert report.timeseries_shortfall == 3


@pytest.mark.asyncio
async def test_sink_error_aborts_the_run(generator_settings, log_sink_factory, quiet_logger):
    log_sink = log_sink_factory()
    seen = []
    service = IngestionService(
        PageViewGenerator(generator_settings),
        DualSinkWriter(log_sink, FailingOnSecondCall(), logger=quiet_logger),
        quiet_logger,
    )

    with pytest.raises(RuntimeError, match="timestream unavailable"):
        await service.run(max_rows=500, on_progress=seen.append)

    assert seen == [100]
    assert len(log_sink.batches) == 2


@pytest.mark.asyncio
async def test_zero_rows_writes_nothing(generator_settings, log_sink_factory, timeseries_sink_factory, quiet_logger):
    log_sink = log_sink_factory()
    service = IngestionService(
        PageViewGenerator(generator_settings),
        DualSinkWriter(log_sink, timeseries_sink_factory(), logger=quiet_logger),
        quiet_logger,
    )

    report = await service.run(max_rows=0)

    assert report.rows_ingested == 0 and report.progress == []
    assert log_sink.batches == []

"""
Parallel write of one chunk to the log sink and the time-series sink.

There is no transaction across the two sinks and no retry: a chunk that a
sink only partly acknowledges is reported and the pipeline moves on.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Optional, Sequence

from apps.ingestion.src.data.projector import to_timeseries_record
from apps.ingestion.src.data.sinks import LogSink, TimeSeriesSink
from libs import PageView
from libs.observability import get_ingestion_instruments, get_logger, get_tracer


@dataclass(frozen=True)
class WriteOutcome:
    """Acknowledgement counts for one chunk."""

    records: int
    log_failed: int
    timeseries_ingested: int

    @property
    def timeseries_missing(self) -> int:
        return self.records - self.timeseries_ingested

    @property
    def diverged(self) -> bool:
        return self.log_failed != 0 or self.timeseries_missing != 0


class DualSinkWriter:
    """
    Writes each chunk to both sinks concurrently and reconciles the acks.

    `write` returns only after both sink calls have settled. If either call
    raised, the first error is re-raised after both are done.
    """

    def __init__(
        self,
        log_sink: LogSink,
        timeseries_sink: TimeSeriesSink,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._log_sink = log_sink
        self._timeseries_sink = timeseries_sink
        self._log = logger or get_logger("DualSinkWriter")
        self._tracer = get_tracer("showdown.ingestion.writer")
        self._ingested, self._discrepancies, self._latency = get_ingestion_instruments()

    async def write(self, chunk: Sequence[PageView]) -> WriteOutcome:
        if not chunk:
            return WriteOutcome(records=0, log_failed=0, timeseries_ingested=0)

        records = [to_timeseries_record(page_view) for page_view in chunk]

        start = time.perf_counter()
        with self._tracer.start_as_current_span("write_chunk") as span:
            span.set_attribute("chunk.size", len(chunk))
            try:
                log_result, ts_result = await asyncio.gather(
                    self._log_sink.put_batch(chunk),
                    self._timeseries_sink.write_records(records),
                    return_exceptions=True,
                )
            finally:
                self._latency.record((time.perf_counter() - start) * 1000)

            errors = [r for r in (log_result, ts_result) if isinstance(r, BaseException)]
            if errors:
                if len(errors) > 1:
                    self._log.error(
                        "Both sinks failed; raising the log sink error",
                        extra={"timeseries_error": repr(errors[1])},
                    )
                raise errors[0]

        outcome = WriteOutcome(
            records=len(chunk),
            log_failed=int(log_result),
            timeseries_ingested=int(ts_result),
        )
        self._ingested.add(outcome.records)
        self._report(outcome)
        return outcome

    def _report(self, outcome: WriteOutcome) -> None:
        if outcome.log_failed:
            self._discrepancies.add(outcome.log_failed, {"sink": "firehose"})
            self._log.warning(
                "Firehose failed   : %d",
                outcome.log_failed,
                extra={"sink": "firehose", "failed": outcome.log_failed, "records": outcome.records},
            )
        if outcome.timeseries_missing:
            self._discrepancies.add(abs(outcome.timeseries_missing), {"sink": "timestream"})
            self._log.warning(
                "Timestream failed : %d",
                outcome.timeseries_missing,
                extra={
                    "sink": "timestream",
                    "failed": outcome.timeseries_missing,
                    "records": outcome.records,
                },
            )

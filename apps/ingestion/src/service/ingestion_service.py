"""
Ingestion loop: generator -> dual-sink writer, one chunk at a time.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from apps.generator.src.data.generator import PageViewGenerator
from apps.ingestion.src.service.dual_writer import DualSinkWriter


@dataclass
class IngestionReport:
    """Totals of one ingestion run."""

    rows_ingested: int = 0
    chunks_written: int = 0
    progress: List[int] = field(default_factory=list)
    log_failures: int = 0
    timeseries_shortfall: int = 0


class IngestionService:
    """
    Drains a generation run into the dual-sink writer.

    Only one chunk is in memory at a time: the next chunk is not generated
    until the previous write has completed. An exception from the writer
    ends the run; there is no checkpoint, so a rerun starts over.
    """

    def __init__(
        self,
        generator: PageViewGenerator,
        writer: DualSinkWriter,
        logger: logging.Logger,
    ) -> None:
        """
        Args:
            generator: Page-view generator (one run per `run` call).
            writer: Dual-sink writer.
            logger: Logger instance.
        """
        self._generator = generator
        self._writer = writer
        self._log = logger

    async def run(
        self,
        max_rows: int,
        seconds_in_past: float = 0,
        on_progress: Optional[Callable[[int], None]] = None,
    ) -> IngestionReport:
        """
        Generate and write `max_rows` page views.

        Args:
            max_rows: Total rows to generate.
            seconds_in_past: Offset of the first timestamp before now.
            on_progress: Called with the cumulative row count after each chunk.

        Returns:
            IngestionReport with counts and the cumulative progress sequence.
        """
        self._log.info("Loading data", extra={"max_rows": max_rows, "seconds_in_past": seconds_in_past})
        report = IngestionReport()

        for chunk in self._generator.chunks(max_rows, seconds_in_past):
            outcome = await self._writer.write(chunk)

            report.rows_ingested += len(chunk)
            report.chunks_written += 1
            report.log_failures += outcome.log_failed
            report.timeseries_shortfall += outcome.timeseries_missing
            report.progress.append(report.rows_ingested)

            self._log.info(
                "Ingested %d rows",
                report.rows_ingested,
                extra={"ingested": report.rows_ingested, "chunk": report.chunks_written},
            )
            if on_progress is not None:
                on_progress(report.rows_ingested)

        self._log.info(
            "Ingestion finished",
            extra={
                "ingested": report.rows_ingested,
                "chunks": report.chunks_written,
                "log_failures": report.log_failures,
                "timeseries_shortfall": report.timeseries_shortfall,
            },
        )
        return report

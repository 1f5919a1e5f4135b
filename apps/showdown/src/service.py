"""
Showdown service: load both sinks, then benchmark both query engines.
"""

from __future__ import annotations

from typing import List, Optional

from apps.benchmark.src.core.bootstrap import bootstrap as build_harness
from apps.benchmark.src.core.config import BenchmarkSettings, get_benchmark_settings
from apps.benchmark.src.domain.test_cases import build_test_cases
from apps.benchmark.src.service.harness import BenchmarkHarness, TestCaseResult
from apps.ingestion.src.core.bootstrap import bootstrap as build_ingestion
from apps.ingestion.src.core.config import IngestionSettings, get_ingestion_settings
from apps.ingestion.src.service.ingestion_service import IngestionReport, IngestionService
from libs.aws import build_session
from libs.base import BaseService
from libs.config import AppConfig
from libs.observability import shutdown_observability


class ShowdownService(BaseService):
    """
    Runs the ingestion phase and then the benchmark phase.

    Either phase can be switched off (`INGESTION__ENABLED`,
    `BENCHMARK__ENABLED`), e.g. to rerun only the queries against data that
    is already loaded.
    """

    def __init__(
        self,
        config: Optional[AppConfig] = None,
        ingestion_cfg: Optional[IngestionSettings] = None,
        benchmark_cfg: Optional[BenchmarkSettings] = None,
        ingestion: Optional[IngestionService] = None,
        harness: Optional[BenchmarkHarness] = None,
        export_telemetry: bool = True,
    ) -> None:
        super().__init__("showdown", config=config, export_telemetry=export_telemetry)
        self._ingestion_cfg = ingestion_cfg or get_ingestion_settings()
        self._benchmark_cfg = benchmark_cfg or get_benchmark_settings()

        if ingestion is None or harness is None:
            session = build_session(self.config.aws)
            ingestion = ingestion or build_ingestion(app_cfg=self.config, session=session)
            harness = harness or build_harness(
                app_cfg=self.config, session=session, settings=self._benchmark_cfg
            )
        self._ingestion = ingestion
        self._harness = harness

        self.ingestion_report: Optional[IngestionReport] = None
        self.benchmark_results: List[TestCaseResult] = []

    async def start(self) -> None:
        if self._ingestion_cfg.enabled:
            self.ingestion_report = await self._ingestion.run(
                max_rows=self._ingestion_cfg.max_rows,
                seconds_in_past=self._ingestion_cfg.seconds_in_past,
            )
        else:
            self.logger.info("Ingestion disabled; querying existing data")

        if self._benchmark_cfg.enabled:
            test_cases = build_test_cases(self.config, self._benchmark_cfg)
            self.benchmark_results = await self._harness.run(test_cases)
        else:
            self.logger.info("Benchmark disabled")

    async def shutdown(self) -> None:
        self.logger.info(
            "Showdown finished",
            extra={
                "rows_ingested": self.ingestion_report.rows_ingested if self.ingestion_report else 0,
                "test_cases": len(self.benchmark_results),
            },
        )
        shutdown_observability()

"""
Query benchmark harness.

For every test case the Athena and Timestream queries run `runs` times.
Each run executes Athena to completion, then Timestream to completion, so
neither engine's latency includes time spent on the other. Test cases run
one after another.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Dict, List, Sequence

from apps.benchmark.src.data.engines import QueryEngine
from apps.benchmark.src.domain.test_cases import BenchmarkTestCase
from apps.benchmark.src.service.metrics import QueryMetrics, calculate_metrics, round_half_up
from apps.benchmark.src.service.report import format_metrics_table
from libs.observability import get_benchmark_instruments, get_tracer


@dataclass(frozen=True)
class TestCaseResult:
    name: str
    metrics: Dict[str, QueryMetrics]  # keyed by engine name, Athena first


class BenchmarkHarness:
    """
    Runs matched query pairs against two engines and summarizes latencies.

    A failing query aborts the whole benchmark: the error propagates and no
    metrics are produced for the test case it interrupted.
    """

    def __init__(
        self,
        athena: QueryEngine,
        timestream: QueryEngine,
        logger: logging.Logger,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        """
        Args:
            athena: Columnar query engine.
            timestream: Time-series query engine.
            logger: Logger instance.
            clock: Monotonic clock in seconds.
        """
        self._athena = athena
        self._timestream = timestream
        self._log = logger
        self._clock = clock
        self._tracer = get_tracer("showdown.benchmark")
        self._latency = get_benchmark_instruments()

    async def _timed(self, engine: QueryEngine, query: str, test_case: str) -> int:
        start = self._clock()
        await engine.execute(query)
        elapsed_ms = round_half_up((self._clock() - start) * 1000)
        self._latency.record(elapsed_ms, {"engine": engine.name, "test_case": test_case})
        return elapsed_ms

    async def run_test_case(self, test_case: BenchmarkTestCase) -> TestCaseResult:
        self._log.info(
            "Running test: %s",
            test_case.name,
            extra={
                "test_case": test_case.name,
                "runs": test_case.runs,
                "athena_query": test_case.athena_query,
                "timestream_query": test_case.timestream_query,
            },
        )

        athena_times: List[int] = []
        timestream_times: List[int] = []
        with self._tracer.start_as_current_span("benchmark_test_case") as span:
            span.set_attribute("test_case", test_case.name)
            for i in range(test_case.runs):
                athena_times.append(await self._timed(self._athena, test_case.athena_query, test_case.name))
                timestream_times.append(
                    await self._timed(self._timestream, test_case.timestream_query, test_case.name)
                )
                self._log.debug("Run %d/%d done", i + 1, test_case.runs)

        result = TestCaseResult(
            name=test_case.name,
            metrics={
                self._athena.name: calculate_metrics(athena_times),
                self._timestream.name: calculate_metrics(timestream_times),
            },
        )
        self._log.info(
            "Results for %s\n%s",
            test_case.name,
            format_metrics_table(result.metrics),
            extra={"test_case": test_case.name},
        )
        return result

    async def run(self, test_cases: Sequence[BenchmarkTestCase]) -> List[TestCaseResult]:
        results: List[TestCaseResult] = []
        for test_case in test_cases:
            results.append(await self.run_test_case(test_case))
        return results

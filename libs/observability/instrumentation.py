"""
Observability bootstrap utilities for logging, tracing, and metrics.

This module provides:
- a unified initialization entrypoint (`init_observability`)
- stable metric instruments for the ingestion and benchmark phases
"""

import logging
from typing import Tuple

from opentelemetry.metrics import Counter, Histogram

from libs.observability.logging import init_logging, shutdown_logging
from libs.observability.metrics import get_meter, init_metrics, shutdown_metrics
from libs.observability.tracing import init_tracing, shutdown_tracing


def init_observability(level: int = logging.INFO, export: bool = True) -> None:
    """
    Initialize logging, tracing, and metrics for the current service.

    This should be called once during service startup. With `export`
    disabled only the stdout JSON logger is installed.

    Args:
        level: Logging verbosity level for the root logger.
        export: Whether to ship logs, spans and metrics over OTLP.
    """
    init_logging(level=level, export=export)
    if export:
        init_tracing()
        init_metrics()


def shutdown_observability() -> None:
    """
    Flush pending spans, metrics and log records, then close the exporters.

    A no-op for pipelines that were never initialised (e.g. `export=False`).
    """
    shutdown_tracing()
    shutdown_metrics()
    shutdown_logging()


def get_ingestion_instruments() -> Tuple[Counter, Counter, Histogram]:
    """
    Create OpenTelemetry instruments for the dual-sink ingestion.

    Returns:
        A tuple containing:
            ingested_counter: Counter for page views handed to both sinks.
            discrepancy_counter: Counter for records a sink did not acknowledge
                (attribute `sink`).
            write_latency_histogram: Histogram for per-chunk dual-write latency (ms).
    """
    meter = get_meter()

    ingested: Counter = meter.create_counter(
        name="page_views_ingested",
        description="Count of page views sent to both sinks",
        unit="1",
    )

    discrepancies: Counter = meter.create_counter(
        name="sink_write_discrepancies",
        description="Count of records not acknowledged by a sink",
        unit="1",
    )

    latency: Histogram = meter.create_histogram(
        name="chunk_write_latency_ms",
        description="Latency of one chunk's parallel write to both sinks",
        unit="ms",
    )

    return ingested, discrepancies, latency


def get_benchmark_instruments() -> Histogram:
    """
    Create the OpenTelemetry instrument for benchmark query latency.

    Returns:
        Histogram of per-run query latency (ms), attributed by `engine` and `test_case`.
    """
    meter = get_meter()

    return meter.create_histogram(
        name="benchmark_query_latency_ms",
        description="Wall-clock latency of one benchmark query run",
        unit="ms",
    )

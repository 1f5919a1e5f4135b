"""
OpenTelemetry tracing initialization and tracer helper.
"""

from typing import Optional

from opentelemetry import trace
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.trace import Tracer

from libs.observability.exporters import SERVICE_NAME_VALUE, build_resource, build_trace_exporter

_provider: Optional[TracerProvider] = None


def init_tracing() -> None:
    """
    Install the global TracerProvider with a batching OTLP span exporter.

    Until this runs, tracers returned by `get_tracer` are no-op proxies, so
    library code can open spans unconditionally.
    """
    global _provider

    provider = TracerProvider(resource=build_resource())
    provider.add_span_processor(BatchSpanProcessor(build_trace_exporter()))
    trace.set_tracer_provider(provider)
    _provider = provider


def shutdown_tracing() -> None:
    """Export any buffered spans and stop the span processors."""
    global _provider

    if _provider is not None:
        _provider.shutdown()
        _provider = None


def get_tracer(name: str | None = None) -> Tracer:
    """
    Get a Tracer instance for the given instrumentation scope.

    Args:
        name: Logical scope name for the tracer. If None, the service name is used.
    """
    return trace.get_tracer(name or SERVICE_NAME_VALUE)

"""
Metrics initialization and meter provider for OpenTelemetry.

This module initializes a process-wide MeterProvider and exposes
a helper to retrieve the default Meter for the current service.
"""

from typing import Optional

from opentelemetry import metrics
from opentelemetry.metrics import Meter
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader

from libs.observability.exporters import SERVICE_NAME_VALUE, build_metric_exporter, build_resource

_provider: Optional[MeterProvider] = None


def init_metrics() -> None:
    """
    Initialize the OTel MeterProvider and register an OTLP metric exporter.

    This function is idempotent; calling it multiple times will reuse the
    same global MeterProvider.
    """
    global _provider

    if _provider is not None:
        return

    reader = PeriodicExportingMetricReader(build_metric_exporter())
    _provider = MeterProvider(resource=build_resource(), metric_readers=[reader])
    metrics.set_meter_provider(_provider)


def shutdown_metrics() -> None:
    """Run a final collection, export it, and stop the metric reader."""
    global _provider

    if _provider is not None:
        _provider.shutdown()
        _provider = None


def get_meter() -> Meter:
    """
    Retrieve the default Meter for the current service.

    Before `init_metrics` runs this is the API's proxy meter, whose
    instruments are no-ops until a provider is installed.
    """
    return metrics.get_meter(SERVICE_NAME_VALUE)

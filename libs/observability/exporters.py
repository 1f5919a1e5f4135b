"""
OTLP exporter and resource factories shared by logging, tracing and metrics.
"""

import os
from typing import Dict, Optional

from opentelemetry.exporter.otlp.proto.grpc._log_exporter import OTLPLogExporter
from opentelemetry.exporter.otlp.proto.grpc.metric_exporter import OTLPMetricExporter
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.semconv.attributes.service_attributes import SERVICE_NAME

SERVICE_NAME_VALUE: str = os.getenv("OTEL_SERVICE_NAME", "showdown-service")
RESOURCE_ATTRIBUTES: str = os.getenv(
    "OTEL_RESOURCE_ATTRIBUTES",
    "deployment.environment=local",
)
DEFAULT_ENDPOINT: str = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT", "http://otel-collector:4317")
DEFAULT_HEADERS: Optional[str] = os.getenv("OTEL_EXPORTER_OTLP_HEADERS")


def parse_key_values(raw: Optional[str]) -> Dict[str, str]:
    """
    Parse a `k1=v1,k2=v2` string as used by the OTEL_* environment variables.

    Entries without `=` are ignored.
    """
    if not raw:
        return {}
    return {
        kv.split("=", 1)[0].strip(): kv.split("=", 1)[1].strip()
        for kv in raw.split(",")
        if "=" in kv
    }


def build_resource() -> Resource:
    """Resource describing this process (service name + configured attributes)."""
    return Resource.create({SERVICE_NAME: SERVICE_NAME_VALUE, **parse_key_values(RESOURCE_ATTRIBUTES)})


def _common_kwargs() -> Dict[str, object]:
    headers = parse_key_values(DEFAULT_HEADERS) or None
    return {
        "endpoint": DEFAULT_ENDPOINT,
        "headers": headers,
        "insecure": not DEFAULT_ENDPOINT.startswith("https://"),
    }


def build_trace_exporter() -> OTLPSpanExporter:
    return OTLPSpanExporter(**_common_kwargs())


def build_metric_exporter() -> OTLPMetricExporter:
    return OTLPMetricExporter(**_common_kwargs())


def build_log_exporter() -> OTLPLogExporter:
    return OTLPLogExporter(**_common_kwargs())

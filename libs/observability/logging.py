"""
Structured JSON logging with OpenTelemetry Log Exporter.

This module configures:
- stdout JSON logs
- OpenTelemetry log pipeline (LoggerProvider + LogExporter)
- Trace/span correlation in every log line
"""

import json
import logging
import sys
from typing import Any, Dict, Optional

from opentelemetry import trace
from opentelemetry.sdk._logs import LoggerProvider, LoggingHandler
from opentelemetry.sdk._logs.export import BatchLogRecordProcessor

from libs.observability.exporters import SERVICE_NAME_VALUE, build_log_exporter, build_resource

# Attributes every LogRecord carries; anything else arrived through `extra=`.
_RESERVED_ATTRS = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", None, None).__dict__.keys()
) | {"message", "asctime", "taskName"}

_logger_provider: Optional[LoggerProvider] = None


class JsonTraceFormatter(logging.Formatter):
    """
    JSON formatter including trace_id and span_id.

    The formatter emits a single-line JSON object with:
        - level
        - logger
        - message
        - time
        - trace_id (hex) if available
        - span_id (hex) if available
        - service
        - the `extra=` fields of the LogRecord that are JSON-serializable.
    """

    def format(self, record: logging.LogRecord) -> str:
        span = trace.get_current_span()
        span_ctx = span.get_span_context() if span else None

        payload: Dict[str, Any] = {
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "time": self.formatTime(record, "%Y-%m-%dT%H:%M:%S%z"),
            "trace_id": (
                f"{span_ctx.trace_id:032x}" if span_ctx and span_ctx.is_valid else None
            ),
            "span_id": (
                f"{span_ctx.span_id:016x}" if span_ctx and span_ctx.is_valid else None
            ),
            "service": SERVICE_NAME_VALUE,
        }

        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key.startswith("_") or key in payload or key in _RESERVED_ATTRS:
                continue
            try:
                json.dumps({key: value})
            except (TypeError, ValueError):
                continue
            payload[key] = value

        return json.dumps(payload, separators=(",", ":"))


def init_logging(level: int = logging.INFO, export: bool = True) -> None:
    """
    Configure the root logger for the current process.

    This sets up:
        - JSON stdout logger
        - OpenTelemetry log pipeline via OTLP (unless `export` is False)
        - Trace correlation via LoggingHandler

    Args:
        level: Minimum log level for the root logger.
        export: Whether to ship log records to the OTLP collector.
    """
    global _logger_provider

    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setFormatter(JsonTraceFormatter())

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(stdout_handler)
    root.setLevel(level)

    # boto's wire-level debug output drowns the progress lines
    for noisy in ("botocore", "boto3", "urllib3"):
        logging.getLogger(noisy).setLevel(max(level, logging.WARNING))

    if not export:
        return

    logger_provider = LoggerProvider(resource=build_resource())
    logger_provider.add_log_record_processor(
        BatchLogRecordProcessor(build_log_exporter())
    )
    root.addHandler(LoggingHandler(level=level, logger_provider=logger_provider))
    _logger_provider = logger_provider


def shutdown_logging() -> None:
    """Flush buffered log records to the collector and close the exporter."""
    global _logger_provider

    if _logger_provider is not None:
        _logger_provider.shutdown()
        _logger_provider = None


def get_logger(name: str | None = None) -> logging.Logger:
    """
    Get a module- or service-level logger.

    This helper is the canonical way for application code to obtain a logger.

    Args:
        name: Optional logger name. If None, the root logger is returned.
    """
    return logging.getLogger(name)

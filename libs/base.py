"""
BaseService: standard base class for all showdown services.

Provides:
- Logger
- Tracer
- Meter
- OTel bootstrap
- Standardized async lifecycle hooks

The ingestion, benchmark and combined showdown entrypoints extend this class.
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Optional

from libs.config import AppConfig
from libs.observability import (
    get_logger,
    get_meter,
    get_tracer,
    init_observability,
)


class BaseService(ABC):
    """
    Abstract base class for all services.

    Subclasses automatically receive:
    - `self.config`: Central AppConfig
    - `self.logger`: structured JSON logger
    - `self.tracer`: OpenTelemetry tracer
    - `self.meter`: OpenTelemetry metrics instance

    Subclasses must implement:
        async def start(self) -> None
        async def shutdown(self) -> None
    """

    def __init__(
        self,
        service_name: str,
        config: Optional[AppConfig] = None,
        export_telemetry: bool = True,
    ) -> None:
        """
        Args:
            service_name: Logical name of the service (e.g. "ingestion").
            config: Preloaded configuration; loaded from the environment when omitted.
            export_telemetry: Ship logs/spans/metrics over OTLP.
        """
        self.config = config or AppConfig.load()

        init_observability(level=self._resolve_log_level(), export=export_telemetry)

        self.logger = get_logger(service_name)
        self.tracer = get_tracer(service_name)
        self.meter = get_meter()

        self.logger.info(
            "Service initialized",
            extra={"service_name": service_name, "environment": self.config.service.environment},
        )

    def _resolve_log_level(self) -> int:
        """Convert config log level string to numeric logging constant."""
        level_str = self.config.service.log_level.upper()
        return getattr(logging, level_str, logging.INFO)

    @abstractmethod
    async def start(self) -> None:
        """Run the service to completion."""
        raise NotImplementedError

    @abstractmethod
    async def shutdown(self) -> None:
        """Release clients and flush pending telemetry."""
        raise NotImplementedError

    async def _run(self) -> None:
        try:
            await self.start()
        finally:
            await self.shutdown()

    def run_sync(self) -> None:
        """
        Run the async lifecycle inside a fresh event loop.

        `shutdown` always runs; a failure in `start` is logged and re-raised
        as RuntimeError chained to the original error.
        """
        try:
            asyncio.run(self._run())
        except Exception as exc:
            self.logger.error("Service crashed", exc_info=True)
            raise RuntimeError("Uncaught service failure") from exc

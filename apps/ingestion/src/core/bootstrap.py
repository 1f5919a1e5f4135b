"""
Bootstrap for the ingestion phase.

Responsibilities:
- Build the Firehose and Timestream-write clients from the shared AWS session
- Construct both sinks, the DualSinkWriter and the PageViewGenerator
- Build the IngestionService instance
"""

from typing import Final, Optional

import boto3

from apps.generator.src.core.config import GeneratorSettings, get_generator_settings
from apps.generator.src.data.generator import PageViewGenerator
from apps.ingestion.src.data.firehose_sink import FirehoseLogSink
from apps.ingestion.src.data.timestream_sink import TimestreamSink
from apps.ingestion.src.service.dual_writer import DualSinkWriter
from apps.ingestion.src.service.ingestion_service import IngestionService
from libs.aws import build_session
from libs.config import AppConfig
from libs.observability import get_logger


def bootstrap(
    app_cfg: Optional[AppConfig] = None,
    session: Optional[boto3.session.Session] = None,
    generator_cfg: Optional[GeneratorSettings] = None,
) -> IngestionService:
    """
    Build a fully wired IngestionService instance.

    Returns:
        IngestionService: Ready-to-run ingestion loop.
    """
    log = get_logger("ingestion-bootstrap")

    cfg: Final[AppConfig] = app_cfg or AppConfig.load()
    gen_cfg: Final[GeneratorSettings] = generator_cfg or get_generator_settings()
    aws = session or build_session(cfg.aws)

    log_sink = FirehoseLogSink(
        client=aws.client("firehose"),
        delivery_stream=cfg.firehose.delivery_stream,
        logger=get_logger("FirehoseLogSink"),
    )
    timeseries_sink = TimestreamSink(
        client=aws.client("timestream-write"),
        database=cfg.timestream.database,
        table=cfg.timestream.table,
        logger=get_logger("TimestreamSink"),
    )

    service = IngestionService(
        generator=PageViewGenerator(gen_cfg),
        writer=DualSinkWriter(log_sink, timeseries_sink, logger=get_logger("DualSinkWriter")),
        logger=get_logger("IngestionService"),
    )

    log.info(
        "Ingestion service initialized",
        extra={
            "delivery_stream": cfg.firehose.delivery_stream,
            "timestream_table": f"{cfg.timestream.database}.{cfg.timestream.table}",
        },
    )
    return service

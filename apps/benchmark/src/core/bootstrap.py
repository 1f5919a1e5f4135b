"""
Bootstrap for the benchmark phase.

Responsibilities:
- Build the Athena and Timestream-query clients from the shared AWS session
- Construct both query engines and the BenchmarkHarness
"""

from typing import Final, Optional

import boto3

from apps.benchmark.src.core.config import BenchmarkSettings, get_benchmark_settings
from apps.benchmark.src.data.athena_engine import AthenaQueryEngine
from apps.benchmark.src.data.timestream_engine import TimestreamQueryEngine
from apps.benchmark.src.service.harness import BenchmarkHarness
from libs.aws import build_session
from libs.config import AppConfig
from libs.observability import get_logger


def bootstrap(
    app_cfg: Optional[AppConfig] = None,
    session: Optional[boto3.session.Session] = None,
    settings: Optional[BenchmarkSettings] = None,
) -> BenchmarkHarness:
    """
    Build a fully wired BenchmarkHarness instance.
    """
    cfg: Final[AppConfig] = app_cfg or AppConfig.load()
    bench_cfg: Final[BenchmarkSettings] = settings or get_benchmark_settings()
    aws = session or build_session(cfg.aws)

    athena = AthenaQueryEngine(
        client=aws.client("athena"),
        database=cfg.athena.database,
        output_location=cfg.athena.output_location,
        workgroup=cfg.athena.workgroup,
        poll_interval_sec=bench_cfg.poll_interval_sec,
        logger=get_logger("AthenaQueryEngine"),
    )
    timestream = TimestreamQueryEngine(
        client=aws.client("timestream-query"),
        logger=get_logger("TimestreamQueryEngine"),
    )
    return BenchmarkHarness(athena=athena, timestream=timestream, logger=get_logger("BenchmarkHarness"))

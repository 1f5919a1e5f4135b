"""
Amazon Timestream sink for projected page views.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Sequence

from botocore.exceptions import ClientError

from libs import TimeSeriesRecord

# WriteRecords accepts at most 100 records per call.
MAX_RECORDS_PER_WRITE = 100


class TimestreamSink:
    """
    Time-series sink backed by `timestream-write.write_records`.

    Timestream rejects a whole request with RejectedRecordsException when
    any record is refused (e.g. a version that is not greater than the
    stored one) while still ingesting the rest. That case is a partial
    failure and is reported through the returned count; every other error
    propagates.
    """

    def __init__(self, client: Any, database: str, table: str, logger: logging.Logger) -> None:
        """
        Args:
            client: boto3 `timestream-write` client.
            database: Timestream database name.
            table: Timestream table name.
            logger: Logger instance for structured logging.
        """
        self._client = client
        self._database = database
        self._table = table
        self._log = logger

    async def write_records(self, records: Sequence[TimeSeriesRecord]) -> int:
        ingested = 0
        for offset in range(0, len(records), MAX_RECORDS_PER_WRITE):
            ingested += await self._write(records[offset:offset + MAX_RECORDS_PER_WRITE])
        return ingested

    async def _write(self, records: Sequence[TimeSeriesRecord]) -> int:
        try:
            resp = await asyncio.to_thread(
                self._client.write_records,
                DatabaseName=self._database,
                TableName=self._table,
                Records=[r.to_timestream() for r in records],
            )
        except ClientError as exc:
            if exc.response.get("Error", {}).get("Code") != "RejectedRecordsException":
                raise
            rejected = exc.response.get("RejectedRecords", [])
            self._log.debug(
                "Timestream rejected records",
                extra={
                    "table": self._table,
                    "rejected": len(rejected),
                    "reasons": sorted({r.get("Reason", "") for r in rejected}),
                },
            )
            return len(records) - len(rejected)

        return int(resp.get("RecordsIngested", {}).get("Total", len(records)))

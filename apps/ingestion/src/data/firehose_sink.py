"""
Kinesis Data Firehose sink for raw page views.

Each page view is sent as one JSON document; Firehose delivers them to
S3 where the Athena `page_views` table reads them.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Sequence

from libs import PageView

# PutRecordBatch accepts at most 500 records per call.
MAX_RECORDS_PER_BATCH = 500


class FirehoseLogSink:
    """
    Log sink backed by `firehose.put_record_batch`.

    The boto3 client is blocking, so each call runs in a worker thread to
    keep the event loop free for the concurrent Timestream write.
    """

    def __init__(self, client: Any, delivery_stream: str, logger: logging.Logger) -> None:
        """
        Args:
            client: boto3 `firehose` client.
            delivery_stream: Delivery stream name.
            logger: Logger instance for structured logging.
        """
        self._client = client
        self._stream = delivery_stream
        self._log = logger

    async def put_batch(self, page_views: Sequence[PageView]) -> int:
        failed = 0
        for offset in range(0, len(page_views), MAX_RECORDS_PER_BATCH):
            batch = page_views[offset:offset + MAX_RECORDS_PER_BATCH]
            failed += await self._put(batch)
        return failed

    async def _put(self, page_views: Sequence[PageView]) -> int:
        records: List[Dict[str, bytes]] = [{"Data": pv.to_json_bytes()} for pv in page_views]
        resp = await asyncio.to_thread(
            self._client.put_record_batch,
            DeliveryStreamName=self._stream,
            Records=records,
        )

        failed = int(resp.get("FailedPutCount") or 0)
        if failed:
            error_codes = sorted(
                {r["ErrorCode"] for r in resp.get("RequestResponses", []) if r.get("ErrorCode")}
            )
            self._log.debug(
                "Firehose rejected records",
                extra={"stream": self._stream, "failed": failed, "error_codes": error_codes},
            )
        return failed

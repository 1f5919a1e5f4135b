"""
Sink contracts consumed by the dual-sink writer.

Both sinks are best-effort: a returned count reports partial failure,
while a raised exception means the write call itself failed.
"""

from __future__ import annotations

from typing import Protocol, Sequence

from libs import PageView, TimeSeriesRecord


class LogSink(Protocol):
    """Append-only log sink accepting opaque serialized records."""

    async def put_batch(self, page_views: Sequence[PageView]) -> int:
        """Send the batch; return how many records failed to enqueue."""
        ...


class TimeSeriesSink(Protocol):
    """Time-series sink with upsert-by-version semantics."""

    async def write_records(self, records: Sequence[TimeSeriesRecord]) -> int:
        """Send the records; return how many were ingested."""
        ...

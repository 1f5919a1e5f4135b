"""
Amazon Timestream query engine.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Optional, Tuple

from apps.benchmark.src.data.engines import QueryResult


class TimestreamQueryEngine:
    """
    Query engine backed by the boto3 `timestream-query` client.

    Results are paginated with NextToken; a page may be empty while the
    query is still running, so pages are fetched until no token is returned.
    """

    name = "TimeStream"

    def __init__(self, client: Any, logger: logging.Logger) -> None:
        self._client = client
        self._log = logger

    async def execute(self, query: str) -> QueryResult:
        columns: List[str] = []
        rows: List[Tuple[Optional[str], ...]] = []
        query_id: Optional[str] = None
        kwargs: Dict[str, Any] = {"QueryString": query}

        while True:
            page = await asyncio.to_thread(self._client.query, **kwargs)
            query_id = page.get("QueryId", query_id)
            if not columns:
                columns = [c.get("Name", "") for c in page.get("ColumnInfo", [])]
            rows.extend(_row_values(row) for row in page.get("Rows", []))

            token: Optional[str] = page.get("NextToken")
            if not token:
                break
            kwargs["NextToken"] = token

        self._log.debug("Timestream query finished", extra={"query_id": query_id, "rows": len(rows)})
        return QueryResult(columns=columns, rows=rows, query_id=query_id)


def _row_values(row: Dict[str, Any]) -> Tuple[Optional[str], ...]:
    return tuple(datum.get("ScalarValue") for datum in row.get("Data", []))

"""
Amazon Athena query engine.

Athena is asynchronous: a query is started, its state is polled until it
reaches a terminal state, then the result pages are fetched.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Optional, Tuple

from apps.benchmark.src.data.engines import QueryResult
from libs.errors import QueryFailedError

_FAILED_STATES = frozenset({"FAILED", "CANCELLED"})


class AthenaQueryEngine:
    """
    Query engine backed by the boto3 `athena` client.
    """

    name = "Athena"

    def __init__(
        self,
        client: Any,
        database: str,
        output_location: str,
        logger: logging.Logger,
        workgroup: str = "primary",
        poll_interval_sec: float = 0.2,
    ) -> None:
        """
        Args:
            client: boto3 `athena` client.
            database: Glue database holding the `page_views` table.
            output_location: S3 URI where Athena writes query results.
            logger: Logger instance for structured logging.
            workgroup: Athena workgroup.
            poll_interval_sec: Delay between state polls.
        """
        self._client = client
        self._database = database
        self._output_location = output_location
        self._workgroup = workgroup
        self._poll_interval = poll_interval_sec
        self._log = logger

    async def execute(self, query: str) -> QueryResult:
        started = await asyncio.to_thread(
            self._client.start_query_execution,
            QueryString=query,
            QueryExecutionContext={"Database": self._database},
            ResultConfiguration={"OutputLocation": self._output_location},
            WorkGroup=self._workgroup,
        )
        query_id: str = started["QueryExecutionId"]

        execution = await self._wait(query_id)
        columns, rows = await self._fetch(query_id)

        stats = execution.get("Statistics", {})
        engine_ms = stats.get("EngineExecutionTimeInMillis")
        self._log.debug(
            "Athena query finished",
            extra={"query_id": query_id, "rows": len(rows), "engine_time_ms": engine_ms},
        )
        return QueryResult(
            columns=columns,
            rows=rows,
            query_id=query_id,
            engine_time_ms=int(engine_ms) if engine_ms is not None else None,
        )

    async def _wait(self, query_id: str) -> Dict[str, Any]:
        while True:
            resp = await asyncio.to_thread(self._client.get_query_execution, QueryExecutionId=query_id)
            execution = resp["QueryExecution"]
            status = execution["Status"]
            state = status["State"]

            if state == "SUCCEEDED":
                return execution
            if state in _FAILED_STATES:
                raise QueryFailedError(
                    engine=self.name,
                    state=state,
                    query_id=query_id,
                    reason=status.get("StateChangeReason"),
                )
            await asyncio.sleep(self._poll_interval)

    async def _fetch(self, query_id: str) -> Tuple[List[str], List[Tuple[Optional[str], ...]]]:
        columns: List[str] = []
        rows: List[Tuple[Optional[str], ...]] = []
        kwargs: Dict[str, Any] = {"QueryExecutionId": query_id}
        first_page = True

        while True:
            page = await asyncio.to_thread(self._client.get_query_results, **kwargs)
            result_set = page["ResultSet"]
            page_rows = result_set.get("Rows", [])

            if first_page:
                columns = [c["Name"] for c in result_set.get("ResultSetMetadata", {}).get("ColumnInfo", [])]
                # the first row of the first page repeats the column names
                page_rows = page_rows[1:]
                first_page = False

            rows.extend(_row_values(row) for row in page_rows)

            token: Optional[str] = page.get("NextToken")
            if not token:
                return columns, rows
            kwargs["NextToken"] = token


def _row_values(row: Dict[str, Any]) -> Tuple[Optional[str], ...]:
    return tuple(cell.get("VarCharValue") for cell in row.get("Data", []))

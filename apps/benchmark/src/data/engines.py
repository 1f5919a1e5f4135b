"""
Query engine contract used by the benchmark harness.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Protocol, Tuple


@dataclass
class QueryResult:
    """Fully materialized result of one query."""

    columns: List[str] = field(default_factory=list)
    rows: List[Tuple[Optional[str], ...]] = field(default_factory=list)
    query_id: Optional[str] = None
    engine_time_ms: Optional[int] = None  # as reported by the engine, when it does


class QueryEngine(Protocol):
    """An opaque request/response query service."""

    name: str

    async def execute(self, query: str) -> QueryResult:
        """Run `query` and return once every result row has been fetched."""
        ...

"""
Summary statistics over per-run query latencies.
"""

from __future__ import annotations

import math
import statistics
from dataclasses import dataclass, field
from typing import List, Sequence


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class QueryMetrics:
    """Latency summary for one engine over the runs of one test case (ms)."""

    min: int
    max: int
    avg: int
    std_dev: int
    requests: List[int] = field(default_factory=list)


def calculate_metrics(times: Sequence[int]) -> QueryMetrics:
    """
    Min, max, mean and population standard deviation of `times`.

    Mean and standard deviation are rounded half-up to whole milliseconds.

    Raises:
        ValueError: If `times` is empty.
    """
    if not times:
        raise ValueError("cannot summarize an empty list of latencies")

    avg = statistics.fmean(times)
    std_dev = statistics.pstdev(times, mu=avg)
    return QueryMetrics(
        min=min(times),
        max=max(times),
        avg=round_half_up(avg),
        std_dev=round_half_up(std_dev),
        requests=list(times),
    )

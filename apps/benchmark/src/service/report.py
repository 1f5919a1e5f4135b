"""
Plain-text side-by-side table of benchmark metrics.
"""

from __future__ import annotations

from typing import Dict, List

from apps.benchmark.src.service.metrics import QueryMetrics

COLUMNS = ("Engine", "min", "max", "avg", "std_dev", "requests")


def format_metrics_table(metrics: Dict[str, QueryMetrics]) -> str:
    """
    Render one row per engine, columns aligned.

    >>> print(format_metrics_table({"A": QueryMetrics(1, 3, 2, 1, [1, 2, 3])}))
    Engine | min | max | avg | std_dev | requests
    A      | 1   | 3   | 2   | 1       | 1, 2, 3
    """
    rows: List[List[str]] = [list(COLUMNS)]
    for engine, m in metrics.items():
        rows.append(
            [engine, str(m.min), str(m.max), str(m.avg), str(m.std_dev), ", ".join(str(r) for r in m.requests)]
        )

    widths = [max(len(row[i]) for row in rows) for i in range(len(COLUMNS))]
    lines = [
        " | ".join(cell.ljust(widths[i]) for i, cell in enumerate(row)).rstrip()
        for row in rows
    ]
    return "\n".join(lines)

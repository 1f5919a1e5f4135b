"""
showdown shared library package.

This package contains:
- shared Pydantic models (page views, time-series records)
- observability utilities (logging, tracing, metrics)
- global config, error types and the service base class
"""

from libs.models.page_views import PageView
from libs.models.timeseries import Dimension, TimeSeriesRecord

__all__ = [
    "PageView",
    "Dimension",
    "TimeSeriesRecord",
]

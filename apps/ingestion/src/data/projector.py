"""
Projection of a PageView into a Timestream record.

Every field except the measure (`time_on_page`) and the time
(`page_opened_at`) becomes a VARCHAR dimension.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Tuple

from libs import Dimension, PageView, TimeSeriesRecord

MEASURE_FIELD = "time_on_page"
TIME_FIELD = "page_opened_at"

DIMENSION_FIELDS: Tuple[str, ...] = (
    "site",
    "user_id",
    "session_id",
    "page_id",
    "page_url",
    "page_opened_at_date",
    "country_iso",
    "country_name",
    "city_name",
    "device_type",
    "is_bot",
    "utm_source",
    "utm_medium",
    "utm_campaign",
    "utm_term",
    "utm_content",
    "querystring",
    "referrer",
)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def dimension_value(value: Any) -> str:
    """Stringify a field value the way it appears in the JSON document."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def epoch_millis(timestamp: str) -> int:
    """Milliseconds since UNIX epoch of an ISO-8601 timestamp (naive means UTC)."""
    moment = datetime.fromisoformat(timestamp.replace("Z", "+00:00"))
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return (moment - _EPOCH) // timedelta(milliseconds=1)


def to_timeseries_record(page_view: PageView) -> TimeSeriesRecord:
    """
    Project one page view into a time-series record.

    The version is `time_on_page + 1`: the sink treats version 0 as no
    record, so a zero measure must still carry a positive version.
    """
    dimensions = []
    for name in DIMENSION_FIELDS:
        value = getattr(page_view, name)
        if value is not None:
            dimensions.append(Dimension(name=name, value=dimension_value(value)))

    return TimeSeriesRecord(
        dimensions=tuple(dimensions),
        measure_value=dimension_value(page_view.time_on_page),
        time=str(epoch_millis(page_view.page_opened_at)),
        version=page_view.time_on_page + 1,
    )

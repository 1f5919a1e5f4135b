"""
Time-series record model.

A TimeSeriesRecord is the projection of one PageView into the
dimensions + single measure shape accepted by Timestream `WriteRecords`.
"""

from typing import Any, Dict, Tuple

from pydantic import BaseModel, ConfigDict

MEASURE_NAME: str = "time_on_page"


class Dimension(BaseModel):
    """One named string attribute of a time-series record."""

    name: str
    value: str
    value_type: str = "VARCHAR"

    model_config = ConfigDict(frozen=True)


class TimeSeriesRecord(BaseModel):
    """
    Dimensions, one DOUBLE measure, an epoch-millisecond time and a version.

    The sink upserts by version: a write replaces a stored record with the
    same dimensions and time only when its version is strictly greater.
    """

    dimensions: Tuple[Dimension, ...]
    measure_name: str = MEASURE_NAME
    measure_value: str
    measure_value_type: str = "DOUBLE"
    time: str  # milliseconds since UNIX epoch
    version: int

    model_config = ConfigDict(frozen=True)

    def to_timestream(self) -> Dict[str, Any]:
        """Render the record in the boto3 `timestream-write` request shape."""
        return {
            "Dimensions": [
                {"Name": d.name, "Value": d.value, "DimensionValueType": d.value_type}
                for d in self.dimensions
            ],
            "MeasureName": self.measure_name,
            "MeasureValue": self.measure_value,
            "MeasureValueType": self.measure_value_type,
            "Time": self.time,
            "TimeUnit": "MILLISECONDS",
            "Version": self.version,
        }

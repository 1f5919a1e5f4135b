"""
Page-view event model.

This model is shared between the generator, the ingestion service and the
tests. It defines the typed contract for a single page view as it lands in
both sinks.
"""

from typing import ClassVar, Dict, Optional

from pydantic import BaseModel, Field


class PageView(BaseModel):
    """
    Typed page-view event produced by the generator.

    `page_opened_at` is an ISO-8601 UTC string with millisecond precision;
    `page_opened_at_date` is the date-only partition key of the Athena table.
    """

    site: str
    user_id: str
    session_id: str
    page_id: str
    page_url: str
    page_opened_at: str
    page_opened_at_date: Optional[str] = None
    time_on_page: int = Field(ge=1)  # seconds
    country_iso: Optional[str] = None
    country_name: Optional[str] = None
    city_name: Optional[str] = None
    device_type: Optional[str] = None
    is_bot: bool = False
    utm_source: Optional[str] = None
    utm_medium: Optional[str] = None
    utm_campaign: Optional[str] = None
    utm_term: Optional[str] = None
    utm_content: Optional[str] = None
    querystring: Optional[str] = None
    referrer: Optional[str] = None

    model_config: ClassVar[Dict[str, object]] = {
        "json_schema_extra": {
            "example": {
                "site": "showdown",
                "user_id": "0b4f7c58-3d07-4b8e-9a5e-0f0c2cbe3c51",
                "session_id": "f7b8c7d3-52d3-4781-8e7d-b87e2fd2f1f7",
                "page_id": "6a1f1d8e-7a2b-4c55-8f0e-5b3c0e9a1d22",
                "page_url": "/9c1e0a5b-2f55-4d1a-8e3c-7d8f6b2a4c10.html",
                "page_opened_at": "2023-03-01T10:00:00.000Z",
                "page_opened_at_date": "2023-03-01",
                "time_on_page": 17,
                "country_iso": "BE",
                "country_name": "Belgium",
                "city_name": "Ghent",
                "device_type": "desktop",
                "is_bot": False,
                "referrer": "google.com",
            }
        }
    }

    def to_json_bytes(self) -> bytes:
        """Serialize as one JSON document with absent fields omitted."""
        return self.model_dump_json(exclude_none=True).encode("utf-8")

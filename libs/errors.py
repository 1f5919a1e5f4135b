"""
Error types shared by the showdown services.

Sink and engine transport failures surface as botocore exceptions and are
not wrapped; these types cover the failures the services detect themselves.
"""

from __future__ import annotations

from typing import Optional


class ShowdownError(Exception):
    """Base class for errors raised by showdown code."""


class QueryFailedError(ShowdownError):
    """A benchmark query finished in a non-successful state."""

    def __init__(
        self,
        engine: str,
        state: str,
        query_id: Optional[str] = None,
        reason: Optional[str] = None,
    ) -> None:
        self.engine = engine
        self.state = state
        self.query_id = query_id
        self.reason = reason
        detail = f": {reason}" if reason else ""
        super().__init__(f"{engine} query {query_id or '<unknown>'} ended in state {state}{detail}")

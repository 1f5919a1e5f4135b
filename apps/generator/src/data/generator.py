"""
Correlated page-view generator.

Identifiers follow a three-level Markov chain (user -> session -> page):
each event keeps the previous user with a fixed probability, keeps the
previous session only if the user was kept, and keeps the previous page
only if the session was kept. The only memory is the last emitted
identifiers (CorrelationState), so any number of rows can be produced in
constant space, one chunk at a time.
"""

from __future__ import annotations

import random
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Iterator, List, Optional, Tuple

from faker import Faker

from apps.generator.src.core.config import GeneratorSettings
from libs import PageView

Chunk = List[PageView]


@dataclass(frozen=True)
class CorrelationState:
    """The identifiers of the most recently emitted event."""

    previous_user: str
    previous_session: str
    previous_page_url: str


def page_url_for(key: str) -> str:
    return f"/{key}.html"


def as_utc(moment: datetime) -> datetime:
    """Convert to UTC; a naive datetime is taken to be UTC already."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def format_timestamp(moment: datetime) -> str:
    """ISO-8601 UTC with millisecond precision and a `Z` suffix."""
    return as_utc(moment).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def next_identifiers(
    state: CorrelationState,
    rng: random.Random,
    new_id: Callable[[], str],
    same_user: float,
    same_session: float,
    same_page: float,
) -> CorrelationState:
    """
    Advance the correlation chain by one event.

    Returns the identifiers of the new event, which is also the state for
    the following step.
    """
    if rng.random() < same_user:
        user = state.previous_user
        if rng.random() < same_session:
            session = state.previous_session
            if rng.random() < same_page:
                page_url = state.previous_page_url
            else:
                page_url = page_url_for(new_id())
        else:
            session = new_id()
            page_url = page_url_for(new_id())
    else:
        user = new_id()
        session = new_id()
        page_url = page_url_for(new_id())

    return CorrelationState(previous_user=user, previous_session=session, previous_page_url=page_url)


class PageViewGenerator:
    """
    Generates chunks of synthetic, correlated page views.

    Each call to `chunks` is an independent run with its own correlation
    state and start instant; the generator object itself holds only the
    random sources.
    """

    def __init__(self, cfg: GeneratorSettings, rng: Optional[random.Random] = None) -> None:
        """
        Create a new PageViewGenerator.

        Args:
            cfg: Validated generator settings.
            rng: Random source; seeded from `cfg.seed` when omitted.
        """
        self._cfg = cfg
        self._rng = rng or random.Random(cfg.seed)
        self._fake = Faker()
        self._fake.seed_instance(self._rng.getrandbits(64))

    def _new_id(self) -> str:
        return str(uuid.UUID(int=self._rng.getrandbits(128), version=4))

    def _initial_state(self) -> CorrelationState:
        return CorrelationState(
            previous_user=self._new_id(),
            previous_session=self._new_id(),
            previous_page_url=page_url_for(self._new_id()),
        )

    def _maybe(self, probability: float, value: Callable[[], str]) -> Optional[str]:
        return value() if self._rng.random() < probability else None

    def _referrer(self) -> Optional[str]:
        if self._rng.random() >= self._cfg.referrer_probability:
            return None
        if self._rng.random() < self._cfg.google_referrer_share:
            return "google.com"
        return self._fake.domain_name()

    def step(
        self,
        state: CorrelationState,
        index: int,
        start: datetime,
    ) -> Tuple[PageView, CorrelationState]:
        """
        Produce the event at zero-based `index` of a run started at `start`.

        Returns:
            The event and the correlation state to pass to the next step.
        """
        cfg = self._cfg
        ids = next_identifiers(
            state,
            self._rng,
            self._new_id,
            cfg.same_user_probability,
            cfg.same_session_probability,
            cfg.same_page_probability,
        )
        opened_at = start + timedelta(milliseconds=index)

        event = PageView(
            site=cfg.site,
            user_id=ids.previous_user,
            session_id=ids.previous_session,
            page_id=self._new_id(),
            page_url=ids.previous_page_url,
            page_opened_at=format_timestamp(opened_at),
            page_opened_at_date=opened_at.date().isoformat(),
            time_on_page=1 + int(self._rng.random() * cfg.max_time_on_page_sec),
            referrer=self._referrer(),
            utm_source=self._maybe(cfg.utm_source_probability, self._fake.company),
            utm_campaign=self._maybe(cfg.utm_campaign_probability, self._fake.catch_phrase),
            is_bot=False,
            country_iso=self._fake.country_code(),
            country_name=self._fake.country(),
            city_name=self._fake.city(),
            device_type="desktop" if self._rng.random() < cfg.desktop_share else "mobile",
        )
        return event, ids

    def chunks(
        self,
        max_rows: int,
        seconds_in_past: float = 0,
        now: Optional[datetime] = None,
    ) -> Iterator[Chunk]:
        """
        Yield `max_rows` events in chunks of `chunk_size`; the last may be shorter.

        Event `i` opens at `now - seconds_in_past + i` milliseconds, so
        timestamps strictly increase across the whole run.

        Raises:
            ValueError: If `max_rows` or `seconds_in_past` is negative.
        """
        if max_rows < 0:
            raise ValueError("max_rows must be >= 0")
        if seconds_in_past < 0:
            raise ValueError("seconds_in_past must be >= 0")
        return self._iter_chunks(max_rows, seconds_in_past, now)

    def _iter_chunks(self, max_rows: int, seconds_in_past: float, now: Optional[datetime]) -> Iterator[Chunk]:
        current = as_utc(now) if now is not None else datetime.now(tz=timezone.utc)
        start = current - timedelta(seconds=seconds_in_past)
        start = start.replace(microsecond=start.microsecond - start.microsecond % 1000)

        state = self._initial_state()
        buffer: Chunk = []
        for index in range(max_rows):
            event, state = self.step(state, index, start)
            buffer.append(event)
            if len(buffer) >= self._cfg.chunk_size:
                yield buffer
                buffer = []

        if buffer:
            yield buffer


def generate_page_views(
    max_rows: int,
    seconds_in_past: float = 0,
    cfg: Optional[GeneratorSettings] = None,
    now: Optional[datetime] = None,
) -> Iterator[Chunk]:
    """
    Convenience wrapper: one generation run with default settings when none are provided.
    """
    return PageViewGenerator(cfg or GeneratorSettings()).chunks(max_rows, seconds_in_past, now)

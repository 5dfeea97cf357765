from __future__ import annotations

import logging
from datetime import date, datetime, timezone, tzinfo
from typing import Optional

import requests

from ..common.datetime_utils import end_of_day, start_of_day, to_timezone
from ..core.constants import DEFAULT_WORLD_TIME_API_URL, DEFAULT_WORLD_TIME_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)


class WorldTimeClock:
    """Current time from a WorldTimeAPI-style feed, local clock as fallback.

    The feed answers ``GET <url>`` with JSON carrying an ISO-8601 ``datetime``
    (e.g. ``2024-08-17T08:59:12.345678+08:00``). A single failed attempt of any
    kind (network, timeout, bad payload) falls back to the system clock
    converted to the business timezone. Callers never see an error.
    """

    def __init__(
        self,
        tz: tzinfo,
        *,
        url: str = DEFAULT_WORLD_TIME_API_URL,
        timeout: float = DEFAULT_WORLD_TIME_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ):
        self._tz = tz
        self._url = url
        self._timeout = float(timeout)
        self._session = session or requests.Session()

    @property
    def tz(self) -> tzinfo:
        return self._tz

    def now(self) -> datetime:
        try:
            return self._fetch()
        except (requests.RequestException, ValueError, KeyError, TypeError) as e:
            logger.warning("World time feed unavailable (%s); using local clock", e)
            return self.local_now()

    def local_now(self) -> datetime:
        return datetime.now(timezone.utc).astimezone(self._tz)

    def _fetch(self) -> datetime:
        response = self._session.get(self._url, timeout=self._timeout)
        response.raise_for_status()
        payload = response.json()
        raw = payload["datetime"]
        if not isinstance(raw, str) or not raw:
            raise ValueError(f"Malformed datetime in time feed: {raw!r}")

        parsed = datetime.fromisoformat(raw.replace("Z", "+00:00"))
        if parsed.tzinfo is None:
            # Feed answered in wall-clock terms of the requested zone
            parsed = parsed.replace(tzinfo=self._tz)
        current = parsed.astimezone(self._tz)
        logger.debug("World time feed: raw=%s parsed=%s", raw, current.isoformat())
        return current

    def today(self) -> date:
        return self.now().date()

    def start_of_today(self) -> datetime:
        return start_of_day(self.now(), self._tz)

    def end_of_today(self) -> datetime:
        return end_of_day(self.now(), self._tz)

    def is_today(self, value: datetime) -> bool:
        return to_timezone(value, self._tz).date() == self.today()

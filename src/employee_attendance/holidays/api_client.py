from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

import requests

from ..core.constants import (
    DEFAULT_HOLIDAY_API_TIMEOUT_SECONDS,
    DEFAULT_HOLIDAY_API_URL,
    DEFAULT_HOLIDAY_LANGUAGE,
)
from ..core.exceptions import HolidayFeedError
from .model import FeedHoliday

logger = logging.getLogger(__name__)


class HolidayApiClient:
    """Client for a HolidayAPI.com-style public holiday feed.

    ``GET {base_url}/holidays?key=..&country=..&year=..&public=true&language=id``
    answers ``{"status": 200, "holidays": [{"name", "date", "observed", ...}]}``.
    Free-tier keys only serve past years; a request for the current year is
    answered with a non-200 ``status`` and surfaces as ``HolidayFeedError``.
    """

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = DEFAULT_HOLIDAY_API_URL,
        language: str = DEFAULT_HOLIDAY_LANGUAGE,
        timeout: float = DEFAULT_HOLIDAY_API_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ):
        self._api_key = api_key or ""
        self._base_url = base_url.rstrip("/")
        self._language = language
        self._timeout = float(timeout)
        self._session = session or requests.Session()
        if not self._api_key:
            logger.warning("HOLIDAY_API_KEY is not configured; holiday import is disabled")

    def fetch_holidays(self, country: str, year: int) -> Sequence[FeedHoliday]:
        if not self._api_key:
            raise HolidayFeedError("HOLIDAY_API_KEY is required to import holidays")

        logger.info("Fetching holidays for %s %s", country, year)
        payload = self._get(
            {
                "key": self._api_key,
                "country": country,
                "year": int(year),
                "public": "true",
                "language": self._language,
            }
        )
        holidays = self._parse(payload)
        logger.info("Holiday feed returned %d entries for %s %s", len(holidays), country, year)
        return holidays

    def fetch_upcoming(self, country: str, today: date) -> Sequence[FeedHoliday]:
        """Upcoming public holidays; an unavailable feed yields an empty list."""

        if not self._api_key:
            return []
        try:
            payload = self._get(
                {
                    "key": self._api_key,
                    "country": country,
                    "year": today.year,
                    "month": today.month,
                    "day": today.day,
                    "upcoming": "true",
                    "public": "true",
                    "language": self._language,
                }
            )
            return self._parse(payload)
        except HolidayFeedError as e:
            logger.warning("Failed to fetch upcoming holidays: %s", e)
            return []

    def _get(self, params: dict) -> dict:
        try:
            response = self._session.get(f"{self._base_url}/holidays", params=params, timeout=self._timeout)
        except requests.RequestException as e:
            raise HolidayFeedError(f"Holiday feed unreachable: {e}") from e

        try:
            payload = response.json()
        except ValueError:
            raise HolidayFeedError(f"Holiday feed returned invalid JSON (HTTP {response.status_code})") from None

        if not isinstance(payload, dict):
            raise HolidayFeedError("Holiday feed returned an unexpected payload")

        status = payload.get("status", response.status_code)
        if response.status_code != 200 or status != 200:
            message = payload.get("error") or "Unknown error"
            raise HolidayFeedError(f"HolidayAPI error: {message}")
        return payload

    @staticmethod
    def _parse(payload: dict) -> list[FeedHoliday]:
        out: list[FeedHoliday] = []
        for item in payload.get("holidays") or []:
            if not isinstance(item, dict):
                continue
            out.append(
                FeedHoliday(
                    name=str(item.get("name") or "").strip(),
                    date=str(item.get("date") or "").strip(),
                    observed=item.get("observed") or None,
                    public=bool(item.get("public", True)),
                )
            )
        return out

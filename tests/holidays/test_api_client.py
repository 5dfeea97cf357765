from __future__ import annotations

from datetime import date

import pytest
import requests

from conftest import FakeResponse, FakeSession
from employee_attendance.core.exceptions import HolidayFeedError
from employee_attendance.holidays.api_client import HolidayApiClient

PAYLOAD = {
    "status": 200,
    "holidays": [
        {"name": "Hari Kemerdekaan", "date": "2024-08-17", "observed": "2024-08-17", "public": True},
        {"name": "Hari Raya Natal", "date": "2024-12-25", "observed": "2024-12-25", "public": True},
        "garbage",
    ],
}


def test_fetch_holidays_parses_entries_and_sends_params():
    session = FakeSession(FakeResponse(200, PAYLOAD))
    client = HolidayApiClient("secret", base_url="https://holidays.test/v1/", session=session, timeout=3)

    holidays = client.fetch_holidays("ID", 2024)

    assert [(h.name, h.date) for h in holidays] == [
        ("Hari Kemerdekaan", "2024-08-17"),
        ("Hari Raya Natal", "2024-12-25"),
    ]
    call = session.calls[0]
    assert call["url"] == "https://holidays.test/v1/holidays"
    assert call["params"]["country"] == "ID"
    assert call["params"]["year"] == 2024
    assert call["params"]["language"] == "id"
    assert call["params"]["public"] == "true"
    assert call["timeout"] == 3.0


def test_missing_key_is_a_feed_error():
    session = FakeSession(FakeResponse(200, PAYLOAD))
    client = HolidayApiClient("", session=session)

    with pytest.raises(HolidayFeedError):
        client.fetch_holidays("ID", 2024)
    assert session.calls == []


@pytest.mark.parametrize(
    "session",
    [
        FakeSession(error=requests.ConnectionError("down")),
        FakeSession(error=requests.Timeout("slow")),
        FakeSession(FakeResponse(200, invalid_json=True)),
        FakeSession(FakeResponse(200, ["not", "a", "dict"])),
        FakeSession(FakeResponse(402, {"status": 402, "error": "Free accounts are limited to last year's data"})),
        FakeSession(FakeResponse(200, {"status": 429, "error": "rate limited"})),
    ],
)
def test_feed_failures_raise(session):
    client = HolidayApiClient("secret", session=session)

    with pytest.raises(HolidayFeedError):
        client.fetch_holidays("ID", 2025)


def test_error_message_carries_feed_error():
    session = FakeSession(FakeResponse(402, {"status": 402, "error": "Free accounts are limited"}))
    client = HolidayApiClient("secret", session=session)

    with pytest.raises(HolidayFeedError, match="HolidayAPI error: Free accounts are limited"):
        client.fetch_holidays("ID", 2025)


def test_fetch_upcoming_swallows_failures():
    client = HolidayApiClient("secret", session=FakeSession(error=requests.ConnectionError("down")))

    assert client.fetch_upcoming("ID", date(2024, 8, 1)) == []


def test_fetch_upcoming_sends_day():
    session = FakeSession(FakeResponse(200, PAYLOAD))
    client = HolidayApiClient("secret", session=session)

    assert len(client.fetch_upcoming("ID", date(2024, 8, 1))) == 2
    params = session.calls[0]["params"]
    assert (params["year"], params["month"], params["day"], params["upcoming"]) == (2024, 8, 1, "true")

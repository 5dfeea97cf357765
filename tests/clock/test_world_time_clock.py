from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone

import requests

from conftest import WITA, FakeResponse, FakeSession, wita
from employee_attendance.clock.formatting import format_date, format_datetime, format_duration, format_time
from employee_attendance.clock.world_time import WorldTimeClock


def test_uses_feed_time_converted_to_business_zone():
    session = FakeSession(FakeResponse(200, {"datetime": "2024-08-19T01:05:30.123456+00:00"}))
    clock = WorldTimeClock(WITA, url="https://time.test/now", timeout=5, session=session)

    now = clock.now()

    assert now == wita(2024, 8, 19, 9, 5, 30).replace(microsecond=123456)
    assert now.utcoffset() == timedelta(hours=8)
    assert session.calls[0]["timeout"] == 5.0
    assert session.calls[0]["url"] == "https://time.test/now"


def test_naive_feed_time_is_business_local():
    session = FakeSession(FakeResponse(200, {"datetime": "2024-08-19T08:59:00"}))
    clock = WorldTimeClock(WITA, session=session)

    assert clock.now() == wita(2024, 8, 19, 8, 59)


def test_zulu_suffix_is_understood():
    session = FakeSession(FakeResponse(200, {"datetime": "2024-08-19T00:00:00Z"}))
    clock = WorldTimeClock(WITA, session=session)

    assert clock.now() == wita(2024, 8, 19, 8, 0)


def _assert_local_fallback(session):
    clock = WorldTimeClock(WITA, session=session)
    before = datetime.now(timezone.utc)

    now = clock.now()

    after = datetime.now(timezone.utc)
    assert now.utcoffset() == timedelta(hours=8)
    assert before <= now <= after


def test_network_failure_falls_back_to_local_clock():
    _assert_local_fallback(FakeSession(error=requests.ConnectionError("down")))


def test_timeout_falls_back_to_local_clock():
    _assert_local_fallback(FakeSession(error=requests.Timeout("slow")))


def test_http_error_falls_back_to_local_clock():
    _assert_local_fallback(FakeSession(FakeResponse(503, {})))


def test_malformed_payload_falls_back_to_local_clock():
    _assert_local_fallback(FakeSession(FakeResponse(200, invalid_json=True)))
    _assert_local_fallback(FakeSession(FakeResponse(200, {"unixtime": 1})))
    _assert_local_fallback(FakeSession(FakeResponse(200, {"datetime": "yesterday"})))
    _assert_local_fallback(FakeSession(FakeResponse(200, {"datetime": None})))


def test_day_boundaries_and_is_today():
    session = FakeSession(FakeResponse(200, {"datetime": "2024-08-19T14:00:00+08:00"}))
    clock = WorldTimeClock(WITA, session=session)

    assert clock.today() == date(2024, 8, 19)
    assert clock.start_of_today() == wita(2024, 8, 19, 0, 0)
    assert clock.end_of_today() == datetime.combine(date(2024, 8, 19), time(23, 59, 59, 999000), tzinfo=WITA)
    assert clock.is_today(datetime(2024, 8, 18, 16, 0, tzinfo=timezone.utc))
    assert not clock.is_today(datetime(2024, 8, 18, 15, 59, tzinfo=timezone.utc))


def test_formatting_helpers():
    moment = datetime(2024, 8, 17, 1, 5, 9, tzinfo=timezone.utc)

    assert format_date(moment, WITA) == "17 Agustus 2024"
    assert format_date(date(2024, 1, 1), WITA) == "1 Januari 2024"
    assert format_time(moment, WITA) == "09.05.09"
    assert format_datetime(moment, WITA) == "17 Agustus 2024 pukul 09.05.09"
    assert format_duration(570) == "9 jam 30 menit"
    assert format_duration(None) == "0 jam 0 menit"

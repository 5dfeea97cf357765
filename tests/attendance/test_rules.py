from __future__ import annotations

from datetime import datetime, timezone

import pytest

from conftest import WITA, wita
from employee_attendance.attendance.rules import append_notes, derive_status, derive_work_duration
from employee_attendance.core.enums import AttendanceStatus


@pytest.mark.parametrize(
    "hh,mm,ss,expected_status,expected_late",
    [
        (8, 59, 0, AttendanceStatus.PRESENT, 0),
        (9, 0, 0, AttendanceStatus.PRESENT, 0),
        (9, 0, 59, AttendanceStatus.PRESENT, 0),
        (9, 1, 0, AttendanceStatus.LATE, 1),
        (10, 30, 0, AttendanceStatus.LATE, 90),
    ],
)
def test_status_around_nine_oclock(hh, mm, ss, expected_status, expected_late):
    decision = derive_status(wita(2024, 8, 19, hh, mm, ss), tz=WITA)

    assert decision.status == expected_status
    assert decision.late_minutes == expected_late


def test_status_uses_business_wall_clock_not_utc():
    # 01:01 UTC is 09:01 in WITA
    decision = derive_status(datetime(2024, 8, 19, 1, 1, tzinfo=timezone.utc), tz=WITA)

    assert decision.status == AttendanceStatus.LATE
    assert decision.late_minutes == 1


def test_custom_cutoff():
    decision = derive_status(wita(2024, 8, 19, 8, 15), tz=WITA, cutoff_minutes=8 * 60)

    assert decision.status == AttendanceStatus.LATE
    assert decision.late_minutes == 15


def test_work_duration_is_whole_minutes():
    assert derive_work_duration(wita(2024, 8, 19, 8, 0), wita(2024, 8, 19, 17, 30)) == 570
    assert derive_work_duration(wita(2024, 8, 19, 8, 0, 0), wita(2024, 8, 19, 8, 0, 59)) == 0
    assert derive_work_duration(wita(2024, 8, 19, 8, 0, 30), wita(2024, 8, 19, 8, 2, 29)) == 1


def test_work_duration_rejects_checkout_not_after_checkin():
    with pytest.raises(ValueError):
        derive_work_duration(wita(2024, 8, 19, 9, 0), wita(2024, 8, 19, 9, 0))


def test_append_notes_never_overwrites():
    assert append_notes("Traffic jam", "Left early for doctor") == "Traffic jam | Left early for doctor"
    assert append_notes("", "Left early") == "Left early"
    assert append_notes(None, "Left early") == "Left early"
    assert append_notes("Traffic jam", "") == "Traffic jam"
    assert append_notes("Traffic jam", None) == "Traffic jam"

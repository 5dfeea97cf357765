from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from conftest import wita
from employee_attendance.core.enums import HolidayType
from employee_attendance.core.exceptions import DuplicateHolidayError, NotFoundError, ValidationError


@pytest.fixture
def calendar(holidays_repo):
    holidays_repo.add("Tahun Baru Imlek", date(2024, 2, 10), HolidayType.RELIGIOUS)
    holidays_repo.add("Hari Raya Nyepi", date(2024, 3, 11), HolidayType.RELIGIOUS)
    holidays_repo.add("Hari Kemerdekaan RI", date(2024, 8, 17))
    holidays_repo.add("Maulid Nabi Muhammad SAW", date(2024, 9, 16), HolidayType.RELIGIOUS)
    holidays_repo.add("Hari Raya Natal", date(2024, 12, 25), HolidayType.RELIGIOUS)
    return holidays_repo


def test_holiday_on_matches_calendar_day(holiday_service, calendar):
    assert holiday_service.holiday_on(date(2024, 8, 17)).name == "Hari Kemerdekaan RI"
    assert holiday_service.holiday_on(date(2024, 8, 16)) is None
    assert holiday_service.holiday_on(date(2024, 8, 18)) is None


def test_holiday_on_accepts_datetimes_in_business_time(holiday_service, calendar):
    # 17:00 UTC on Aug 16 is 01:00 on Aug 17 in WITA
    assert holiday_service.holiday_on(datetime(2024, 8, 16, 17, 0, tzinfo=timezone.utc)).name == "Hari Kemerdekaan RI"
    assert holiday_service.holiday_on(wita(2024, 8, 17, 23, 59, 59)) is not None
    assert holiday_service.holiday_on(wita(2024, 8, 18, 0, 0)) is None


def test_holiday_on_returns_first_of_several(holiday_service, holidays_repo):
    holidays_repo.add("Cuti Bersama", date(2024, 4, 8))
    holidays_repo.add("Idul Fitri", date(2024, 4, 8), HolidayType.RELIGIOUS)

    assert holiday_service.holiday_on(date(2024, 4, 8)).name == "Cuti Bersama"
    assert holiday_service.is_holiday(date(2024, 4, 8))


def test_range_queries(holiday_service, calendar):
    names = [h.name for h in holiday_service.holidays_in_range(date(2024, 3, 11), date(2024, 9, 16))]
    assert names == ["Hari Raya Nyepi", "Hari Kemerdekaan RI", "Maulid Nabi Muhammad SAW"]
    assert holiday_service.count_in_range(date(2024, 1, 1), date(2024, 12, 31)) == 5
    assert holiday_service.count_in_range(date(2024, 12, 31), date(2024, 1, 1)) == 0
    with pytest.raises(ValidationError):
        holiday_service.holidays_in_range(date(2024, 12, 31), date(2024, 1, 1))


def test_by_year_and_month(holiday_service, calendar, holidays_repo):
    holidays_repo.add("Tahun Baru", date(2025, 1, 1))

    assert len(holiday_service.by_year(2024)) == 5
    assert [h.name for h in holiday_service.by_month(2024, 12)] == ["Hari Raya Natal"]
    assert holiday_service.by_month(2024, 6) == []
    with pytest.raises(ValidationError):
        holiday_service.by_month(2024, 13)


@pytest.mark.parametrize("year", [0, -1, 10000])
def test_out_of_range_years_are_rejected(holiday_service, year):
    with pytest.raises(ValidationError):
        holiday_service.by_year(year)
    with pytest.raises(ValidationError):
        holiday_service.list_holidays(year=year)


def test_december_of_the_last_year_is_bounded(holiday_service, holidays_repo):
    holidays_repo.add("Malam Tahun Baru", date(9999, 12, 31))

    assert [h.name for h in holiday_service.by_month(9999, 12)] == ["Malam Tahun Baru"]
    assert holiday_service.list_holidays(year=9999, month=12).total == 1


def test_upcoming_is_ascending_from_today(holiday_service, calendar, clock):
    clock.set(wita(2024, 8, 17, 10, 0))

    upcoming = holiday_service.upcoming(2)

    assert [h.name for h in upcoming] == ["Hari Kemerdekaan RI", "Maulid Nabi Muhammad SAW"]


def test_list_holidays_filters(holiday_service, calendar):
    page = holiday_service.list_holidays(year=2024, type="religious", page=1, limit=2)

    assert page.total == 4
    assert [h.name for h in page.items] == ["Tahun Baru Imlek", "Hari Raya Nyepi"]
    assert page.meta() == {"total": 4, "page": 1, "limit": 2, "totalPages": 2}

    march = holiday_service.list_holidays(year=2024, month=3)
    assert [h.name for h in march.items] == ["Hari Raya Nyepi"]

    with pytest.raises(ValidationError):
        holiday_service.list_holidays(type="bank")


def test_create_validates_and_rejects_duplicates(holiday_service):
    created = holiday_service.create(
        name="Company Anniversary",
        holiday_date="2024-12-31",
        type="company",
        description="  Office closed  ",
        created_by=1,
    )
    assert created.holiday_date == date(2024, 12, 31)
    assert created.type == HolidayType.COMPANY
    assert created.description == "Office closed"

    with pytest.raises(DuplicateHolidayError):
        holiday_service.create(name="Company Anniversary", holiday_date="2024-12-31", type="company")

    with pytest.raises(ValidationError):
        holiday_service.create(name="ab", holiday_date="2024-12-31", type="company")
    with pytest.raises(ValidationError):
        holiday_service.create(name="Valid name", holiday_date="31/12/2024", type="company")
    with pytest.raises(ValidationError):
        holiday_service.create(name="Valid name", holiday_date="2024-12-30", type="bank")
    with pytest.raises(ValidationError):
        holiday_service.create(name="Valid name", holiday_date="2024-12-30", type="other", description="x" * 501)


def test_update_is_partial(holiday_service, calendar):
    holiday = calendar.find_by_date(date(2024, 8, 17))[0]

    updated = holiday_service.update(holiday.holiday_id, description="Independence Day", is_recurring=True)

    assert updated.name == "Hari Kemerdekaan RI"
    assert updated.holiday_date == date(2024, 8, 17)
    assert updated.description == "Independence Day"
    assert updated.is_recurring is True

    moved = holiday_service.update(holiday.holiday_id, date="2024-08-19")
    assert moved.holiday_date == date(2024, 8, 19)


def test_update_into_existing_pair_is_duplicate(holiday_service, holidays_repo):
    holidays_repo.add("Cuti Bersama", date(2024, 4, 8))
    other = holidays_repo.add("Cuti Bersama", date(2024, 4, 9))

    with pytest.raises(DuplicateHolidayError):
        holiday_service.update(other.holiday_id, date="2024-04-08")


def test_get_and_delete(holiday_service, calendar):
    holiday = calendar.find_by_date(date(2024, 12, 25))[0]

    holiday_service.delete(holiday.holiday_id)

    with pytest.raises(NotFoundError):
        holiday_service.get(holiday.holiday_id)
    with pytest.raises(NotFoundError):
        holiday_service.delete(holiday.holiday_id)

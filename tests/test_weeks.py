from datetime import date, datetime, timedelta, timezone

import pytest

from meritboard.core.exceptions import WeekOutOfRangeError
from meritboard.core.weeks import (
    academic_week,
    academic_week_number,
    current_academic_week,
    get_academic_week,
    iso_week_id,
    list_academic_weeks,
    resolve_week,
    term_start_for,
    to_org_date,
    week_of,
)


def test_week_of_uses_org_timezone() -> None:
    # Sunday 18:00 UTC is already Monday in UTC+7
    moment = datetime(2025, 9, 7, 18, 0, tzinfo=timezone.utc)
    assert week_of(moment) == 37
    assert week_of(datetime(2025, 9, 7, 16, 0, tzinfo=timezone.utc)) == 36


def test_week_of_naive_datetime_is_utc() -> None:
    assert week_of(datetime(2025, 9, 7, 18, 0)) == 37


def test_week_of_plain_date_unchanged() -> None:
    assert week_of(date(2025, 9, 7)) == 36
    assert week_of(date(2025, 9, 8)) == 37


def test_to_org_date_parses_strings() -> None:
    assert to_org_date("2025-09-07T18:00:00Z") == date(2025, 9, 8)
    assert to_org_date("2025-09-07") == date(2025, 9, 7)
    assert to_org_date("2025-09-07T10:00:00+07:00") == date(2025, 9, 7)


def test_iso_week_id_pads_week() -> None:
    assert iso_week_id(date(2025, 1, 6)) == "2025-W02"
    # ISO year differs from calendar year at the boundary
    assert iso_week_id(date(2024, 12, 30)) == "2025-W01"


def test_academic_week_number_boundaries() -> None:
    assert term_start_for(date(2025, 9, 8)) == date(2025, 9, 8)
    assert term_start_for(date(2026, 1, 5)) == date(2025, 9, 8)
    assert term_start_for(date(2025, 9, 7)) == date(2024, 9, 8)
    assert academic_week_number(date(2025, 9, 8)) == 1
    assert academic_week_number(date(2025, 9, 14)) == 1
    assert academic_week_number(date(2025, 9, 15)) == 2


def test_academic_week_number_is_monotonic_within_term() -> None:
    start = date(2025, 9, 8)
    previous = 0
    for offset in range(35 * 7):
        week = academic_week_number(start + timedelta(days=offset))
        assert week >= previous
        previous = week
    assert previous == 35
    # resets at the next academic year
    assert academic_week_number(date(2026, 9, 8)) == 1


def test_academic_week_details() -> None:
    week = academic_week(date(2025, 9, 10))
    assert week.term_year == 2025
    assert week.number == 1
    assert week.start == date(2025, 9, 8)
    assert week.end == date(2025, 9, 14)
    assert week.week_id == "2025-W37"
    assert week.label == "Week 1 (08/09 - 14/09)"
    assert week.contains(date(2025, 9, 14))
    assert not week.contains(date(2025, 9, 15))


def test_academic_week_out_of_range() -> None:
    # summer break: far past the last week of the previous term
    with pytest.raises(WeekOutOfRangeError) as exc:
        academic_week(date(2025, 8, 1))
    assert exc.value.status_code == 400

    with pytest.raises(WeekOutOfRangeError):
        get_academic_week(2025, 36)
    with pytest.raises(WeekOutOfRangeError):
        get_academic_week(2025, 0)


def test_list_academic_weeks_is_contiguous() -> None:
    weeks = list_academic_weeks(2025)
    assert len(weeks) == 35
    assert [w.number for w in weeks] == list(range(1, 36))
    for earlier, later in zip(weeks, weeks[1:]):
        assert later.start == earlier.end + timedelta(days=1)


def test_current_academic_week_is_clamped() -> None:
    assert current_academic_week(date(2025, 9, 20)).number == 2
    summer = current_academic_week(date(2026, 7, 1))
    assert summer.term_year == 2025
    assert summer.number == 35


def test_resolve_week() -> None:
    week = resolve_week(3, 2025)
    assert week.start == date(2025, 9, 22)
    assert resolve_week(None, 2025).term_year == 2025

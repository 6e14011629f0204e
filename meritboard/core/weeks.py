"""
Calendar helpers for the school week.

Two week numbers are in use:
- the ISO-8601 week of a moment seen in the organization timezone (``week_of``);
- the academic week, counted in 7-day blocks from the academic year's start date
  (``academic_week``). Records and rankings are grouped by academic week, and each
  academic week is identified across years by the ISO week id of its first day.
"""
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import List, Optional, Union

from meritboard.core.config import settings
from meritboard.core.exceptions import WeekOutOfRangeError

DateLike = Union[date, datetime, str]


def org_timezone() -> timezone:
    return timezone(timedelta(hours=settings.org_utc_offset_hours))


def to_org_date(value: DateLike) -> date:
    """Calendar day of ``value`` in the organization timezone.

    Naive datetimes are taken as UTC; plain dates are returned unchanged;
    strings are parsed as ISO dates or datetimes.
    """
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        if len(text) == 10:
            return date.fromisoformat(text)
        value = datetime.fromisoformat(text)
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(org_timezone()).date()
    if isinstance(value, date):
        return value
    raise TypeError(f"Unsupported date value: {value!r}")


def week_of(value: DateLike) -> int:
    """ISO-8601 week number (weeks start on Monday) in the organization timezone."""
    return to_org_date(value).isocalendar()[1]


def iso_week_id(day: date) -> str:
    iso = day.isocalendar()
    return f"{iso[0]}-W{iso[1]:02d}"


def term_start_for(day: date) -> date:
    """First day of the academic year that contains ``day``."""
    start = date(day.year, settings.term_start_month, settings.term_start_day)
    if day < start:
        start = date(day.year - 1, settings.term_start_month, settings.term_start_day)
    return start


def academic_week_number(day: date) -> int:
    """1-based week within the academic year; not range-checked."""
    diff = (day - term_start_for(day)).days
    return diff // 7 + 1


@dataclass(frozen=True)
class AcademicWeek:
    term_year: int
    number: int
    start: date
    end: date

    @property
    def week_id(self) -> str:
        return iso_week_id(self.start)

    @property
    def label(self) -> str:
        return f"Week {self.number} ({self.start:%d/%m} - {self.end:%d/%m})"

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end


def _check_range(number: int) -> None:
    if number < 1 or number > settings.total_weeks:
        raise WeekOutOfRangeError(
            f"Week {number} is outside the academic term (1-{settings.total_weeks})"
        )


def get_academic_week(term_year: int, number: int) -> AcademicWeek:
    _check_range(number)
    term_start = date(term_year, settings.term_start_month, settings.term_start_day)
    start = term_start + timedelta(days=(number - 1) * 7)
    return AcademicWeek(term_year=term_year, number=number, start=start, end=start + timedelta(days=6))


def academic_week(value: DateLike) -> AcademicWeek:
    """Academic week containing ``value``; raises WeekOutOfRangeError outside the term."""
    day = to_org_date(value)
    number = academic_week_number(day)
    _check_range(number)
    return get_academic_week(term_start_for(day).year, number)


def list_academic_weeks(term_year: int) -> List[AcademicWeek]:
    return [get_academic_week(term_year, n) for n in range(1, settings.total_weeks + 1)]


def current_academic_week(today: Optional[date] = None) -> AcademicWeek:
    """Academic week for ``today``, clamped into the term (summer maps to the last week)."""
    if today is None:
        today = datetime.now(org_timezone()).date()
    number = max(1, min(settings.total_weeks, academic_week_number(today)))
    return get_academic_week(term_start_for(today).year, number)


def current_term_year(today: Optional[date] = None) -> int:
    if today is None:
        today = datetime.now(org_timezone()).date()
    return term_start_for(today).year


def resolve_week(number: Optional[int] = None, term_year: Optional[int] = None) -> AcademicWeek:
    """Week selected by query parameters; defaults to the current week and term."""
    if number is None:
        if term_year is None:
            return current_academic_week()
        return get_academic_week(term_year, current_academic_week().number)
    return get_academic_week(term_year if term_year is not None else current_term_year(), number)

"""
Date/time helpers.

All helpers accept and return datetime objects (plain dates are promoted to
midnight). Nothing here touches timezones: aware and naive values must not
be mixed by the caller. Helpers that need "now" take an optional clock
callable, defaulting to datetime.now.
"""
from __future__ import annotations

import calendar
from datetime import date, datetime, time, timedelta
from typing import Any, Callable, Dict, List, Optional, Union

Clock = Callable[[], datetime]
DateLike = Union[date, datetime]

_SYBASE_FORMAT = "%b %d %Y %I:%M:%S:%f%p"
_OFFSETS = {"first": 0, "second": 1, "third": 2, "fourth": 3, "fifth": 4}
_WEEKDAY_NAMES = {name.lower(): i for i, name in enumerate(calendar.day_name)}


def _as_datetime(value: DateLike) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time.min)


def _now(clock: Optional[Clock]) -> datetime:
    return (clock or datetime.now)()


def _add_months(value: DateLike, months: int) -> datetime:
    dt = _as_datetime(value)
    month_index = dt.month - 1 + months
    year = dt.year + month_index // 12
    month = month_index % 12 + 1
    day = min(dt.day, calendar.monthrange(year, month)[1])
    return dt.replace(year=year, month=month, day=day)


def add_years(value: DateLike, years: int) -> datetime:
    return _add_months(value, 12 * years)


def subtract_years(value: DateLike, years: int) -> datetime:
    return _add_months(value, -12 * years)


def add_months(value: DateLike, months: int) -> datetime:
    return _add_months(value, months)


def subtract_months(value: DateLike, months: int) -> datetime:
    return _add_months(value, -months)


def add_weeks(value: DateLike, weeks: float) -> datetime:
    return _as_datetime(value) + timedelta(weeks=weeks)


def subtract_weeks(value: DateLike, weeks: float) -> datetime:
    return _as_datetime(value) - timedelta(weeks=weeks)


def add_days(value: DateLike, days: float) -> datetime:
    return _as_datetime(value) + timedelta(days=days)


def subtract_days(value: DateLike, days: float) -> datetime:
    return _as_datetime(value) - timedelta(days=days)


def add_hours(value: DateLike, hours: float) -> datetime:
    return _as_datetime(value) + timedelta(hours=hours)


def subtract_hours(value: DateLike, hours: float) -> datetime:
    return _as_datetime(value) - timedelta(hours=hours)


def add_minutes(value: DateLike, minutes: float) -> datetime:
    return _as_datetime(value) + timedelta(minutes=minutes)


def subtract_minutes(value: DateLike, minutes: float) -> datetime:
    return _as_datetime(value) - timedelta(minutes=minutes)


def add_seconds(value: DateLike, seconds: float) -> datetime:
    return _as_datetime(value) + timedelta(seconds=seconds)


def subtract_seconds(value: DateLike, seconds: float) -> datetime:
    return _as_datetime(value) - timedelta(seconds=seconds)


def start_of_day(value: DateLike) -> datetime:
    return datetime.combine(_as_datetime(value).date(), time.min, tzinfo=_as_datetime(value).tzinfo)


def end_of_day(value: DateLike) -> datetime:
    return datetime.combine(_as_datetime(value).date(), time.max, tzinfo=_as_datetime(value).tzinfo)


def end_of_month(value: DateLike) -> datetime:
    dt = _as_datetime(value)
    last_day = calendar.monthrange(dt.year, dt.month)[1]
    return end_of_day(dt.replace(day=last_day))


def ms_between(start: DateLike, end: DateLike) -> int:
    return int((_as_datetime(end) - _as_datetime(start)).total_seconds() * 1000)


def days_between(start: DateLike, end: DateLike) -> int:
    """Whole days from start to end, truncated toward zero."""
    return int((_as_datetime(end) - _as_datetime(start)) / timedelta(days=1))


def day_of_week(value: DateLike) -> int:
    """0 = Sunday ... 6 = Saturday."""
    return (_as_datetime(value).weekday() + 1) % 7


def date_only(value: DateLike) -> datetime:
    dt = _as_datetime(value)
    return datetime(dt.year, dt.month, dt.day)


def is_valid_date(value: Any) -> bool:
    return isinstance(value, date)


def is_active_now(activation_date: DateLike, expiry_date: Optional[DateLike] = None, clock: Optional[Clock] = None) -> bool:
    """Activated before now, and either no expiry or an expiry after now."""
    now = _now(clock)
    if ms_between(activation_date, now) <= 0:
        return False
    return not expiry_date or ms_between(expiry_date, now) < 0


def format_sybase_datetime(value: str) -> str:
    """
    Normalise a Sybase datetime string ("Jan 05 2015 10:30:00:000AM") to
    "YYYY-MM-DD HH:MM:SS". Strings that are already ISO dates, or that cannot
    be parsed, are returned unchanged.
    """
    try:
        datetime.fromisoformat(value)
        return value
    except ValueError:
        pass
    try:
        parsed = datetime.strptime(value.strip(), _SYBASE_FORMAT)
    except ValueError:
        return value
    return parsed.strftime("%Y-%m-%d %H:%M:%S")


def convert_date_with_template(value: str, template: str) -> datetime:
    """Parse value with a strptime template."""
    return datetime.strptime(value, template)


def are_dates_the_same(date1: DateLike, date2: DateLike) -> bool:
    return _as_datetime(date1).date() == _as_datetime(date2).date()


def get_intervals_from_date(value: DateLike) -> Dict[str, int]:
    dt = _as_datetime(value)
    return {
        "year": dt.year,
        "quarter": (dt.month - 1) // 3 + 1,
        "month": dt.month,
        "week": dt.isocalendar()[1],
        "month_day": dt.day,
        "day": day_of_week(dt),
        "hour": dt.hour,
        "minute": dt.minute,
    }


def get_date_of_iso_week(week: int, year: int) -> datetime:
    """Monday of the given ISO week."""
    return datetime.combine(date.fromisocalendar(year, week, 1), time.min)


def is_week_year_between_dates(week: int, year: int, start_date: DateLike, end_date: Optional[DateLike] = None) -> bool:
    """True if the whole ISO week lies after start_date and before end_date (if any)."""
    week_start = get_date_of_iso_week(week, year)
    week_end = week_start + timedelta(weeks=1)
    if ms_between(start_date, week_start) <= 0:
        return False
    return not end_date or ms_between(end_date, week_end) < 0


def get_duration(duration: int, value: DateLike) -> Dict[str, Any]:
    """
    Express a duration in days as whole months when it is a multiple of the
    length of value's month, otherwise as days.
    """
    dt = _as_datetime(value)
    days_in_month = calendar.monthrange(dt.year, dt.month)[1]
    if duration % days_in_month == 0:
        return {"time_unit": "months", "time": duration // days_in_month}
    return {"time_unit": "days", "time": duration}


def format_date(value: DateLike, fmt: Optional[str] = None) -> str:
    """strftime fmt, default "D/M/YYYY" without zero padding."""
    dt = _as_datetime(value)
    if not fmt:
        return f"{dt.day}/{dt.month}/{dt.year}"
    return dt.strftime(fmt)


def _start_of(dt: datetime, unit: str) -> datetime:
    dt = start_of_day(dt)
    if unit == "day":
        return dt
    if unit == "week":
        return dt - timedelta(days=dt.weekday())
    if unit == "month":
        return dt.replace(day=1)
    if unit == "year":
        return dt.replace(month=1, day=1)
    raise ValueError(f"Unsupported interval type: {unit!r}")


def _end_of(dt: datetime, unit: str) -> datetime:
    if unit == "day":
        return end_of_day(dt)
    if unit == "week":
        return end_of_day(_start_of(dt, "week") + timedelta(days=6))
    if unit == "month":
        return end_of_month(dt)
    if unit == "year":
        return end_of_day(dt.replace(month=12, day=31))
    raise ValueError(f"Unsupported interval type: {unit!r}")


def _shift(dt: datetime, unit: str, amount: int) -> datetime:
    if unit == "day":
        return dt + timedelta(days=amount)
    if unit == "week":
        return dt + timedelta(weeks=amount)
    if unit == "month":
        return _add_months(dt, amount)
    if unit == "year":
        return _add_months(dt, 12 * amount)
    raise ValueError(f"Unsupported interval type: {unit!r}")


def get_date_range_from_start_to_end(
    interval_type: str,
    interval: int,
    years_back: int = 0,
    value: Optional[DateLike] = None,
    clock: Optional[Clock] = None,
) -> Dict[str, Any]:
    """
    Start and end day of the interval_type period ("day", "week" (ISO, Monday
    first), "month", "year") that is `interval` periods away from value,
    moved back years_back years.
    """
    base = _shift(_as_datetime(value) if value is not None else _now(clock), interval_type, interval)
    start = _start_of(base, interval_type)
    end = _end_of(base, interval_type)
    return {
        "start_date": start_of_day(subtract_years(start, years_back or 0)),
        "end_date": start_of_day(subtract_years(end, years_back or 0)),
        "interval_type": interval_type,
    }


def get_date_in_target_week(original: DateLike, target_week: DateLike) -> datetime:
    """
    The date in target_week's week (Sunday first) that falls on the same
    weekday, at the same time of day, as original.
    """
    source = _as_datetime(original)
    target = _as_datetime(target_week)
    week_start = target - timedelta(days=day_of_week(target))
    moved = week_start + timedelta(days=day_of_week(source))
    return moved.replace(
        hour=source.hour,
        minute=source.minute,
        second=source.second,
        microsecond=source.microsecond,
    )


def _matches_day(dt: datetime, day: str) -> bool:
    if day == "day":
        return True
    if day == "weekday":
        return dt.weekday() < 5
    if day == "weekend":
        return dt.weekday() >= 5
    return dt.weekday() == _WEEKDAY_NAMES[day.lower()]


def get_all_days_of(value: DateLike, day: str, offset: Optional[str] = None) -> Union[List[datetime], Optional[datetime]]:
    """
    Dates from value to the end of its month that match day ("day", "weekday",
    "weekend" or a weekday name such as "friday").

    offset selects one of them: "first" ... "fifth" or "last". Without an
    offset, or with one that is not recognised, the full list is returned; an
    offset past the end gives None. An unknown day raises ValueError.
    """
    if day not in ("day", "weekday", "weekend") and day.lower() not in _WEEKDAY_NAMES:
        raise ValueError(
            f"Unsupported day {day!r}: expected 'day', 'weekday', 'weekend' or a weekday name"
        )

    current = _as_datetime(value)
    month_end = end_of_month(current)
    found: List[datetime] = []
    while current <= month_end:
        if _matches_day(current, day):
            found.append(current)
        current += timedelta(days=1)

    if offset == "last":
        return found[-1] if found else None
    if offset not in _OFFSETS:
        return found
    index = _OFFSETS[offset]
    return found[index] if index < len(found) else None

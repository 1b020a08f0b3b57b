from datetime import date, datetime

import pytest

from datautils.core import dates


def test_month_and_year_arithmetic_clamps_to_month_end():
    assert dates.add_months(datetime(2024, 1, 31), 1) == datetime(2024, 2, 29)
    assert dates.subtract_months(datetime(2024, 3, 31), 1) == datetime(2024, 2, 29)
    assert dates.add_months(datetime(2024, 11, 15), 3) == datetime(2025, 2, 15)
    assert dates.add_years(datetime(2024, 2, 29), 1) == datetime(2025, 2, 28)
    assert dates.subtract_years(date(2020, 6, 1), 2) == datetime(2018, 6, 1)


def test_small_interval_arithmetic():
    base = datetime(2024, 1, 1, 12, 0, 0)
    assert dates.add_days(base, 1) == datetime(2024, 1, 2, 12)
    assert dates.subtract_days(base, 1) == datetime(2023, 12, 31, 12)
    assert dates.add_weeks(base, 2) == datetime(2024, 1, 15, 12)
    assert dates.add_hours(base, 13) == datetime(2024, 1, 2, 1)
    assert dates.subtract_minutes(base, 30) == datetime(2024, 1, 1, 11, 30)
    assert dates.add_seconds(base, 61) == datetime(2024, 1, 1, 12, 1, 1)


def test_day_boundaries():
    dt = datetime(2024, 2, 10, 15, 45)
    assert dates.start_of_day(dt) == datetime(2024, 2, 10)
    assert dates.end_of_day(dt) == datetime(2024, 2, 10, 23, 59, 59, 999999)
    assert dates.end_of_month(dt) == datetime(2024, 2, 29, 23, 59, 59, 999999)
    assert dates.date_only(dt) == datetime(2024, 2, 10)


def test_differences():
    assert dates.days_between(datetime(2024, 1, 1), datetime(2024, 1, 3, 23)) == 2
    assert dates.days_between(datetime(2024, 1, 3, 23), datetime(2024, 1, 1)) == -2
    assert dates.ms_between(datetime(2024, 1, 1), datetime(2024, 1, 1, 0, 0, 1)) == 1000


def test_day_of_week_starts_on_sunday():
    assert dates.day_of_week(datetime(2024, 6, 2)) == 0  # Sunday
    assert dates.day_of_week(datetime(2024, 6, 3)) == 1
    assert dates.day_of_week(datetime(2024, 6, 8)) == 6


def test_is_active_now_with_fixed_clock():
    clock = lambda: datetime(2024, 6, 1)  # noqa: E731
    assert dates.is_active_now(datetime(2024, 1, 1), None, clock=clock) is True
    assert dates.is_active_now(datetime(2024, 1, 1), datetime(2024, 12, 1), clock=clock) is True
    assert dates.is_active_now(datetime(2024, 1, 1), datetime(2024, 5, 1), clock=clock) is False
    assert dates.is_active_now(datetime(2024, 7, 1), None, clock=clock) is False


def test_validity_and_parsing():
    assert dates.is_valid_date(datetime(2024, 1, 1)) is True
    assert dates.is_valid_date("2024-01-01") is False
    assert dates.format_sybase_datetime("Mar 07 2016 01:05:09:123PM") == "2016-03-07 13:05:09"
    assert dates.format_sybase_datetime("2016-03-07T10:00:00") == "2016-03-07T10:00:00"
    assert dates.format_sybase_datetime("garbage") == "garbage"
    assert dates.convert_date_with_template("07/03/2016", "%d/%m/%Y") == datetime(2016, 3, 7)


def test_same_day_and_intervals():
    assert dates.are_dates_the_same(datetime(2024, 1, 1, 1), datetime(2024, 1, 1, 23)) is True
    assert dates.are_dates_the_same(datetime(2024, 1, 1), datetime(2024, 1, 2)) is False
    intervals = dates.get_intervals_from_date(datetime(2024, 5, 15, 9, 30))
    assert intervals == {
        "year": 2024,
        "quarter": 2,
        "month": 5,
        "week": 20,
        "month_day": 15,
        "day": 3,
        "hour": 9,
        "minute": 30,
    }


def test_iso_week_helpers():
    assert dates.get_date_of_iso_week(1, 2024) == datetime(2024, 1, 1)
    assert dates.get_date_of_iso_week(1, 2021) == datetime(2021, 1, 4)
    assert dates.is_week_year_between_dates(10, 2024, datetime(2024, 1, 1), datetime(2024, 12, 31)) is True
    assert dates.is_week_year_between_dates(10, 2024, datetime(2024, 1, 1)) is True
    assert dates.is_week_year_between_dates(10, 2024, datetime(2024, 6, 1)) is False
    assert dates.is_week_year_between_dates(10, 2024, datetime(2024, 1, 1), datetime(2024, 3, 5)) is False


def test_get_duration():
    assert dates.get_duration(62, datetime(2024, 1, 10)) == {"time_unit": "months", "time": 2}
    assert dates.get_duration(29, datetime(2024, 2, 1)) == {"time_unit": "months", "time": 1}
    assert dates.get_duration(10, datetime(2024, 2, 1)) == {"time_unit": "days", "time": 10}


def test_format_date():
    assert dates.format_date(datetime(2024, 3, 7)) == "7/3/2024"
    assert dates.format_date(datetime(2024, 3, 7), "%Y-%m-%d") == "2024-03-07"


def test_get_date_range_from_start_to_end():
    base = datetime(2024, 5, 15, 10)
    month = dates.get_date_range_from_start_to_end("month", 1, value=base)
    assert month == {
        "start_date": datetime(2024, 6, 1),
        "end_date": datetime(2024, 6, 30),
        "interval_type": "month",
    }
    week = dates.get_date_range_from_start_to_end("week", 0, years_back=1, value=base)
    assert week["start_date"] == datetime(2023, 5, 13)
    assert week["end_date"] == datetime(2023, 5, 19)

    with pytest.raises(ValueError):
        dates.get_date_range_from_start_to_end("fortnight", 1, value=base)


def test_get_all_days_of():
    start = datetime(2024, 5, 1)
    fridays = dates.get_all_days_of(start, "friday")
    assert [d.day for d in fridays] == [3, 10, 17, 24, 31]
    assert dates.get_all_days_of(start, "friday", "second") == datetime(2024, 5, 10)
    assert dates.get_all_days_of(start, "weekend", "last") == datetime(2024, 5, 26)
    assert dates.get_all_days_of(datetime(2024, 5, 30), "weekday", "fifth") is None
    assert len(dates.get_all_days_of(start, "day")) == 31


def test_get_all_days_of_unknown_offset_and_day():
    start = datetime(2024, 5, 1)
    assert [d.day for d in dates.get_all_days_of(start, "Friday", "sixth")] == [3, 10, 17, 24, 31]
    with pytest.raises(ValueError, match="Unsupported day"):
        dates.get_all_days_of(start, "funday")


def test_get_date_in_target_week():
    wednesday = datetime(2024, 5, 15, 10, 30, 5)
    assert dates.get_date_in_target_week(wednesday, datetime(2024, 6, 3)) == datetime(2024, 6, 5, 10, 30, 5)
    # weeks start on Sunday
    assert dates.get_date_in_target_week(wednesday, datetime(2024, 6, 2, 23, 0)) == datetime(2024, 6, 5, 10, 30, 5)
    sunday = datetime(2024, 5, 19, 9, 0)
    assert dates.get_date_in_target_week(sunday, datetime(2024, 6, 8)) == datetime(2024, 6, 2, 9, 0)

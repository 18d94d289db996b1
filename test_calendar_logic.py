"""Tests for calendar boundaries, grids and ranges."""

import pytest

import calendar_logic as cl
from date_value import DateValue

SAMPLE_DATES = [
    DateValue(2024, 2, 15, 13, 30),
    DateValue(2024, 1, 1),
    DateValue(2023, 12, 31, 23, 59, 59, 999_999_999),
    DateValue(2024, 2, 29, 0, 0, 0, 1),
    DateValue(2021, 2, 1),
    DateValue(2025, 6, 30, 12),
    DateValue(1969, 12, 31, 6),
]

LAST_NS = dict(hour=23, minute=59, second=59, nanosecond=999_999_999)


# ------------------------------------------------------------------
# Boundaries
# ------------------------------------------------------------------
@pytest.mark.parametrize("value", SAMPLE_DATES)
def test_day_bounds_enclose_value(value):
    assert cl.start_of_day(value) <= value <= cl.end_of_day(value)
    assert cl.end_of_day(value).add("nanoseconds", 1) == \
        cl.start_of_day(value).add("days", 1)


def test_end_of_day_at_midnight_stays_on_same_day():
    assert cl.end_of_day(DateValue(2024, 5, 1)) == DateValue(2024, 5, 1, **LAST_NS)


def test_week_bounds_monday_to_sunday():
    assert cl.start_of_week(DateValue(2024, 3, 3, 18)) == DateValue(2024, 2, 26)
    assert cl.start_of_week(DateValue(2024, 2, 26, 9)) == DateValue(2024, 2, 26)
    assert cl.end_of_week(DateValue(2024, 2, 26)) == DateValue(2024, 3, 3, **LAST_NS)


def test_month_bounds_leap_february():
    feb = DateValue(2024, 2, 14, 8, 30)
    assert cl.start_of_month(feb) == DateValue(2024, 2, 1)
    assert cl.end_of_month(feb) == DateValue(2024, 2, 29, **LAST_NS)


def test_end_of_december_rolls_through_year():
    assert cl.end_of_month(DateValue(2023, 12, 10)) == DateValue(2023, 12, 31, **LAST_NS)
    assert cl.end_of_year(DateValue(2023, 6, 1)) == DateValue(2023, 12, 31, **LAST_NS)
    assert cl.start_of_year(DateValue(2023, 6, 1, 12)) == DateValue(2023, 1, 1)


def test_prev_and_next_month():
    assert cl.next_month(DateValue(2024, 12, 31)) == DateValue(2025, 1, 31)
    assert cl.prev_month(DateValue(2024, 3, 31)) == DateValue(2024, 2, 29)


# ------------------------------------------------------------------
# Week grid
# ------------------------------------------------------------------
@pytest.mark.parametrize("value", SAMPLE_DATES)
def test_week_rows_are_complete_consecutive_weeks(value):
    grid = cl.week_array(value)
    assert grid
    days = [day for row in grid for day in row]
    assert all(len(row) == 7 for row in grid)
    assert all(row[0].day_of_week == 1 for row in grid)
    for prev, cur in zip(days, days[1:]):
        assert cur == prev.add("days", 1)
    assert all(day == day.date_part() for day in days)
    assert cl.is_within_range(cl.start_of_month(value), (days[0], days[-1]))
    assert cl.is_same_day(days[-1], cl.end_of_week(cl.end_of_month(value)))


def test_february_2024_grid():
    grid = cl.week_array(DateValue(2024, 2, 10))
    assert len(grid) == 5
    assert grid[0][0] == DateValue(2024, 1, 29)
    assert grid[-1][-1] == DateValue(2024, 3, 3)


def test_month_aligned_to_weeks_has_no_padding():
    # February 2021 starts on a Monday and ends on a Sunday
    grid = cl.week_array(DateValue(2021, 2, 17))
    assert len(grid) == 4
    assert grid[0][0] == DateValue(2021, 2, 1)
    assert grid[-1][-1] == DateValue(2021, 2, 28)
    assert all(len(row) == 7 for row in grid)


def test_week_numbers_cross_year_boundary():
    grid = cl.week_array(DateValue(2024, 12, 5))
    assert len(grid) == 6
    assert cl.week_numbers(grid) == [48, 49, 50, 51, 52, 1]
    assert cl.week_numbers(cl.week_array(DateValue(2024, 2, 1))) == [5, 6, 7, 8, 9]


def test_weekday_dates():
    days = cl.weekday_dates(DateValue(2024, 5, 1, 10))
    assert days[0] == DateValue(2024, 4, 29)
    assert days[-1] == DateValue(2024, 5, 5)
    assert [d.day_of_week for d in days] == [1, 2, 3, 4, 5, 6, 7]


# ------------------------------------------------------------------
# Month and year lists
# ------------------------------------------------------------------
@pytest.mark.parametrize("value", SAMPLE_DATES)
def test_month_array_covers_the_year(value):
    months = cl.month_array(value)
    assert len(months) == 12
    assert [m.month for m in months] == list(range(1, 13))
    assert all(m.day == 1 and m == m.date_part() for m in months)
    assert all(m.year == value.year for m in months)


@pytest.mark.parametrize("value", [DateValue(2024, 1, 1), DateValue(2024, 12, 31, 23)])
def test_month_array_anchor_stays_in_year_at_both_ends(value):
    months = cl.month_array(value)
    assert months[0] == DateValue(2024, 1, 1)
    assert months[-1] == DateValue(2024, 12, 1)


@pytest.mark.parametrize("start,end", [
    (DateValue(2020, 6, 15, 9), DateValue(2024, 1, 2)),
    (DateValue(2023, 12, 31, 23), DateValue(2024, 1, 1)),
    (DateValue(2024, 3, 1), DateValue(2024, 11, 30)),
    (DateValue(1999, 1, 1), DateValue(2001, 1, 1)),
])
def test_year_range_is_inclusive(start, end):
    years = cl.year_range(start, end)
    assert len(years) == end.year - start.year + 1
    assert [y.year for y in years] == list(range(start.year, end.year + 1))
    assert all(y == DateValue(y.year, 1, 1) for y in years)


def test_year_range_reversed_is_empty():
    assert cl.year_range(DateValue(2025, 1, 1), DateValue(2024, 12, 31)) == []


# ------------------------------------------------------------------
# Comparisons
# ------------------------------------------------------------------
def test_is_same_hour():
    assert cl.is_same_hour(DateValue(2024, 5, 1, 10, 45), DateValue(2024, 5, 1, 10, 5))
    assert not cl.is_same_hour(DateValue(2024, 5, 1, 10, 45), DateValue(2024, 5, 1, 11, 5))


def test_same_granularity_checks():
    morning = DateValue(2024, 5, 1, 8)
    evening = DateValue(2024, 5, 1, 20)
    assert cl.is_same_day(morning, evening)
    assert cl.is_same_month(morning, DateValue(2024, 5, 31))
    assert not cl.is_same_month(morning, DateValue(2023, 5, 1))
    assert cl.is_same_year(morning, DateValue(2024, 12, 31))
    assert not cl.is_before_day(morning, evening)
    assert not cl.is_after_day(evening, morning)
    assert cl.is_before(morning, evening)
    assert cl.is_after(evening, morning)
    assert cl.is_before_day(morning, DateValue(2024, 5, 2))
    assert cl.is_after_day(DateValue(2024, 5, 2), evening)
    assert cl.is_before_year(morning, DateValue(2025, 1, 1))
    assert cl.is_after_year(DateValue(2025, 1, 1), morning)
    assert not cl.is_before_year(morning, DateValue(2024, 1, 1))


def test_is_within_range_is_closed_interval():
    start = DateValue(2024, 5, 1)
    end = DateValue(2024, 5, 31)
    assert cl.is_within_range(start, (start, end))
    assert cl.is_within_range(end, (start, end))
    assert cl.is_within_range(DateValue(2024, 5, 15, 12), (start, end))
    assert not cl.is_within_range(start.subtract("nanoseconds", 1), (start, end))
    assert not cl.is_within_range(end.add("nanoseconds", 1), (start, end))


def test_is_within_reversed_range_is_false():
    start = DateValue(2024, 5, 31)
    end = DateValue(2024, 5, 1)
    assert not cl.is_within_range(DateValue(2024, 5, 15), (start, end))
    assert not cl.is_within_range(start, (start, end))


def test_selection_summary():
    first = DateValue(2024, 5, 1, 15)
    last = DateValue(2024, 5, 9, 8)
    assert cl.selection_summary(first, last) == "9 days  (1 week, 2 days)"
    assert cl.selection_summary(last, first) == "9 days  (1 week, 2 days)"
    assert cl.selection_summary(first, first) == "1 day  (1 day)"
    assert cl.selection_summary(DateValue(2024, 2, 26), DateValue(2024, 3, 10)) == \
        "14 days  (2 weeks)"

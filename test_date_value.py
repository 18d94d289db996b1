"""Tests for the DateValue arithmetic primitives."""

from datetime import date, datetime

import pytest

from date_value import DateValue


def test_invalid_fields_raise():
    with pytest.raises(ValueError):
        DateValue(2023, 2, 29)
    with pytest.raises(ValueError):
        DateValue(2024, 13, 1)
    with pytest.raises(ValueError):
        DateValue(2024, 1, 1, nanosecond=1_000_000_000)


def test_values_are_immutable():
    value = DateValue(2024, 5, 1)
    with pytest.raises(AttributeError):
        value.day = 2


def test_ordering_is_full_timestamp():
    early = DateValue(2024, 5, 1, 10, 0, 0, 1)
    late = DateValue(2024, 5, 1, 10, 0, 0, 2)
    assert early < late
    assert DateValue.compare(early, late) == -1
    assert DateValue.compare(late, early) == 1
    assert DateValue.compare(early, DateValue(2024, 5, 1, 10, 0, 0, 1)) == 0


def test_equal_values_hash_alike():
    assert len({DateValue(2024, 5, 1), DateValue.from_iso("2024-05-01"), DateValue(2024, 5, 2)}) == 2


def test_add_months_constrains_day():
    assert DateValue(2024, 1, 31).add("months", 1) == DateValue(2024, 2, 29)
    assert DateValue(2023, 1, 31).add("months", 1) == DateValue(2023, 2, 28)
    assert DateValue(2024, 3, 31, 8).subtract("months", 1) == DateValue(2024, 2, 29, 8)


def test_add_years_from_leap_day():
    assert DateValue(2024, 2, 29).add("years", 1) == DateValue(2025, 2, 28)


def test_month_overflow_rolls_year():
    assert DateValue(2023, 12, 15).add("months", 1) == DateValue(2024, 1, 15)


def test_fixed_units():
    assert DateValue(2024, 1, 1).subtract("days", 1) == DateValue(2023, 12, 31)
    assert DateValue(2024, 3, 1).subtract("nanoseconds", 1) == \
        DateValue(2024, 2, 29, 23, 59, 59, 999_999_999)
    assert DateValue(1969, 12, 31, 23).add("hours", 2) == DateValue(1970, 1, 1, 1)
    assert DateValue(2024, 5, 1).add("weeks", 2) == DateValue(2024, 5, 15)
    assert DateValue(2024, 5, 1).add("second", 90) == DateValue(2024, 5, 1, 0, 1, 30)


def test_add_rejects_fractions_and_unknown_units():
    with pytest.raises(ValueError):
        DateValue(2024, 5, 1).add("days", 1.5)
    with pytest.raises(ValueError):
        DateValue(2024, 5, 1).add("fortnights", 1)


@pytest.mark.parametrize("mode,expected", [
    ("floor", DateValue(2024, 5, 1, 10)),
    ("trunc", DateValue(2024, 5, 1, 10)),
    ("ceil", DateValue(2024, 5, 1, 11)),
    ("half_expand", DateValue(2024, 5, 1, 11)),
])
def test_round_to_hour(mode, expected):
    assert DateValue(2024, 5, 1, 10, 45).round("hour", mode) == expected


def test_round_half_expand_boundary():
    assert DateValue(2024, 5, 1, 10, 29, 59).round("hour") == DateValue(2024, 5, 1, 10)
    assert DateValue(2024, 5, 1, 10, 30).round("hour") == DateValue(2024, 5, 1, 11)


def test_round_exact_value_is_unchanged():
    midnight = DateValue(2024, 5, 1)
    assert midnight.round("day", "ceil") is midnight


def test_round_ceil_to_day_crosses_month():
    assert DateValue(2024, 2, 29, 0, 0, 0, 1).round("day", "ceil") == DateValue(2024, 3, 1)


def test_round_rejects_calendar_units_and_unknown_modes():
    with pytest.raises(ValueError):
        DateValue(2024, 5, 1).round("month", "floor")
    with pytest.raises(ValueError):
        DateValue(2024, 5, 1).round("hour", "sideways")


def test_until_fixed_units():
    start = DateValue(2024, 1, 1)
    assert start.until(DateValue(2024, 1, 1, 0, 0, 1)) == 1_000_000_000
    assert start.until(DateValue(2024, 1, 3), "days") == 2
    assert start.until(DateValue(2024, 1, 1, 12), "days") == pytest.approx(0.5)


def test_until_months_whole_and_fractional():
    assert DateValue(2024, 1, 1).until(DateValue(2024, 4, 1), "months") == 3
    assert DateValue(2024, 4, 1).until(DateValue(2024, 1, 1), "months") == -3
    # Feb 15 -> Mar 15 2024 spans 29 days, 14 of them elapsed
    assert DateValue(2024, 1, 15).until(DateValue(2024, 2, 29), "months") == \
        pytest.approx(1 + 14 / 29)


def test_until_years():
    assert DateValue(2020, 1, 1).until(DateValue(2023, 7, 2), "years") == \
        pytest.approx(3 + 182 / 365)
    assert DateValue(2024, 6, 15).until(DateValue(2024, 6, 15), "years") == 0


def test_replace_constrains_day_when_month_changes():
    assert DateValue(2024, 1, 31).replace(month=2) == DateValue(2024, 2, 29)
    assert DateValue(2024, 2, 29).replace(year=2023) == DateValue(2023, 2, 28)
    with pytest.raises(ValueError):
        DateValue(2024, 1, 31).replace(month=4, day=31)
    with pytest.raises(ValueError):
        DateValue(2024, 1, 31).replace(month=13)


def test_day_of_week_is_iso():
    assert DateValue(2024, 1, 29).day_of_week == 1
    assert DateValue(2024, 2, 1).day_of_week == 4
    assert DateValue(2024, 3, 3).day_of_week == 7


def test_calendar_fields():
    assert DateValue(2024, 2, 10).days_in_month == 29
    assert DateValue(2023, 2, 10).days_in_month == 28
    assert DateValue(2024, 12, 31).days_in_month == 31


def test_from_iso():
    assert DateValue.from_iso("2024-02-29T23:59:59.999999999") == \
        DateValue(2024, 2, 29, 23, 59, 59, 999_999_999)
    assert DateValue.from_iso("2024-02-29") == DateValue(2024, 2, 29)
    assert DateValue.from_iso(" 2024-05-01T10:45:00 ") == DateValue(2024, 5, 1, 10, 45)
    assert DateValue.from_iso("2024-05-01T10:45:00.5").nanosecond == 500_000_000
    with pytest.raises(ValueError):
        DateValue.from_iso("May 1st")


def test_isoformat():
    assert DateValue(2024, 5, 1, 10, 45).isoformat() == "2024-05-01T10:45:00"
    assert str(DateValue(2024, 2, 29)) == "2024-02-29T00:00:00"
    assert DateValue.from_iso(DateValue(2024, 5, 1, 0, 0, 0, 120_000).isoformat()) == \
        DateValue(2024, 5, 1, 0, 0, 0, 120_000)


def test_stdlib_conversion():
    assert DateValue.from_datetime(date(2024, 5, 1)) == DateValue(2024, 5, 1)
    assert DateValue.from_datetime(datetime(2024, 5, 1, 10, 0, 0, 5)) == \
        DateValue(2024, 5, 1, 10, 0, 0, 5_000)
    assert DateValue(2024, 5, 1, 10, 0, 0, 1_999).to_datetime() == \
        datetime(2024, 5, 1, 10, 0, 0, 1)

"""Pure calendar calculations — no UI dependencies.

Weeks start on Monday (ISO convention). Grids and ranges are always built by
stepping a cursor from an anchor, so month lengths and leap years are left
entirely to ``DateValue`` arithmetic.
"""

import logging

from date_value import DateValue

logger = logging.getLogger(__name__)

DAYS_PER_WEEK = 7
MONTHS_PER_YEAR = 12


# ------------------------------------------------------------------
# Boundaries
# ------------------------------------------------------------------
def start_of_day(value: DateValue) -> DateValue:
    return value.round("day", "floor")


def end_of_day(value: DateValue) -> DateValue:
    """Last nanosecond before the next midnight."""
    return start_of_day(value).add("days", 1).subtract("nanoseconds", 1)


def start_of_week(value: DateValue) -> DateValue:
    """Monday of *value*'s week at midnight."""
    day = value.date_part()
    return day.subtract("days", day.day_of_week - 1)


def end_of_week(value: DateValue) -> DateValue:
    """Last nanosecond of Sunday in *value*'s week."""
    day = value.date_part()
    return day.add("days", DAYS_PER_WEEK - (day.day_of_week - 1)).subtract("nanoseconds", 1)


def start_of_month(value: DateValue) -> DateValue:
    return value.date_part().replace(day=1)


def end_of_month(value: DateValue) -> DateValue:
    # December rolls over into January of the next year
    return start_of_month(value).add("months", 1).subtract("nanoseconds", 1)


def start_of_year(value: DateValue) -> DateValue:
    return value.date_part().replace(month=1, day=1)


def end_of_year(value: DateValue) -> DateValue:
    return start_of_year(value).add("years", 1).subtract("nanoseconds", 1)


def prev_month(value: DateValue) -> DateValue:
    """Same moment one month earlier."""
    return value.subtract("months", 1)


def next_month(value: DateValue) -> DateValue:
    """Same moment one month later."""
    return value.add("months", 1)


# ------------------------------------------------------------------
# Grids and ranges
# ------------------------------------------------------------------
def month_array(value: DateValue) -> list[DateValue]:
    """Return the first instant of each month in *value*'s year.

    The anchor is always January 1 of ``value.year``, so a date on either
    end of a year yields the months of that same year.
    """
    months = [start_of_year(value)]
    while len(months) < MONTHS_PER_YEAR:
        months.append(next_month(months[-1]))
    return months


def week_array(value: DateValue) -> list[list[DateValue]]:
    """Return the display weeks of *value*'s month.

    Each row holds 7 consecutive midnights, Monday to Sunday, padded with
    days from the adjacent months so that every row is complete.
    """
    start = start_of_week(start_of_month(value))
    end = end_of_week(end_of_month(value))

    grid: list[list[DateValue]] = []
    row: list[DateValue] = []
    current = start
    while current < end:
        row.append(current)
        if len(row) == DAYS_PER_WEEK:
            grid.append(row)
            row = []
        current = current.add("days", 1)

    logger.debug("Week grid for %04d-%02d: %d rows from %s",
                 value.year, value.month, len(grid), start)
    return grid


def weekday_dates(value: DateValue) -> list[DateValue]:
    """Return the seven midnights of *value*'s week, Monday first."""
    end = end_of_week(value)
    days: list[DateValue] = []
    current = start_of_week(value)
    while current < end:
        days.append(current)
        current = current.add("days", 1)
    return days


def week_numbers(grid: list[list[DateValue]]) -> list[int]:
    """Return the ISO week number of each grid row."""
    return [row[0].to_datetime().isocalendar()[1] for row in grid]


def year_range(start: DateValue, end: DateValue) -> list[DateValue]:
    """Return January 1 of every year from ``start.year`` to ``end.year``.

    Empty when *start* lies in a later year than *end*.
    """
    if start.year > end.year:
        return []

    years: list[DateValue] = []
    current = start_of_year(start)
    while True:
        years.append(current)
        if current.year >= end.year:
            break
        current = current.add("years", 1)
    return years


# ------------------------------------------------------------------
# Comparisons
# ------------------------------------------------------------------
def is_same_day(value: DateValue, comparing: DateValue) -> bool:
    return start_of_day(value) == start_of_day(comparing)


def is_same_month(value: DateValue, comparing: DateValue) -> bool:
    return start_of_month(value) == start_of_month(comparing)


def is_same_year(value: DateValue, comparing: DateValue) -> bool:
    return value.year == comparing.year


def is_same_hour(value: DateValue, comparing: DateValue) -> bool:
    return value.round("hour", "floor") == comparing.round("hour", "floor")


def is_before(value: DateValue, comparing: DateValue) -> bool:
    return DateValue.compare(value, comparing) < 0


def is_after(value: DateValue, comparing: DateValue) -> bool:
    return DateValue.compare(value, comparing) > 0


def is_before_day(value: DateValue, comparing: DateValue) -> bool:
    return is_before(start_of_day(value), start_of_day(comparing))


def is_after_day(value: DateValue, comparing: DateValue) -> bool:
    return is_after(start_of_day(value), start_of_day(comparing))


def is_before_year(value: DateValue, comparing: DateValue) -> bool:
    return value.year < comparing.year


def is_after_year(value: DateValue, comparing: DateValue) -> bool:
    return value.year > comparing.year


def is_within_range(value: DateValue, date_range: tuple[DateValue, DateValue]) -> bool:
    """True if *value* lies in the closed interval ``[start, end]``.

    A reversed range (start after end) contains nothing.
    """
    start, end = date_range
    if is_after(start, end):
        return False
    return (value == start or value == end
            or (is_after(value, start) and is_before(value, end)))


# ------------------------------------------------------------------
# Selection
# ------------------------------------------------------------------
def selection_summary(first: DateValue, last: DateValue) -> str:
    """Describe the inclusive day span between two dates, e.g. "9 days (1 week, 2 days)"."""
    lo, hi = (first, last) if not is_after(first, last) else (last, first)
    total_days = int(start_of_day(lo).until(start_of_day(hi), "days")) + 1
    full_weeks, rem_days = divmod(total_days, DAYS_PER_WEEK)

    parts: list[str] = []
    if full_weeks:
        parts.append(f"{full_weeks} week{'s' if full_weeks != 1 else ''}")
    if rem_days:
        parts.append(f"{rem_days} day{'s' if rem_days != 1 else ''}")

    return f"{total_days} day{'s' if total_days != 1 else ''}  ({', '.join(parts)})"

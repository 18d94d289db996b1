"""Date adapter exposing calendar operations to picker UIs.

Callers only ever hand ``DateValue`` objects (or ``None`` for "no date
selected") back to this adapter; they never do arithmetic themselves.
"""

import functools
import logging
from datetime import date, datetime
from typing import Callable, Mapping

import calendar_logic
from date_formats import (
    EnglishFormatter,
    LocaleFormatter,
    format_helper_text,
    merge_formats,
)
from date_value import DateValue

logger = logging.getLogger(__name__)

DEFAULT_LOCALE = "en-US"

_UNSET = object()


def _none_passthrough(method):
    """Return ``None`` without calling *method* if any argument is ``None``."""
    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        if any(arg is None for arg in (*args, *kwargs.values())):
            return None
        return method(self, *args, **kwargs)
    return wrapper


class DateUtils:
    """Function table over ``DateValue`` for a calendar/picker consumer.

    Configuration is fixed at construction: the locale code, the format table
    (defaults merged with *formats*), the locale *formatter* and the *now*
    provider used wherever the current moment is needed.
    """

    lib = "date_value"

    def __init__(self, locale: str | None = None,
                 formats: Mapping[str, str] | None = None,
                 formatter: LocaleFormatter | None = None,
                 now: Callable[[], DateValue] | None = None) -> None:
        self.locale = locale or DEFAULT_LOCALE
        self.formats = merge_formats(formats)
        self._formatter = formatter or EnglishFormatter()
        self._now = now or DateValue.now
        logger.debug("DateUtils created (locale=%s, %d format overrides)",
                     self.locale, len(formats or {}))

    # ------------------------------------------------------------------
    # Construction / conversion
    # ------------------------------------------------------------------
    def date(self, value=_UNSET) -> DateValue | None:
        """No argument means now, ``None`` stays ``None``.

        Accepts a ``DateValue``, a stdlib ``datetime``/``date`` or an ISO 8601
        string.
        """
        if value is _UNSET:
            return self._now()
        if value is None:
            return None
        if isinstance(value, DateValue):
            return value
        if isinstance(value, (datetime, date)):
            return DateValue.from_datetime(value)
        if isinstance(value, str):
            return DateValue.from_iso(value)
        raise TypeError(f"Cannot build a date from {type(value).__name__}")

    @_none_passthrough
    def to_py_datetime(self, value: DateValue) -> datetime:
        return value.to_datetime()

    def parse(self, value: str, format_string: str) -> DateValue | None:
        if value == "":
            return None
        return self._formatter.parse(value, format_string)

    def is_12_hour_cycle_in_current_locale(self) -> bool:
        return bool(self._formatter.hour12)

    def get_format_helper_text(self, format_string: str) -> str:
        return format_helper_text(format_string)

    def get_current_locale_code(self) -> str:
        return self.locale or DEFAULT_LOCALE

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------
    def add_seconds(self, value: DateValue, count: int) -> DateValue:
        return value.add("seconds", count)

    def add_minutes(self, value: DateValue, count: int) -> DateValue:
        return value.add("minutes", count)

    def add_hours(self, value: DateValue, count: int) -> DateValue:
        return value.add("hours", count)

    def add_days(self, value: DateValue, count: int) -> DateValue:
        return value.add("days", count)

    def add_weeks(self, value: DateValue, count: int) -> DateValue:
        return value.add("weeks", count)

    def add_months(self, value: DateValue, count: int) -> DateValue:
        return value.add("months", count)

    def add_years(self, value: DateValue, count: int) -> DateValue:
        return value.add("years", count)

    def get_diff(self, value: DateValue, comparing, unit: str | None = None) -> float:
        """Duration from *value* to *comparing*, in nanoseconds by default.

        "quarters" is fractional calendar months divided by three.
        """
        comparing = self.date(comparing)
        if unit is None:
            return value.until(comparing, "nanoseconds")
        if unit == "quarters":
            return value.until(comparing, "months") / 3
        return value.until(comparing, unit)

    # ------------------------------------------------------------------
    # Validation and comparison
    # ------------------------------------------------------------------
    def is_valid(self, value) -> bool:
        if value is None:
            return False
        if isinstance(value, DateValue):
            return True
        try:
            self.date(value)
        except (TypeError, ValueError):
            return False
        return True

    def is_null(self, value: DateValue | None) -> bool:
        return value is None

    def is_equal(self, value, comparing) -> bool:
        if value is None and comparing is None:
            return True
        if value is None or comparing is None:
            return False
        return self.date(value) == self.date(comparing)

    @_none_passthrough
    def is_same_day(self, value: DateValue, comparing: DateValue) -> bool:
        return calendar_logic.is_same_day(value, comparing)

    @_none_passthrough
    def is_same_month(self, value: DateValue, comparing: DateValue) -> bool:
        return calendar_logic.is_same_month(value, comparing)

    @_none_passthrough
    def is_same_year(self, value: DateValue, comparing: DateValue) -> bool:
        return calendar_logic.is_same_year(value, comparing)

    @_none_passthrough
    def is_same_hour(self, value: DateValue, comparing: DateValue) -> bool:
        return calendar_logic.is_same_hour(value, comparing)

    @_none_passthrough
    def is_after(self, value: DateValue, comparing: DateValue) -> bool:
        return calendar_logic.is_after(value, comparing)

    @_none_passthrough
    def is_before(self, value: DateValue, comparing: DateValue) -> bool:
        return calendar_logic.is_before(value, comparing)

    @_none_passthrough
    def is_before_day(self, value: DateValue, comparing: DateValue) -> bool:
        return calendar_logic.is_before_day(value, comparing)

    @_none_passthrough
    def is_after_day(self, value: DateValue, comparing: DateValue) -> bool:
        return calendar_logic.is_after_day(value, comparing)

    @_none_passthrough
    def is_before_year(self, value: DateValue, comparing: DateValue) -> bool:
        return calendar_logic.is_before_year(value, comparing)

    @_none_passthrough
    def is_after_year(self, value: DateValue, comparing: DateValue) -> bool:
        return calendar_logic.is_after_year(value, comparing)

    def is_within_range(self, value: DateValue | None,
                        date_range: tuple[DateValue, DateValue]) -> bool | None:
        start, end = date_range
        if value is None or start is None or end is None:
            return None
        return calendar_logic.is_within_range(value, (start, end))

    # ------------------------------------------------------------------
    # Boundaries
    # ------------------------------------------------------------------
    @_none_passthrough
    def start_of_day(self, value: DateValue) -> DateValue:
        return calendar_logic.start_of_day(value)

    @_none_passthrough
    def end_of_day(self, value: DateValue) -> DateValue:
        return calendar_logic.end_of_day(value)

    @_none_passthrough
    def start_of_week(self, value: DateValue) -> DateValue:
        return calendar_logic.start_of_week(value)

    @_none_passthrough
    def end_of_week(self, value: DateValue) -> DateValue:
        return calendar_logic.end_of_week(value)

    @_none_passthrough
    def start_of_month(self, value: DateValue) -> DateValue:
        return calendar_logic.start_of_month(value)

    @_none_passthrough
    def end_of_month(self, value: DateValue) -> DateValue:
        return calendar_logic.end_of_month(value)

    @_none_passthrough
    def start_of_year(self, value: DateValue) -> DateValue:
        return calendar_logic.start_of_year(value)

    @_none_passthrough
    def end_of_year(self, value: DateValue) -> DateValue:
        return calendar_logic.end_of_year(value)

    # ------------------------------------------------------------------
    # Formatting
    # ------------------------------------------------------------------
    @_none_passthrough
    def format(self, value: DateValue, format_key: str) -> str:
        return self.format_by_string(value, self.formats[format_key])

    @_none_passthrough
    def format_by_string(self, value: DateValue, format_string: str) -> str:
        return self._formatter.format(value, format_string)

    def format_number(self, number_to_format: str) -> str:
        return self._formatter.format_number(number_to_format)

    def get_meridiem_text(self, ampm: str) -> str:
        return self._formatter.meridiem(ampm)

    # ------------------------------------------------------------------
    # Field access
    # ------------------------------------------------------------------
    def get_hours(self, value: DateValue) -> int:
        return value.hour

    def set_hours(self, value: DateValue, count: int) -> DateValue:
        return value.replace(hour=count)

    def get_minutes(self, value: DateValue) -> int:
        return value.minute

    def set_minutes(self, value: DateValue, count: int) -> DateValue:
        return value.replace(minute=count)

    def get_seconds(self, value: DateValue) -> int:
        return value.second

    def set_seconds(self, value: DateValue, count: int) -> DateValue:
        return value.replace(second=count)

    def get_month(self, value: DateValue) -> int:
        return value.month

    def set_month(self, value: DateValue, count: int) -> DateValue:
        return value.replace(month=count)

    def get_year(self, value: DateValue) -> int:
        return value.year

    def set_year(self, value: DateValue, year: int) -> DateValue:
        return value.replace(year=year)

    def get_days_in_month(self, value: DateValue) -> int:
        return value.days_in_month

    def merge_date_and_time(self, date_value: DateValue, time_value: DateValue) -> DateValue:
        return date_value.replace(hour=time_value.hour, minute=time_value.minute,
                                  second=time_value.second)

    # ------------------------------------------------------------------
    # Calendar grids
    # ------------------------------------------------------------------
    def get_next_month(self, value: DateValue) -> DateValue:
        return calendar_logic.next_month(value)

    def get_previous_month(self, value: DateValue) -> DateValue:
        return calendar_logic.prev_month(value)

    def get_month_array(self, value: DateValue) -> list[DateValue]:
        return calendar_logic.month_array(value)

    def get_weekdays(self) -> list[str]:
        """Short weekday names, Monday first."""
        return [self.format(day, "weekdayShort")
                for day in calendar_logic.weekday_dates(self._now())]

    def get_week_array(self, value: DateValue) -> list[list[DateValue]]:
        return calendar_logic.week_array(value)

    def get_week_numbers(self, value: DateValue) -> list[int]:
        return calendar_logic.week_numbers(calendar_logic.week_array(value))

    def get_year_range(self, start: DateValue, end: DateValue) -> list[DateValue]:
        return calendar_logic.year_range(start, end)

    @_none_passthrough
    def selection_summary(self, first: DateValue, last: DateValue) -> str:
        return calendar_logic.selection_summary(first, last)

"""Immutable civil date-time value with nanosecond precision.

``DateValue`` wraps ``whenever.PlainDateTime``: a wall-clock timestamp with no
time zone attached. Calendar units (days, weeks, months, years) are shifted by
``whenever`` itself, which constrains the day to the target month's length
(Jan 31 + 1 month -> Feb 28/29). Exact units are applied to the time of day
and carried over into whole days, so no DST assumption is ever involved.
"""

from __future__ import annotations

import calendar
import functools
from datetime import date, datetime

from whenever import Date, PlainDateTime, Time

NS_PER_SECOND = 1_000_000_000
NS_PER_MINUTE = 60 * NS_PER_SECOND
NS_PER_HOUR = 60 * NS_PER_MINUTE
NS_PER_DAY = 24 * NS_PER_HOUR

# Exact units in nanoseconds, keyed by singular unit name
_EXACT_UNITS: dict[str, int] = {
    "nanosecond": 1,
    "microsecond": 1_000,
    "millisecond": 1_000_000,
    "second": NS_PER_SECOND,
    "minute": NS_PER_MINUTE,
    "hour": NS_PER_HOUR,
}
_CALENDAR_UNITS = ("day", "week", "month", "year")
_MONTHS_PER_UNIT: dict[str, int] = {"month": 1, "year": 12}
_DAYS_PER_UNIT: dict[str, int] = {"day": 1, "week": 7}

_ROUNDING_MODES = ("floor", "ceil", "trunc", "half_expand")


def normalize_unit(unit: str) -> str:
    """Return the singular unit name for *unit* ("days" -> "day")."""
    name = unit.lower()
    if name.endswith("s"):
        name = name[:-1]
    if name not in _EXACT_UNITS and name not in _CALENDAR_UNITS:
        raise ValueError(f"Unknown time unit: {unit!r}")
    return name


@functools.total_ordering
class DateValue:
    """A wall-clock timestamp.

    Equality and ordering compare the full timestamp. ``day_of_week``
    follows ISO numbering (1=Monday).
    """

    __slots__ = ("_dt",)

    def __init__(self, year: int, month: int, day: int, hour: int = 0,
                 minute: int = 0, second: int = 0, nanosecond: int = 0) -> None:
        if not 0 <= nanosecond < NS_PER_SECOND:
            raise ValueError(
                f"nanosecond must be in 0..{NS_PER_SECOND - 1}, got {nanosecond}"
            )
        self._dt = PlainDateTime(year, month, day, hour, minute, second,
                                 nanosecond=nanosecond)

    @classmethod
    def _wrap(cls, dt: PlainDateTime) -> DateValue:
        value = cls.__new__(cls)
        value._dt = dt
        return value

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------
    @classmethod
    def from_datetime(cls, value: date) -> DateValue:
        """Build from a naive stdlib ``datetime`` or a ``date`` (midnight)."""
        if isinstance(value, datetime):
            return cls._wrap(PlainDateTime.from_py_datetime(value))
        return cls(value.year, value.month, value.day)

    @classmethod
    def from_iso(cls, text: str) -> DateValue:
        """Parse ``YYYY-MM-DDTHH:MM:SS[.fffffffff]`` or a bare ``YYYY-MM-DD``."""
        text = text.strip()
        try:
            return cls._wrap(PlainDateTime.parse_common_iso(text))
        except ValueError:
            return cls._wrap(Date.parse_common_iso(text).at(Time()))

    @classmethod
    def now(cls) -> DateValue:
        """Current local civil time."""
        return cls.from_datetime(datetime.now())

    # ------------------------------------------------------------------
    # Fields
    # ------------------------------------------------------------------
    @property
    def year(self) -> int:
        return self._dt.year

    @property
    def month(self) -> int:
        return self._dt.month

    @property
    def day(self) -> int:
        return self._dt.day

    @property
    def hour(self) -> int:
        return self._dt.hour

    @property
    def minute(self) -> int:
        return self._dt.minute

    @property
    def second(self) -> int:
        return self._dt.second

    @property
    def nanosecond(self) -> int:
        return self._dt.nanosecond

    @property
    def day_of_week(self) -> int:
        return self._dt.date().day_of_week().value

    @property
    def days_in_month(self) -> int:
        return calendar.monthrange(self.year, self.month)[1]

    def replace(self, **fields: int) -> DateValue:
        """Return a copy with *fields* overridden.

        When year or month change and no day is given, the day is
        constrained to the length of the resulting month.
        """
        if "day" not in fields and ("year" in fields or "month" in fields):
            year = fields.get("year", self.year)
            month = fields.get("month", self.month)
            if 1 <= month <= 12:
                fields["day"] = min(self.day, calendar.monthrange(year, month)[1])
        return DateValue._wrap(self._dt.replace(**fields))

    def date_part(self) -> DateValue:
        """Midnight of the same calendar day."""
        return DateValue._wrap(self._dt.date().at(Time()))

    def to_datetime(self) -> datetime:
        """Stdlib ``datetime``; precision below one microsecond is dropped."""
        return self._dt.py_datetime()

    def isoformat(self) -> str:
        return self._dt.format_common_iso()

    def __str__(self) -> str:
        return self.isoformat()

    def __repr__(self) -> str:
        return f"DateValue({self.isoformat()})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DateValue):
            return NotImplemented
        return self._dt == other._dt

    def __lt__(self, other: DateValue) -> bool:
        if not isinstance(other, DateValue):
            return NotImplemented
        return self._dt < other._dt

    def __hash__(self) -> int:
        return hash(self._dt)

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------
    def _time_of_day_ns(self) -> int:
        return (self.hour * NS_PER_HOUR + self.minute * NS_PER_MINUTE
                + self.second * NS_PER_SECOND + self.nanosecond)

    def _at_time_of_day(self, nanos: int) -> DateValue:
        """Midnight of this day shifted by *nanos*, carrying whole days."""
        days, nanos = divmod(nanos, NS_PER_DAY)
        hour, nanos = divmod(nanos, NS_PER_HOUR)
        minute, nanos = divmod(nanos, NS_PER_MINUTE)
        second, nanos = divmod(nanos, NS_PER_SECOND)
        time = Time(hour, minute, second, nanosecond=nanos)
        return DateValue._wrap(self._dt.date().add(days=days).at(time))

    def add(self, unit: str, amount: int) -> DateValue:
        """Shift by *amount* whole *unit*s (negative amounts go back)."""
        if int(amount) != amount:
            raise ValueError(f"amount must be a whole number, got {amount!r}")
        amount = int(amount)
        name = normalize_unit(unit)
        if name in _MONTHS_PER_UNIT:
            return DateValue._wrap(self._dt.add(months=amount * _MONTHS_PER_UNIT[name]))
        if name in _DAYS_PER_UNIT:
            return DateValue._wrap(self._dt.add(days=amount * _DAYS_PER_UNIT[name]))
        return self._at_time_of_day(self._time_of_day_ns() + amount * _EXACT_UNITS[name])

    def subtract(self, unit: str, amount: int) -> DateValue:
        return self.add(unit, -amount)

    def round(self, unit: str = "day", mode: str = "half_expand") -> DateValue:
        """Round the time of day to a multiple of *unit* (at most a day).

        Civil time of day is never negative, so ``trunc`` behaves like ``floor``.
        """
        name = normalize_unit(unit)
        increment = NS_PER_DAY if name == "day" else _EXACT_UNITS.get(name)
        if increment is None:
            raise ValueError(f"Cannot round to {unit!r}")
        if mode not in _ROUNDING_MODES:
            raise ValueError(f"Unknown rounding mode: {mode!r}")

        nanos = self._time_of_day_ns()
        floor = nanos - nanos % increment
        if floor == nanos:
            return self
        if mode == "ceil" or (mode == "half_expand" and (nanos - floor) * 2 >= increment):
            return self._at_time_of_day(floor + increment)
        return self._at_time_of_day(floor)

    @staticmethod
    def compare(a: DateValue, b: DateValue) -> int:
        """-1, 0 or 1 as *a* is before, equal to or after *b*."""
        if a < b:
            return -1
        if a > b:
            return 1
        return 0

    def until(self, other: DateValue, unit: str = "nanoseconds") -> float:
        """Duration from ``self`` to *other* expressed in *unit*.

        Months and years are measured from ``self`` and may be fractional:
        the remainder is the share of the next whole unit already elapsed.
        """
        name = normalize_unit(unit)
        if name in _MONTHS_PER_UNIT:
            return self._calendar_total(other, _MONTHS_PER_UNIT[name])
        diff = self._nanos_until(other)
        increment = _EXACT_UNITS.get(name) or _DAYS_PER_UNIT[name] * NS_PER_DAY
        return diff if increment == 1 else diff / increment

    def _nanos_until(self, other: DateValue) -> int:
        # Plain wall-clock values, measured on a fixed UTC line
        return (other._dt.assume_utc() - self._dt.assume_utc()).in_nanoseconds()

    def _calendar_total(self, other: DateValue, step: int) -> float:
        sign = -1 if other < self else 1
        months = (other.year - self.year) * 12 + other.month - self.month
        whole = int(months / step)
        anchor = self.add("months", whole * step)
        # The month difference is an upper bound, walk back until not past other
        while sign * DateValue.compare(anchor, other) > 0:
            whole -= sign
            anchor = self.add("months", whole * step)
        following = self.add("months", (whole + sign) * step)
        fraction = anchor._nanos_until(other) / anchor._nanos_until(following)
        return whole + sign * fraction

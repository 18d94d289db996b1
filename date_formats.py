"""Named format patterns and the default English locale formatter.

Patterns use moment-style tokens (``YYYY``, ``MMMM``, ``ddd``, ``hh``, ``A``…)
plus the long-date shorthands ``L``, ``LL``, ``LT``… Text in square brackets
is copied through literally.
"""

import calendar
import logging
import re
from datetime import datetime
from types import MappingProxyType
from typing import Mapping, Protocol

from date_value import DateValue

logger = logging.getLogger(__name__)

DEFAULT_FORMATS: Mapping[str, str] = MappingProxyType({
    "normalDateWithWeekday": "ddd, MMM D",
    "normalDate": "D MMMM",
    "shortDate": "MMM D",
    "monthAndDate": "MMMM D",
    "dayOfMonth": "D",
    "year": "YYYY",
    "month": "MMMM",
    "monthShort": "MMM",
    "monthAndYear": "MMMM YYYY",
    "weekday": "dddd",
    "weekdayShort": "ddd",
    "minutes": "mm",
    "hours12h": "hh",
    "hours24h": "HH",
    "seconds": "ss",
    "fullTime": "LT",
    "fullTime12h": "hh:mm A",
    "fullTime24h": "HH:mm",
    "fullDate": "ll",
    "fullDateWithWeekday": "dddd, LL",
    "fullDateTime": "lll",
    "fullDateTime12h": "ll hh:mm A",
    "fullDateTime24h": "ll HH:mm",
    "keyboardDate": "L",
    "keyboardDateTime": "L LT",
    "keyboardDateTime12h": "L hh:mm A",
    "keyboardDateTime24h": "L HH:mm",
})

# en-US expansions of the long-date shorthands
_LONG_FORMATS = {
    "LTS": "h:mm:ss A",
    "LT": "h:mm A",
    "LLLL": "dddd, MMMM D, YYYY h:mm A",
    "LLL": "MMMM D, YYYY h:mm A",
    "LL": "MMMM D, YYYY",
    "L": "MM/DD/YYYY",
    "llll": "ddd, MMM D, YYYY h:mm A",
    "lll": "MMM D, YYYY h:mm A",
    "ll": "MMM D, YYYY",
    "l": "M/D/YYYY",
}

_LONG_RE = re.compile(r"\[[^\]]*\]|LTS|LT|LLLL|LLL|LL|L|llll|lll|ll|l")
_TOKEN_RE = re.compile(
    r"\[([^\]]*)\]|YYYY|YY|MMMM|MMM|MM|M|DD|D|dddd|ddd|HH|H|hh|h|mm|m|ss|s|A|a"
)

_STRPTIME_DIRECTIVES = {
    "YYYY": "%Y", "YY": "%y",
    "MMMM": "%B", "MMM": "%b", "MM": "%m", "M": "%m",
    "DD": "%d", "D": "%d",
    "dddd": "%A", "ddd": "%a",
    "HH": "%H", "H": "%H", "hh": "%I", "h": "%I",
    "mm": "%M", "m": "%M", "ss": "%S", "s": "%S",
    "A": "%p", "a": "%p",
}


class LocaleFormatter(Protocol):
    """What ``DateUtils`` needs from a locale-aware formatter."""

    hour12: bool

    def format(self, value: DateValue, pattern: str) -> str: ...

    def parse(self, text: str, pattern: str) -> DateValue: ...

    def meridiem(self, ampm: str) -> str: ...

    def format_number(self, text: str) -> str: ...


def merge_formats(overrides: Mapping[str, str] | None = None) -> Mapping[str, str]:
    """Return the default table with valid *overrides* applied.

    Unknown keys and non-string patterns are dropped.
    """
    formats = dict(DEFAULT_FORMATS)
    for key, pattern in (overrides or {}).items():
        if key not in DEFAULT_FORMATS:
            logger.warning("Ignoring unknown format key %r", key)
            continue
        if not isinstance(pattern, str):
            logger.warning("Ignoring non-string pattern for %r: %r", key, pattern)
            continue
        formats[key] = pattern
    return MappingProxyType(formats)


def expand_long_formats(pattern: str) -> str:
    """Replace ``L``/``LT``/``ll``… shorthands with their full patterns."""
    return _LONG_RE.sub(lambda m: _LONG_FORMATS.get(m.group(0), m.group(0)), pattern)


def format_helper_text(pattern: str) -> str:
    """Input placeholder for *pattern*, e.g. "L" -> "mm/dd/yyyy"."""
    def _placeholder(match: re.Match) -> str:
        token = match.group(0)
        if match.group(1) is not None:
            return match.group(1)
        if token in ("A", "a"):
            return "(a|p)m"
        return token.lower()

    return _TOKEN_RE.sub(_placeholder, expand_long_formats(pattern))


class EnglishFormatter:
    """English month/day names from the ``calendar`` module, 12-hour clock."""

    hour12 = True

    def format(self, value: DateValue, pattern: str) -> str:
        hour12 = value.hour % 12 or 12
        fields = {
            "YYYY": f"{value.year:04d}",
            "YY": f"{value.year % 100:02d}",
            "MMMM": calendar.month_name[value.month],
            "MMM": calendar.month_abbr[value.month],
            "MM": f"{value.month:02d}",
            "M": str(value.month),
            "DD": f"{value.day:02d}",
            "D": str(value.day),
            "dddd": calendar.day_name[value.day_of_week - 1],
            "ddd": calendar.day_abbr[value.day_of_week - 1],
            "HH": f"{value.hour:02d}",
            "H": str(value.hour),
            "hh": f"{hour12:02d}",
            "h": str(hour12),
            "mm": f"{value.minute:02d}",
            "m": str(value.minute),
            "ss": f"{value.second:02d}",
            "s": str(value.second),
            "A": "AM" if value.hour < 12 else "PM",
            "a": "am" if value.hour < 12 else "pm",
        }

        def _field(match: re.Match) -> str:
            if match.group(1) is not None:
                return match.group(1)
            return fields[match.group(0)]

        return _TOKEN_RE.sub(_field, expand_long_formats(pattern))

    def parse(self, text: str, pattern: str) -> DateValue:
        """Parse *text* laid out as *pattern*; raises ``ValueError`` on mismatch."""
        directives: list[str] = []
        pos = 0
        expanded = expand_long_formats(pattern)
        for match in _TOKEN_RE.finditer(expanded):
            directives.append(expanded[pos:match.start()].replace("%", "%%"))
            if match.group(1) is not None:
                directives.append(match.group(1).replace("%", "%%"))
            else:
                directives.append(_STRPTIME_DIRECTIVES[match.group(0)])
            pos = match.end()
        directives.append(expanded[pos:].replace("%", "%%"))
        return DateValue.from_datetime(datetime.strptime(text, "".join(directives)))

    def meridiem(self, ampm: str) -> str:
        return ampm

    def format_number(self, text: str) -> str:
        return text

"""Partial date parsing and comparison."""

import calendar
import re
from dataclasses import dataclass
from datetime import date


# Month name mappings (handle abbreviations and full names)
MONTH_MAP = {
    "JAN": 1,
    "JANUARY": 1,
    "FEB": 2,
    "FEBRUARY": 2,
    "MAR": 3,
    "MARCH": 3,
    "APR": 4,
    "APRIL": 4,
    "MAY": 5,
    "JUN": 6,
    "JUNE": 6,
    "JUL": 7,
    "JULY": 7,
    "AUG": 8,
    "AUGUST": 8,
    "SEP": 9,
    "SEPT": 9,
    "SEPTEMBER": 9,
    "OCT": 10,
    "OCTOBER": 10,
    "NOV": 11,
    "NOVEMBER": 11,
    "DEC": 12,
    "DECEMBER": 12,
}

_QUALIFIER_RE = re.compile(
    r"^(ABT\.?|ABOUT|BEF\.?|BEFORE|AFT\.?|AFTER|EST\.?|CAL\.?|CIRCA|CA\.?|C\.|AROUND):?\s*",
    flags=re.IGNORECASE,
)


@dataclass(frozen=True, order=True)
class PartialDate:
    """A calendar date known to year, month or day precision."""

    year: int
    month: int | None = None
    day: int | None = None

    @property
    def precision(self) -> str:
        if self.day is not None:
            return "day"
        if self.month is not None:
            return "month"
        return "year"

    def __str__(self) -> str:
        text = f"{self.year:04d}"
        if self.month is not None:
            text += f"-{self.month:02d}"
            if self.day is not None:
                text += f"-{self.day:02d}"
        return text


def _make(year: int, month: int | None = None, day: int | None = None) -> PartialDate | None:
    # 00 month/day placeholders mean "unknown", not January
    if month == 0:
        month, day = None, None
    if day == 0:
        day = None
    if month is not None and not 1 <= month <= 12:
        return None
    if day is not None:
        if month is None or not 1 <= day <= calendar.monthrange(year, month)[1]:
            return None
    return PartialDate(year, month, day)


def parse_partial_date(value) -> PartialDate | None:
    """
    Parse a stored or imported date into a PartialDate.
    Returns None if the value is empty or cannot be parsed.

    Handles formats like:
    - 1254, "1254", "1254-03", "1254-03-15", "1254-00-00"
    - "25 NOV 1254", "NOV 1254", "November, 1254"
    - "ABT 1254", "circa 1254", "(1254?)"
    - "November 17, 1254", "Nov.17,1254"
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, PartialDate):
        return value
    if isinstance(value, date):
        return PartialDate(value.year, value.month, value.day)
    if isinstance(value, int):
        return PartialDate(value)
    if not isinstance(value, str):
        return None

    s = value.strip().strip("()").rstrip("?")
    s = _QUALIFIER_RE.sub("", s).strip()
    if not s:
        return None

    # ISO: "1254", "1254-03", "1254-03-15"
    match = re.match(r"^(\d{1,4})(?:-(\d{1,2})(?:-(\d{1,2}))?)?$", s)
    if match:
        year = int(match.group(1))
        month = int(match.group(2)) if match.group(2) else None
        day = int(match.group(3)) if match.group(3) else None
        return _make(year, month, day)

    # "25 NOV 1254" or "11 Aug. 1254"
    match = re.match(r"^(\d{1,2})\s+([A-Za-z]+)\.?\s*(\d{3,4})$", s)
    if match:
        month = MONTH_MAP.get(match.group(2).upper())
        if month:
            return _make(int(match.group(3)), month, int(match.group(1)))
        return None

    # "NOV 1254" or "May, 1254"
    match = re.match(r"^([A-Za-z]+)\.?,?\s*(\d{3,4})$", s)
    if match:
        month = MONTH_MAP.get(match.group(1).upper())
        if month:
            return _make(int(match.group(2)), month)
        return None

    # "November 17, 1254" or "Oct.12,1254"
    match = re.match(r"^([A-Za-z]+)\.?\s*(\d{1,2}),?\s*(\d{3,4})$", s)
    if match:
        month = MONTH_MAP.get(match.group(1).upper())
        if month:
            return _make(int(match.group(3)), month, int(match.group(2)))

    return None


def parse_year(value) -> int | None:
    """Extract just the year from a date value."""
    parsed = parse_partial_date(value)
    return parsed.year if parsed else None


def compare_dates(a: PartialDate, b: PartialDate) -> int:
    """
    Compare two partial dates at the precision both of them carry.

    Returns -1 if a is earlier, 1 if a is later and 0 when they are equal
    or cannot be told apart (e.g. "1254" vs "1254-06-01").
    """
    pairs = [(a.year, b.year)]
    if a.month is not None and b.month is not None:
        pairs.append((a.month, b.month))
        if a.day is not None and b.day is not None:
            pairs.append((a.day, b.day))
    for left, right in pairs:
        if left != right:
            return -1 if left < right else 1
    return 0


def months_between(earlier: PartialDate, later: PartialDate) -> int:
    """Signed number of whole months from `earlier` to `later`."""
    months = (later.year - earlier.year) * 12
    if earlier.month is not None and later.month is not None:
        months += later.month - earlier.month
    return months


def age_at(birth: PartialDate, event: PartialDate) -> int:
    """Completed years between a birth and a later event."""
    years = event.year - birth.year
    if birth.month is None or event.month is None:
        return years
    if event.month < birth.month:
        years -= 1
    elif event.month == birth.month and birth.day is not None and event.day is not None:
        if event.day < birth.day:
            years -= 1
    return years

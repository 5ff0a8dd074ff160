"""Core utility functions for the application"""

import calendar
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import List, NamedTuple, Tuple, Union

# Chart labels for the monthly view, January first
THAI_MONTHS = [
    "ม.ค.",
    "ก.พ.",
    "มี.ค.",
    "เม.ย.",
    "พ.ค.",
    "มิ.ย.",
    "ก.ค.",
    "ส.ค.",
    "ก.ย.",
    "ต.ค.",
    "พ.ย.",
    "ธ.ค.",
]


def _next_day(day_start: datetime) -> datetime:
    """Midnight after day_start, or datetime.max past 9999-12-31."""
    try:
        return day_start + timedelta(days=1)
    except OverflowError:
        return datetime.max


class Bucket(NamedTuple):
    """A half-open time window [start, end) with its chart label."""

    label: str
    start: datetime
    end: datetime


def month_buckets(year: int) -> List[Bucket]:
    """
    One bucket per calendar month of the given year.

    Args:
        year: Calendar year

    Returns:
        List[Bucket]: 12 buckets labelled with THAI_MONTHS
    """
    buckets = []
    for month in range(1, 13):
        start = datetime(year, month, 1)
        if month < 12:
            end = datetime(year, month + 1, 1)
        else:
            end = _next_day(datetime(year, 12, 31))
        buckets.append(Bucket(THAI_MONTHS[month - 1], start, end))
    return buckets


def day_buckets(year: int, month: int) -> List[Bucket]:
    """
    One bucket per calendar day of the given month, labelled "1", "2", ...

    Args:
        year: Calendar year
        month: Month number (1-12)

    Returns:
        List[Bucket]: As many buckets as the month has days
    """
    _, days_in_month = calendar.monthrange(year, month)
    buckets = []
    for day in range(1, days_in_month + 1):
        start = datetime(year, month, day)
        buckets.append(Bucket(str(day), start, _next_day(start)))
    return buckets


def format_number(value: Union[int, float, Decimal, None]) -> str:
    """
    Format a number with thousands separators, e.g. 1234567 -> "1,234,567".
    Fractions are kept to two places only when present.
    """
    if value is None:
        return "0"
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    if value == value.to_integral_value():
        return f"{int(value):,}"
    return f"{value:,.2f}"


def _parse_bound(value: str) -> Union[date, datetime]:
    value = value.strip()
    try:
        return date.fromisoformat(value)
    except ValueError:
        pass
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError as exc:
        raise ValueError(f"Invalid date: {value!r}") from exc
    if parsed.tzinfo is not None:
        # Timestamps are stored as naive local time
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def resolve_date_range(start_date: str, end_date: str) -> Tuple[datetime, datetime]:
    """
    Turn inclusive ISO date/datetime bounds into a half-open [start, end) window.

    A date-only end bound covers that whole day, so
    ("2024-01-01", "2024-01-31") becomes [2024-01-01 00:00, 2024-02-01 00:00).

    Raises:
        ValueError: If either bound is not an ISO 8601 date or datetime
    """
    start = _parse_bound(start_date)
    end = _parse_bound(end_date)

    if not isinstance(start, datetime):
        start = datetime(start.year, start.month, start.day)

    if isinstance(end, datetime):
        end = end + timedelta(microseconds=1) if end < datetime.max else datetime.max
    else:
        end = _next_day(datetime(end.year, end.month, end.day))

    return start, end

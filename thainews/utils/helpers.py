"""
Utility helper functions for calendar date handling.
"""
import calendar
from datetime import date, timedelta
from typing import Iterator, Tuple

THAI_MONTHS = [
    "มกราคม", "กุมภาพันธ์", "มีนาคม", "เมษายน", "พฤษภาคม", "มิถุนายน",
    "กรกฎาคม", "สิงหาคม", "กันยายน", "ตุลาคม", "พฤศจิกายน", "ธันวาคม",
]

# Buddhist Era = Gregorian year + 543
BUDDHIST_ERA_OFFSET = 543


def days_in_month(year: int, month: int) -> int:
    """Number of days in a Gregorian month."""
    return calendar.monthrange(year, month)[1]


def iter_month_days(year: int, month: int) -> Iterator[date]:
    """
    Iterate every day of a month in order.

    Args:
        year: Gregorian year
        month: Month (1-12)

    Yields:
        Each date from the 1st to the last day of the month
    """
    first = date(year, month, 1)
    for offset in range(days_in_month(year, month)):
        yield first + timedelta(days=offset)


def next_month(year: int, month: int) -> Tuple[int, int]:
    """(year, month) of the following month."""
    if month == 12:
        return year + 1, 1
    return year, month + 1


def format_thai_month_year(year: int, month: int) -> str:
    """
    Format a month the way Thai readers expect it.

    Args:
        year: Gregorian year
        month: Month (1-12)

    Returns:
        Thai month name and Buddhist Era year, e.g. "เมษายน 2567"
    """
    return f"{THAI_MONTHS[month - 1]} {year + BUDDHIST_ERA_OFFSET}"

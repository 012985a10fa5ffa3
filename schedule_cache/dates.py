"""Calendar helpers for Monday-based weekdays and widget date labels."""

from datetime import date
from typing import Optional

CHINESE_WEEKDAYS = ("一", "二", "三", "四", "五", "六", "日")


def monday_based_weekday(day: date) -> int:
    """Return 1 for Monday through 7 for Sunday."""
    return day.isoweekday()


def date_text(day: date) -> str:
    """Format ``day`` as "M.d" without leading zeros or year."""
    return f"{day.month}.{day.day}"


def chinese_weekday(weekday: int) -> str:
    """Map a Monday-based weekday to its Chinese numeral; "一" when out of range."""
    if 1 <= weekday <= 7:
        return CHINESE_WEEKDAYS[weekday - 1]
    return CHINESE_WEEKDAYS[0]


def week_label(weekday: int) -> str:
    """Return the "周X" label for a Monday-based weekday."""
    return f"周{chinese_weekday(weekday)}"


def parse_int(value: str) -> Optional[int]:
    """Parse an integer string such as a weekday or week id; None if it is not one."""
    try:
        return int(value.strip())
    except ValueError:
        return None

"""Day counts between calendar dates and the years/days age formatting."""

from __future__ import annotations

import math
import re
from datetime import date, datetime

from src.services.errors import InvalidDateError

DATE_FORMAT = "%Y-%m-%d"
DAYS_PER_YEAR = 365.25

_DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def is_date_string(value: str) -> bool:
    return bool(_DATE_PATTERN.fullmatch(value or ""))


def parse_date(value: str) -> date:
    # strptime alone accepts "2000-1-2"
    if not is_date_string(value):
        raise InvalidDateError(f"Invalid date '{value}'. Expected YYYY-MM-DD.")
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except ValueError as exc:
        raise InvalidDateError(f"Invalid date '{value}'. Expected YYYY-MM-DD.") from exc


def days_between(start: str, end: str) -> int:
    """Return the signed number of whole days from ``start`` to ``end``."""
    return (parse_date(end) - parse_date(start)).days


def age_parts(days: int) -> tuple[int, int]:
    """Split a day count into (years, remaining days) using 365.25-day years.

    Both parts are truncated toward zero, so this is an approximation and
    not a calendar-accurate age.
    """
    years = int(days / DAYS_PER_YEAR)
    remainder = int(math.fmod(days, DAYS_PER_YEAR))
    return years, remainder


def format_age(days: int) -> str:
    years, remainder = age_parts(days)
    return f"{years} years and {remainder} days"

"""
Calendar helpers
"""

import re
from datetime import date, datetime

ISO_DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")


def parse_iso_date(value: str) -> date:
    """Return the first ``YYYY-MM-DD`` date found in ``value``"""
    match = ISO_DATE_PATTERN.search(value)
    if not match:
        raise ValueError(f"No ISO date in '{value}'")
    return datetime.strptime(match.group(0), "%Y-%m-%d").date()


def is_weekend(iso_date: str) -> bool:
    # Saturday is 5, Sunday is 6
    return parse_iso_date(iso_date).weekday() >= 5


def date_key(value) -> str:
    # YAML decodes unquoted dates to date objects
    if isinstance(value, date):
        return value.isoformat()
    return str(value)

"""
Validation of the raw work log document
"""

import logging
import re
from typing import Any, Dict

from .dates import ISO_DATE_PATTERN, date_key, parse_iso_date
from .models import NOINFILL, TICKET_PATTERN, WorkLog

logger = logging.getLogger(__name__)

ENTRY_PATTERN = re.compile(
    TICKET_PATTERN + r":(?:\d+h +\d+m|\d+m|\d+h?|infill)(?::.*)?",
    re.DOTALL,
)


class ValidationError(Exception):
    """Raised when the work log document is malformed"""
    pass


class MissingWorklogError(ValidationError):
    pass


class ShapeError(ValidationError):
    pass


class DateFormatError(ValidationError):
    pass


class EntrySyntaxError(ValidationError):
    pass


def validate_worklog_data(data: Dict[str, Any]) -> WorkLog:
    """Check the shape of a parsed data document and return it as a WorkLog.

    Date keys only need to *contain* a ``YYYY-MM-DD`` date, which keeps
    existing data files with decorated keys loading as before. The date
    found must still be a real calendar date.
    """
    if not isinstance(data, dict) or 'worklog' not in data:
        raise MissingWorklogError(f"No worklog found in data file: {data}")

    worklog = data['worklog']
    if not isinstance(worklog, dict):
        raise ShapeError(
            f"Expected worklog to be a mapping of dates to lists: {worklog} is not a mapping"
        )

    days = {}
    for raw_key, values in worklog.items():
        key = date_key(raw_key)
        if not ISO_DATE_PATTERN.search(key):
            raise DateFormatError(
                f"Expected dates in worklog to be in ISO date format: {key} is not in ISO date format"
            )
        try:
            parse_iso_date(key)
        except ValueError:
            raise DateFormatError(f"{key} is not a valid calendar date")

        if not isinstance(values, list):
            raise ShapeError(
                f"Expected worklog to be a mapping of dates to lists: {values} in {key} is not a list"
            )

        for value in values:
            if value == NOINFILL:
                continue
            if not isinstance(value, str) or not ENTRY_PATTERN.fullmatch(value):
                raise EntrySyntaxError(f"Syntax error in worklog: {value} in {key}")

        days[key] = list(values)

    default = data.get('default')
    try:
        result = WorkLog(days=days, default=default)
    except ValueError as e:
        raise ShapeError(str(e))

    logger.debug(f"Validated worklog with {len(days)} dates")
    return result

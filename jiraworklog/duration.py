"""
Conversion between worklog duration strings and seconds
"""

import re

_HOURS_AND_MINUTES = re.compile(r"(\d+)h +(\d+)m")
_MINUTES = re.compile(r"(\d+)m")
_HOURS = re.compile(r"(\d+)h?")


class DurationParseError(ValueError):
    """Raised when a duration string matches none of the known forms"""
    pass


def parse_duration(text: str) -> int:
    """Convert ``"2h 30m"``, ``"45m"``, ``"8h"`` or a bare ``"8"`` (hours) to seconds."""
    text = str(text).strip()

    match = _HOURS_AND_MINUTES.fullmatch(text)
    if match:
        hours, minutes = match.groups()
        return int(hours) * 3600 + int(minutes) * 60

    match = _MINUTES.fullmatch(text)
    if match:
        return int(match.group(1)) * 60

    match = _HOURS.fullmatch(text)
    if match:
        return int(match.group(1)) * 3600

    raise DurationParseError(f"Invalid duration '{text}'")


def format_duration(seconds: int) -> str:
    """Format seconds as ``"<H>h <M>m"``, dropping any leftover seconds"""
    return f"{seconds // 3600}h {seconds // 60 % 60}m"

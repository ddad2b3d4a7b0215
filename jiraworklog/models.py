"""
Data models for the Jira worklog synchronizer
"""

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .duration import parse_duration

TICKET_PATTERN = r"[A-Z]+-\d+"
TIME_STRING_PATTERN = r"^T\d{2}:\d{2}:\d{2}\.\d{3}\+\d{4}$"
INFILL_PATTERN = r"\d+h(?: +\d+m)?"

DEFAULT_TIME_STRING = "T09:00:00.000+1000"
DEFAULT_INFILL = "8h"
DEFAULT_SCHEDULE_TIME = "08:00"

NOINFILL = "noinfill"
INFILL = "infill"

# Submission ledger: ISO date -> entries already accepted by Jira, in order
SubmissionState = Dict[str, List[str]]


@dataclass
class Config:
    """Configuration settings"""
    server: str
    username: str
    password: str
    # Appended to each ISO date to form the worklog start timestamp
    time_string: str = DEFAULT_TIME_STRING
    infill: str = DEFAULT_INFILL
    log_level: str = "INFO"
    log_file: Optional[str] = None
    schedule_time: str = DEFAULT_SCHEDULE_TIME

    def __post_init__(self):
        """Validate configuration after initialization"""
        if not self.server:
            raise ValueError("Jira server is required")

        if not self.username:
            raise ValueError("Jira username is required")

        if not re.match(TIME_STRING_PATTERN, self.time_string):
            raise ValueError(
                f"time_string {self.time_string!r} should be like T00:00:00.000+1000"
            )

        if not re.fullmatch(INFILL_PATTERN, self.infill):
            raise ValueError(f"infill {self.infill!r} should be like 8h or 7h 30m")

    @property
    def infill_seconds(self) -> int:
        return parse_duration(self.infill)


@dataclass
class Entry:
    """A single ``TICKET:DURATION[:COMMENT]`` worklog line"""
    ticket: str
    duration: str
    comment: str = ""

    @classmethod
    def parse(cls, text: str) -> "Entry":
        ticket, sep, rest = text.partition(":")
        if not sep or not re.fullmatch(TICKET_PATTERN, ticket):
            raise ValueError(f"Not a worklog entry: {text!r}")
        duration, _, comment = rest.partition(":")
        return cls(ticket=ticket, duration=duration, comment=comment)

    @property
    def is_infill_marker(self) -> bool:
        return self.duration == INFILL

    @property
    def seconds(self) -> int:
        return parse_duration(self.duration)

    def __str__(self) -> str:
        if self.comment:
            return f"{self.ticket}:{self.duration}:{self.comment}"
        return f"{self.ticket}:{self.duration}"


@dataclass
class WorkLog:
    """Declared work per day plus the optional catch-all infill ticket"""
    days: Dict[str, List[str]] = field(default_factory=dict)
    default: Optional[str] = None

    def __post_init__(self):
        if self.default is None:
            return
        if not isinstance(self.default, str):
            raise ValueError("Default ticket must be a string")
        if not re.fullmatch(TICKET_PATTERN, self.default):
            raise ValueError(f"Default ticket {self.default!r} is not a Jira ticket like ABC-123")

"""
Daily infill computation
"""

import logging
from typing import List, Optional

from .dates import is_weekend
from .duration import format_duration
from .models import NOINFILL, Config, Entry, SubmissionState, WorkLog

logger = logging.getLogger(__name__)


class InfillOverflowError(Exception):
    """Raised when a day's logged time exceeds the budget of its explicit infill ticket"""

    def __init__(self, date: str, entries: List[str], total_seconds: int, budget_seconds: int):
        self.date = date
        self.entries = entries
        self.total_seconds = total_seconds
        self.budget_seconds = budget_seconds
        super().__init__(
            f"Worklog for {date} totals {format_duration(total_seconds)}, more than the "
            f"{format_duration(budget_seconds)} infill target: {entries}"
        )


class InfillProcessor:
    """Tops up each weekday to the configured daily budget"""

    def __init__(self, config: Config):
        self.config = config

    def apply_infill(self, worklog: WorkLog, state: SubmissionState) -> WorkLog:
        """Strip infill markers from every day and append computed infill entries in place"""
        budget = self.config.infill_seconds

        for date, values in worklog.days.items():
            self.fill_day(date, values, budget, worklog.default, auto=not state.get(date))

        return worklog

    def fill_day(self, date: str, values: List[str], budget: int,
                 default: Optional[str] = None, auto: bool = True) -> Optional[str]:
        """Resolve infill for one day, returning the appended entry if any.

        ``auto`` enables topping up against ``default``; it is off once a
        date already has submitted entries. A ``TICKET:infill`` line
        overrides the default ticket and applies regardless of ``auto``.
        """
        explicit_ticket = None
        total_seconds = 0
        kept = []

        for value in values:
            if value == NOINFILL:
                auto = False
                continue
            entry = Entry.parse(value)
            if entry.is_infill_marker:
                if explicit_ticket and explicit_ticket != entry.ticket:
                    logger.warning(
                        f"Several infill tickets on {date}; using {entry.ticket} over {explicit_ticket}"
                    )
                explicit_ticket = entry.ticket
                continue
            total_seconds += entry.seconds
            kept.append(value)

        # Markers never reach reconciliation or the state file
        values[:] = kept

        if is_weekend(date):
            logger.debug(f"{date} is a weekend, no infill")
            return None

        if explicit_ticket:
            if total_seconds > budget:
                raise InfillOverflowError(date, kept, total_seconds, budget)
            if total_seconds == budget:
                logger.warning(
                    f"{date} already totals the infill target; {explicit_ticket} gets 0h 0m, which Jira may reject"
                )
            infill_entry = f"{explicit_ticket}:{format_duration(budget - total_seconds)}"
        elif auto and default and total_seconds < budget:
            infill_entry = f"{default}:{format_duration(budget - total_seconds)}"
        else:
            return None

        logger.debug(f"Infill for {date}: {infill_entry}")
        values.append(infill_entry)
        return infill_entry

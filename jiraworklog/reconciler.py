"""
Reconciliation of the declared work log against the submission ledger
"""

import logging

from .jira_worklog import JiraWorklogClient, JiraWorklogError
from .models import Config, Entry, SubmissionState, WorkLog
from .state_store import StateStore

logger = logging.getLogger(__name__)


class SubmissionFailedError(Exception):
    """Raised when Jira rejects a worklog; state up to that point has been saved"""

    def __init__(self, ticket: str, date: str, error: JiraWorklogError):
        self.ticket = ticket
        self.date = date
        self.error = error
        super().__init__(f"Failed adding to worklog in {ticket} for {date}: {error}")


class Reconciler:
    """Submits every work log entry not yet recorded in state, at most once.

    State is updated in memory after each accepted entry and written to the
    store when anything interrupts the run, such as a rejected submission,
    and once more when all dates are done.
    """

    def __init__(self, config: Config, client: JiraWorklogClient, store: StateStore):
        self.config = config
        self.client = client
        self.store = store

    def reconcile(self, worklog: WorkLog, state: SubmissionState) -> SubmissionState:
        submitted = 0

        try:
            for date, values in worklog.days.items():
                if state.get(date) == values:
                    logger.debug(f"{date} already up to date")
                    continue

                done = state.setdefault(date, [])
                for value in values:
                    if value in done:
                        logger.debug(f"Skipping {value} on {date}, already submitted")
                        continue
                    self._submit(date, value)
                    done.append(value)
                    submitted += 1
        except BaseException:
            # Keep whatever Jira accepted before the interruption
            self.store.save(state)
            raise

        self.store.save(state)
        logger.info(f"Submitted {submitted} worklog entries")
        return state

    def _submit(self, date: str, value: str) -> None:
        entry = Entry.parse(value)
        try:
            self.client.submit(
                entry.ticket,
                date + self.config.time_string,
                entry.seconds,
                entry.comment,
            )
        except JiraWorklogError as e:
            logger.error(f"Failed adding {value} on {date}: {e}")
            raise SubmissionFailedError(entry.ticket, date, e) from e

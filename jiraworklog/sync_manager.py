"""
Main sync manager for the Jira worklog synchronizer
"""

import copy
import logging
import time
from typing import List, Optional, Tuple

import schedule

from .config_manager import (
    DEFAULT_DATA_FILE, DEFAULT_STATE_FILE, load_worklog, ConfigurationError
)
from .duration import format_duration
from .infill import InfillProcessor, InfillOverflowError
from .jira_worklog import JiraWorklogClient
from .models import Config, SubmissionState
from .reconciler import Reconciler, SubmissionFailedError
from .state_store import StateStore, StateStoreError
from .validator import ValidationError

logger = logging.getLogger(__name__)

Submission = Tuple[str, str, int, str]


class _RecordingClient:
    """Stands in for Jira during a preview, accepting every submission"""

    def __init__(self):
        self.submissions: List[Submission] = []

    def submit(self, ticket: str, started: str, seconds: int, comment: str = "") -> None:
        self.submissions.append((ticket, started, seconds, comment))


class _NullStore:
    def save(self, state: SubmissionState) -> None:
        pass


class SyncManager:
    """Coordinates loading, infill, reconciliation and persistence for one run"""

    def __init__(self, config: Config, data_file=DEFAULT_DATA_FILE, state_file=DEFAULT_STATE_FILE,
                 client: Optional[JiraWorklogClient] = None):
        self.config = config
        self.data_file = data_file
        self.store = StateStore(state_file)
        self.client = client or JiraWorklogClient(config)
        self.infill = InfillProcessor(config)

    def _prepare(self):
        worklog = load_worklog(self.data_file)
        state = self.store.load()
        self.infill.apply_infill(worklog, state)
        return worklog, state

    def run(self) -> SubmissionState:
        """Submit everything in the data file not yet recorded in state"""
        logger.info(f"Syncing worklog from {self.data_file}")
        worklog, state = self._prepare()
        return Reconciler(self.config, self.client, self.store).reconcile(worklog, state)

    def preview(self) -> List[Submission]:
        """Return the submissions a run would make, without contacting Jira or saving state"""
        worklog, state = self._prepare()
        recorder = _RecordingClient()
        Reconciler(self.config, recorder, _NullStore()).reconcile(worklog, copy.deepcopy(state))

        for ticket, started, seconds, comment in recorder.submissions:
            logger.info(f"Would add {format_duration(seconds)} to {ticket} at {started} {comment}".rstrip())
        logger.info(f"{len(recorder.submissions)} entries pending")
        return recorder.submissions

    def run_scheduled(self) -> bool:
        """One scheduled run; failures are logged and left for the next run to resume"""
        try:
            self.run()
            return True
        except (ConfigurationError, ValidationError, InfillOverflowError,
                SubmissionFailedError, StateStoreError) as e:
            logger.error(f"Scheduled sync failed: {e}")
            return False

    def start_scheduler(self):
        """Start the daily scheduler"""
        schedule.every().day.at(self.config.schedule_time).do(self.run_scheduled)

        logger.info(f"Scheduler started. Daily sync at {self.config.schedule_time}")

        try:
            while True:
                schedule.run_pending()
                time.sleep(60)
        except KeyboardInterrupt:
            logger.info("Scheduler stopped by user")

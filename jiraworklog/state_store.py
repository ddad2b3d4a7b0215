"""
Persistence of the submission ledger
"""

import logging
from pathlib import Path

import yaml

from .dates import date_key
from .models import SubmissionState

logger = logging.getLogger(__name__)


class StateStoreError(Exception):
    """Raised when the state file cannot be read or written"""
    pass


class StateStore:
    """YAML file holding, per date, the entries Jira has already accepted"""

    def __init__(self, path):
        self.path = Path(path).expanduser()

    def load(self) -> SubmissionState:
        try:
            with open(self.path, 'r') as f:
                data = yaml.safe_load(f)
        except FileNotFoundError:
            raise StateStoreError(f"State file not found: {self.path}")
        except (OSError, yaml.YAMLError) as e:
            raise StateStoreError(f"Could not read state file {self.path}: {e}")

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise StateStoreError(f"State file {self.path} is not a mapping of dates")

        state = {}
        for key, values in data.items():
            if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
                raise StateStoreError(f"State for {key} in {self.path} is not a list of entries")
            state[date_key(key)] = list(values)

        logger.debug(f"Loaded state for {len(state)} dates from {self.path}")
        return state

    def save(self, state: SubmissionState) -> None:
        tmp = self.path.with_suffix(self.path.suffix + '.tmp')
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp, 'w') as f:
                yaml.safe_dump(state, f, default_flow_style=False, sort_keys=False)
            tmp.replace(self.path)
        except OSError as e:
            raise StateStoreError(f"Could not write state file {self.path}: {e}")

        logger.debug(f"Wrote state for {len(state)} dates to {self.path}")

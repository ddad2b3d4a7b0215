"""
Configuration management for the Jira worklog synchronizer
"""

import getpass
import logging
import re
import shutil
from pathlib import Path
from typing import Optional

import yaml

from .models import (
    DEFAULT_INFILL, DEFAULT_SCHEDULE_TIME, DEFAULT_TIME_STRING,
    INFILL_PATTERN, TIME_STRING_PATTERN, Config, WorkLog
)
from .validator import validate_worklog_data

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / '.jira_worklog'
DEFAULT_CONFIG_FILE = CONFIG_DIR / 'config.yml'
DEFAULT_DATA_FILE = CONFIG_DIR / 'data.yml'
DEFAULT_STATE_FILE = CONFIG_DIR / 'state.yml'


class ConfigurationError(Exception):
    """Raised when there's an issue with configuration"""
    pass


def _read_yaml(path) -> object:
    try:
        with open(Path(path).expanduser(), 'r') as f:
            return yaml.safe_load(f)
    except FileNotFoundError:
        raise ConfigurationError(f"File not found: {path}")
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}")
    except OSError as e:
        raise ConfigurationError(f"Error reading {path}: {e}")


def init_files(config_path, data_path, state_path) -> list:
    """Create any missing config, data and state file from the packaged templates."""
    defaults_dir = Path(__file__).parent / 'defaults'
    created = []

    for template, target in (('config.yml', config_path), ('data.yml', data_path)):
        target = Path(target).expanduser()
        if target.exists():
            continue
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy(defaults_dir / template, target)
        created.append(target)

    state_file = Path(state_path).expanduser()
    if not state_file.exists():
        state_file.parent.mkdir(parents=True, exist_ok=True)
        state_file.write_text('{}\n')
        created.append(state_file)

    for path in created:
        logger.info(f"Created {path}")
    return created


def validate_config_data(config_data: dict) -> None:
    """Validate configuration data structure and values"""
    if not isinstance(config_data, dict):
        raise ConfigurationError("Config file must be a mapping")

    required_fields = ['server', 'username']
    for field in required_fields:
        if not config_data.get(field):
            raise ConfigurationError(f"Missing required field: {field}")

    time_string = config_data.get('time_string', DEFAULT_TIME_STRING)
    if not isinstance(time_string, str) or not re.match(TIME_STRING_PATTERN, time_string):
        raise ConfigurationError(
            f"Syntax error in config file: time_string {time_string} should be like T00:00:00.000+1000"
        )

    infill = config_data.get('infill', DEFAULT_INFILL)
    if not isinstance(infill, str) or not re.fullmatch(INFILL_PATTERN, infill):
        raise ConfigurationError(f"Syntax error in config file: infill {infill}")


def get_password(username: str) -> str:
    return getpass.getpass(f"Enter the Jira password for {username}: ")


def load_config(config_file) -> Config:
    """Load and validate configuration, prompting for the password when absent"""
    config_data = _read_yaml(config_file)
    if config_data is None:
        config_data = {}

    validate_config_data(config_data)

    password = config_data.get('password')
    if not password:
        password = get_password(config_data['username'])

    try:
        return Config(
            server=str(config_data['server']),
            username=str(config_data['username']),
            password=str(password),
            time_string=config_data.get('time_string', DEFAULT_TIME_STRING),
            infill=config_data.get('infill', DEFAULT_INFILL),
            log_level=config_data.get('log_level', 'INFO'),
            log_file=config_data.get('log_file'),
            schedule_time=config_data.get('schedule_time', DEFAULT_SCHEDULE_TIME),
        )
    except ValueError as e:
        raise ConfigurationError(f"Error loading config: {e}")


def load_worklog(data_file) -> WorkLog:
    """Load the data file and validate its work log"""
    return validate_worklog_data(_read_yaml(data_file))


def setup_logging(config: Optional[Config] = None) -> None:
    """Setup logging for the whole package"""
    package_logger = logging.getLogger('jiraworklog')

    # Clear existing handlers
    for handler in package_logger.handlers[:]:
        package_logger.removeHandler(handler)

    level_name = config.log_level if config else 'INFO'
    log_level = getattr(logging, level_name.upper(), logging.INFO)
    package_logger.setLevel(log_level)

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    if config and config.log_file:
        file_handler = logging.FileHandler(Path(config.log_file).expanduser())
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        package_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    package_logger.addHandler(console_handler)

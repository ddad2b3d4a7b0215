#!/usr/bin/env python3
"""
Jira worklog synchronizer
Command-line interface: submits a YAML work log to Jira exactly once per entry
"""

import argparse
import logging
import sys

from .config_manager import (
    DEFAULT_CONFIG_FILE, DEFAULT_DATA_FILE, DEFAULT_STATE_FILE,
    init_files, load_config, setup_logging, ConfigurationError
)
from .infill import InfillOverflowError
from .reconciler import SubmissionFailedError
from .state_store import StateStoreError
from .sync_manager import SyncManager
from .validator import ValidationError

logger = logging.getLogger(__name__)


def parse_arguments(argv=None):
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(
        description="Submit a declarative work log to Jira, once per entry",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Submit everything not yet recorded in the state file
  jira-worklog

  # Show what would be submitted
  jira-worklog --preview

  # Use another data file
  jira-worklog -f ~/work/april.yml

  # Create config, data and state files
  jira-worklog --init
        """
    )

    parser.add_argument(
        '-f', '--datafile',
        default=str(DEFAULT_DATA_FILE),
        help=f'Data file with worklog data (default: {DEFAULT_DATA_FILE})'
    )

    parser.add_argument(
        '-c', '--configfile',
        default=str(DEFAULT_CONFIG_FILE),
        help=f'File containing server, user name and infill (default: {DEFAULT_CONFIG_FILE})'
    )

    parser.add_argument(
        '-s', '--statefile',
        default=str(DEFAULT_STATE_FILE),
        help=f'File recording submitted entries (default: {DEFAULT_STATE_FILE})'
    )

    parser.add_argument(
        '--preview',
        action='store_true',
        help='List pending submissions without contacting Jira'
    )

    parser.add_argument(
        '--scheduler',
        action='store_true',
        help='Sync once a day at the configured schedule_time'
    )

    parser.add_argument(
        '--test-connection',
        action='store_true',
        help='Check the Jira server accepts the configured credentials'
    )

    parser.add_argument(
        '--init',
        action='store_true',
        help='Create missing config, data and state files'
    )

    return parser.parse_args(argv)


def main(argv=None):
    """Main entry point"""
    args = parse_arguments(argv)
    setup_logging()

    if args.init:
        init_files(args.configfile, args.datafile, args.statefile)
        return

    try:
        config = load_config(args.configfile)
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        logger.error("Run 'jira-worklog --init' to create configuration files")
        sys.exit(1)

    setup_logging(config)
    manager = SyncManager(config, args.datafile, args.statefile)

    if args.test_connection:
        sys.exit(0 if manager.client.test_connection() else 1)

    try:
        if args.preview:
            manager.preview()
        elif args.scheduler:
            manager.start_scheduler()
        else:
            manager.run()

    except (ConfigurationError, ValidationError, InfillOverflowError,
            SubmissionFailedError, StateStoreError) as e:
        logger.error(str(e))
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("Operation cancelled by user")
        sys.exit(1)


if __name__ == "__main__":
    main()

#!/usr/bin/env python3
"""Recompute job application counts from the applications table.

Submissions keep ``application_count`` in step transactionally; this pass is
for data written by other tools or restored from backups.
"""
import argparse
import json
import sys
from typing import Dict, Tuple

from jobboard.core.config import Settings
from jobboard.core.context import AppContext
from jobboard.core.database import session_scope
from jobboard.core.logging import setup_logging
from jobboard.features.applications import reconcile_application_counts

logger = setup_logging('reconcile_counts')


def reconcile(settings: Settings) -> Dict[str, Tuple[int, int]]:
    context = AppContext.from_settings(settings)
    try:
        with session_scope(context.session_factory) as db:
            return reconcile_application_counts(db)
    finally:
        context.shutdown()


def main(argv=None):
    """Main entry point for CLI."""
    parser = argparse.ArgumentParser(description='Fix job application counts')
    parser.add_argument('--env-file', help='dotenv file to load before reading settings')
    args = parser.parse_args(argv)

    try:
        corrected = reconcile(Settings.from_env(args.env_file))
    except Exception as e:
        logger.error(f"Reconciliation failed: {e}")
        sys.exit(1)

    print(json.dumps(
        {job_id: {"stored": stored, "actual": actual} for job_id, (stored, actual) in corrected.items()},
        indent=2
    ))


if __name__ == '__main__':
    main()

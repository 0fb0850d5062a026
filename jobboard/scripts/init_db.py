#!/usr/bin/env python3
"""Create database tables and the résumé upload directory."""
import argparse
import sys

from jobboard.core.config import Settings
from jobboard.core.context import AppContext
from jobboard.core.logging import setup_logging

logger = setup_logging('init_db')


def init_database(settings: Settings) -> bool:
    """Initialize all database tables and the upload directory."""
    context = AppContext.from_settings(settings)
    try:
        context.startup()
        logger.info(f"Initialized database at {settings.database_url}")
        return True
    except Exception as e:
        logger.error(f"Error initializing database: {str(e)}")
        return False
    finally:
        context.shutdown()


def main(argv=None):
    """Main entry point for CLI."""
    parser = argparse.ArgumentParser(description='Create job board tables and upload directory')
    parser.add_argument('--env-file', help='dotenv file to load before reading settings')
    args = parser.parse_args(argv)

    if not init_database(Settings.from_env(args.env_file)):
        sys.exit(1)


if __name__ == '__main__':
    main()

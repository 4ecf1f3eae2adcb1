#!/usr/bin/env python3
"""Check whether a puzzle is already published for a date (tomorrow by default).

Prints PUZZLE_EXISTS=true|false for CI and exits 0 only when the puzzle exists.
"""

import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import argparse
import logging
from datetime import date, timedelta

from pydantic import ValidationError

from daily_connections.config import settings
from daily_connections.database import create_repository

logging.basicConfig(level=logging.INFO, format="%(message)s")
logger = logging.getLogger(__name__)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--date", default=(date.today() + timedelta(days=1)).isoformat())
    parser.add_argument("--puzzles-file", default=settings.puzzles_file)
    args = parser.parse_args(argv)

    repository = create_repository(args.puzzles_file)
    try:
        exists = repository.exists(args.date)
    except (OSError, ValueError, ValidationError) as e:
        logger.error(f"❌ Error checking puzzle: {e}")
        exists = False
    finally:
        repository.close()

    if exists:
        logger.info(f"✅ Puzzle for {args.date} already exists")
    else:
        logger.info(f"📭 No puzzle found for {args.date}")

    print(f"PUZZLE_EXISTS={'true' if exists else 'false'}")
    return 0 if exists else 1


if __name__ == "__main__":
    sys.exit(main())

#!/usr/bin/env python3
"""Print word usage statistics for the published corpus."""

import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import argparse
import logging

from pydantic import ValidationError

from daily_connections.config import settings
from daily_connections.database import create_repository
from daily_connections.reporting import render_usage_statistics
from daily_connections.validation import get_usage_statistics

logging.basicConfig(level=logging.INFO, format="%(message)s")
logger = logging.getLogger(__name__)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--puzzles-file", default=settings.puzzles_file)
    parser.add_argument("--limit", type=int, default=settings.corpus_limit)
    args = parser.parse_args(argv)

    repository = create_repository(args.puzzles_file)
    try:
        stats = get_usage_statistics(repository.list_recent(args.limit))
    except (ValueError, ValidationError) as e:
        logger.error(f"❌ {e}")
        return 1
    finally:
        repository.close()

    for line in render_usage_statistics(stats):
        logger.info(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())

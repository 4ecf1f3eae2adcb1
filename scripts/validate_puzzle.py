#!/usr/bin/env python3
"""Validate a puzzle file against the published corpus and optionally save it.

Exit status is 0 when the puzzle is accepted (or saved with --force), 1 otherwise.
"""

import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import argparse
import asyncio
import json
import logging

from pydantic import ValidationError

from daily_connections.config import settings
from daily_connections.database import create_repository
from daily_connections.models import ValidationPolicy
from daily_connections.pipeline import PuzzleIntakePipeline
from daily_connections.reporting import (
    display_validation_results, render_structure_issues, exit_code
)

logging.basicConfig(level=logging.INFO, format="%(message)s")
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("puzzle_file", help="JSON file holding one puzzle document")
    parser.add_argument("--puzzles-file", default=settings.puzzles_file, help="Published corpus file")
    parser.add_argument("--limit", type=int, default=settings.corpus_limit, help="Recent puzzles to compare against")

    reuse = parser.add_mutually_exclusive_group()
    reuse.add_argument("--allow-reuse", dest="allow_word_reuse", action="store_true", default=settings.allow_word_reuse)
    reuse.add_argument("--strict", dest="allow_word_reuse", action="store_false", help="Reject any reused word")

    parser.add_argument("--strict-explanations", action="store_true", help="Reject repeated group explanations")
    parser.add_argument("--min-overlap", type=int, default=settings.min_group_overlap)
    parser.add_argument("--quiet", action="store_true", help="Only summarize word reuse")
    parser.add_argument("--save", action="store_true", help="Save the puzzle when it is accepted")
    parser.add_argument("--force", action="store_true", help="Save the puzzle even when it is rejected")
    parser.add_argument("--no-cache", action="store_true", help="Read the corpus without the Redis cache")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    try:
        with open(args.puzzle_file, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"❌ Could not read {args.puzzle_file}: {e}")
        return 1

    if not isinstance(data, dict):
        logger.error(f"❌ {args.puzzle_file} must hold a single puzzle object")
        return 1

    try:
        policy = ValidationPolicy(
            allow_word_reuse=args.allow_word_reuse,
            allow_similar_explanations=not args.strict_explanations and settings.allow_similar_explanations,
            min_group_overlap=args.min_overlap,
            verbose=not args.quiet
        )
    except ValidationError as e:
        logger.error(f"❌ Invalid validation options: {e}")
        return 1

    repository = create_repository(args.puzzles_file, use_cache=False if args.no_cache else None)
    pipeline = PuzzleIntakePipeline(repository=repository, policy=policy, corpus_limit=args.limit)

    try:
        result = asyncio.run(pipeline.submit_puzzle(
            data,
            force=args.force,
            preview=not (args.save or args.force)
        ))
    except (ValueError, ValidationError) as e:
        logger.error(f"❌ Error validating puzzle: {e}")
        return 1
    finally:
        repository.close()

    if result["stage"] == "structure":
        for line in render_structure_issues(result["issues"]):
            logger.error(line)
        return 1

    valid = display_validation_results(result["validation"])

    if result["saved"]:
        logger.info(f"💾 Saved puzzle for {result['puzzle']['date']} to {args.puzzles_file}")
    elif not valid and args.save:
        logger.info("❌ Puzzle not saved; use --force to save anyway")

    return exit_code(valid or result["saved"])


if __name__ == "__main__":
    sys.exit(main())

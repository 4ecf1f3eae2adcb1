"""Structural and uniqueness validation for daily puzzles."""

from .structure import validate_structure, parse_puzzle, puzzle_to_document
from .uniqueness import (
    check_exact_duplicate,
    check_duplicate_words,
    check_duplicate_groups,
    check_similar_explanations,
    get_usage_statistics,
    validate
)

__all__ = [
    "validate_structure",
    "parse_puzzle",
    "puzzle_to_document",
    "check_exact_duplicate",
    "check_duplicate_words",
    "check_duplicate_groups",
    "check_similar_explanations",
    "get_usage_statistics",
    "validate"
]

"""Data models for the Daily Connections editorial service."""

from .puzzles import (
    Puzzle,
    PuzzleGroup,
    PuzzleCollection,
    PuzzleValidationRequest,
    PuzzleSubmissionRequest
)
from .validation import (
    ValidationPolicy,
    WordReuse,
    GroupOverlap,
    WordUsage,
    UsageStatistics,
    VerificationResult,
    StructureValidationResult
)

__all__ = [
    "Puzzle",
    "PuzzleGroup",
    "PuzzleCollection",
    "PuzzleValidationRequest",
    "PuzzleSubmissionRequest",
    "ValidationPolicy",
    "WordReuse",
    "GroupOverlap",
    "WordUsage",
    "UsageStatistics",
    "VerificationResult",
    "StructureValidationResult"
]

"""Puzzle data models for the Daily Connections editorial service."""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field

from .validation import ValidationPolicy


class PuzzleGroup(BaseModel):
    """A single group of four connected words within a puzzle."""

    model_config = ConfigDict(extra="ignore")

    words: List[str] = Field(..., description="Four words sharing the connection")
    explanation: str = Field(..., description="Short description of the shared connection")
    difficulty: Optional[int] = Field(None, description="Difficulty rank from 1 (easiest) to 4")
    color: Optional[str] = Field(None, description="Display color used by the game board")


class Puzzle(BaseModel):
    """One daily puzzle: sixteen words partitioned into four explained groups.

    Cardinalities are not enforced here so that malformed documents can be
    parsed and reported by the structure validator instead of failing early.
    Extra fields persisted alongside a puzzle are ignored.
    """

    model_config = ConfigDict(extra="ignore")

    date: str = Field(..., description="Publication date (YYYY-MM-DD), unique within the corpus")
    words: List[str] = Field(..., description="The sixteen words in display order")
    groups: List[PuzzleGroup] = Field(..., description="The four solution groups")

    def normalized_words(self) -> set:
        """Lower-cased word set used for case-insensitive comparisons."""
        return {word.lower() for word in self.words}


class PuzzleCollection(BaseModel):
    """On-disk document holding the published corpus."""

    puzzles: List[Puzzle] = Field(default_factory=list, description="Published puzzles sorted by date")


class PuzzleValidationRequest(BaseModel):
    """Request model for the validation endpoint."""

    puzzle: Dict[str, Any] = Field(..., description="Candidate puzzle document")
    policy: Optional[ValidationPolicy] = Field(
        None,
        description="Uniqueness policy overriding the configured defaults"
    )


class PuzzleSubmissionRequest(PuzzleValidationRequest):
    """Request model for the publish endpoint."""

    force: bool = Field(default=False, description="Save even when uniqueness validation fails")

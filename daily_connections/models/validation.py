"""Result and policy models for puzzle validation."""

from typing import List, Optional
from pydantic import BaseModel, Field

DEFAULT_MIN_GROUP_OVERLAP = 3
VERBOSE_DETAIL_LIMIT = 5
TOP_REUSED_LIMIT = 10


class ValidationPolicy(BaseModel):
    """Which uniqueness findings reject a candidate and which only warn."""

    allow_word_reuse: bool = Field(
        default=True,
        description="Treat reuse of individual words as a warning instead of a rejection"
    )
    allow_similar_explanations: bool = Field(
        default=True,
        description="Treat a repeated group explanation as a warning instead of a rejection"
    )
    min_group_overlap: int = Field(
        default=DEFAULT_MIN_GROUP_OVERLAP,
        ge=1,
        description="Shared words with a previous group that make a group a duplicate"
    )
    verbose: bool = Field(
        default=True,
        description="Include per-word reuse details in the warnings"
    )


class WordReuse(BaseModel):
    """A candidate word that already appeared in the corpus."""

    word: str = Field(..., description="Candidate word as written in the candidate")
    used_in_dates: List[str] = Field(
        default_factory=list,
        description="Dates of corpus puzzles containing the exact word"
    )


class GroupOverlap(BaseModel):
    """A candidate group sharing too many words with a previous group."""

    group_index: int = Field(..., description="Index of the candidate group")
    candidate_explanation: str
    candidate_words: List[str]
    previous_date: str
    previous_explanation: str
    overlapping_words: List[str] = Field(..., description="Shared words, lower-cased")
    overlap_count: int


class WordUsage(BaseModel):
    """Number of corpus puzzles a word appeared in."""

    word: str
    count: int


class UsageStatistics(BaseModel):
    """Aggregate word usage across the corpus."""

    total_unique_words: int = 0
    total_puzzles: int = 0
    top_reused_words: List[WordUsage] = Field(default_factory=list)
    average_puzzle_size: float = Field(
        default=0.0,
        description="Mean number of words per puzzle, 0 for an empty corpus"
    )


class VerificationResult(BaseModel):
    """Outcome of a uniqueness check.

    The message buckets are rendered from the structured fields below them;
    ``valid`` is true exactly when ``errors`` is empty.
    """

    valid: bool = True
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
    info: List[str] = Field(default_factory=list)

    exact_duplicate_date: Optional[str] = None
    duplicate_groups: List[GroupOverlap] = Field(default_factory=list)
    duplicate_words: List[WordReuse] = Field(default_factory=list)
    similar_explanations: List[str] = Field(default_factory=list)

    def add_error(self, message: str) -> None:
        self.errors.append(message)
        self.valid = False


class StructureValidationResult(BaseModel):
    """Outcome of the structural check that precedes uniqueness validation."""

    valid: bool = True
    issues: List[str] = Field(default_factory=list)

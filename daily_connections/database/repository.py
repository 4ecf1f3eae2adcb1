"""Puzzle repository interface and its cache-backed decorator."""

import logging
from abc import ABC, abstractmethod
from typing import List, Optional

from ..config import settings
from ..models.puzzles import Puzzle
from .cache import CacheManager

logger = logging.getLogger(__name__)


class PuzzleRepository(ABC):
    """Source of previously published puzzles."""

    @abstractmethod
    def list_recent(self, limit: Optional[int] = None) -> List[Puzzle]:
        """Return the most recent ``limit`` puzzles in ascending date order."""

    @abstractmethod
    def get_by_date(self, date: str) -> Optional[Puzzle]:
        """Return the puzzle published on ``date``, if any."""

    @abstractmethod
    def save(self, puzzle: Puzzle) -> bool:
        """Store a puzzle, replacing any puzzle with the same date.

        Returns True when a new date was added and False when an existing
        puzzle was replaced.
        """

    def exists(self, date: str) -> bool:
        """Check whether a puzzle is already published for ``date``."""
        return self.get_by_date(date) is not None

    def health_check(self) -> bool:
        return True

    def close(self) -> None:
        pass


class CachedPuzzleRepository(PuzzleRepository):
    """Read-through Redis cache in front of another repository."""

    def __init__(self, repository: PuzzleRepository, cache_manager: CacheManager, ttl: Optional[int] = None):
        self.repository = repository
        self.cache_manager = cache_manager
        self.ttl = ttl or settings.cache_ttl_seconds

    def list_recent(self, limit: Optional[int] = None) -> List[Puzzle]:
        if limit is None:
            limit = settings.corpus_limit

        cached = self.cache_manager.get_cached_corpus(limit)
        if cached is not None:
            logger.debug(f"Corpus cache hit for limit {limit}")
            return [Puzzle.model_validate(item) for item in cached]

        puzzles = self.repository.list_recent(limit)
        self.cache_manager.cache_corpus(
            limit,
            [puzzle.model_dump(exclude_none=True) for puzzle in puzzles],
            ttl=self.ttl
        )
        return puzzles

    def get_by_date(self, date: str) -> Optional[Puzzle]:
        cached = self.cache_manager.get_cached_puzzle(date)
        if cached is not None:
            return Puzzle.model_validate(cached)

        puzzle = self.repository.get_by_date(date)
        if puzzle:
            self.cache_manager.cache_puzzle(date, puzzle.model_dump(exclude_none=True), ttl=self.ttl)
        return puzzle

    def save(self, puzzle: Puzzle) -> bool:
        created = self.repository.save(puzzle)

        self.cache_manager.invalidate_corpus()
        self.cache_manager.cache_puzzle(puzzle.date, puzzle.model_dump(exclude_none=True), ttl=self.ttl)

        return created

    def health_check(self) -> bool:
        return self.repository.health_check() and self.cache_manager.health_check()

    def close(self) -> None:
        self.repository.close()
        self.cache_manager.close()

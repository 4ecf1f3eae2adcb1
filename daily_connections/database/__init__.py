"""Storage layer for the Daily Connections editorial service."""

from typing import Optional

from ..config import settings
from .cache import CacheManager
from .repository import PuzzleRepository, CachedPuzzleRepository
from .json_store import JsonPuzzleStore


def create_repository(puzzles_file: Optional[str] = None, use_cache: Optional[bool] = None) -> PuzzleRepository:
    """Build the configured repository: the JSON store, optionally behind Redis."""
    store = JsonPuzzleStore(puzzles_file)
    if use_cache is None:
        use_cache = settings.enable_corpus_cache
    if use_cache:
        return CachedPuzzleRepository(store, CacheManager())
    return store


__all__ = ["CacheManager", "PuzzleRepository", "CachedPuzzleRepository", "JsonPuzzleStore", "create_repository"]

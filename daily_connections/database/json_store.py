"""JSON file storage for the published puzzle corpus."""

import json
import logging
import os
from pathlib import Path
from typing import List, Optional

from ..config import settings
from ..models.puzzles import Puzzle, PuzzleCollection
from .repository import PuzzleRepository

logger = logging.getLogger(__name__)


class JsonPuzzleStore(PuzzleRepository):
    """Corpus kept in a ``{"puzzles": [...]}`` document sorted by date."""

    def __init__(self, path: Optional[str] = None):
        """Initialize the store; the file is created on first save."""
        self.path = Path(path or settings.puzzles_file)

    def load(self) -> PuzzleCollection:
        """Load the whole collection, empty when the file does not exist yet."""
        if not self.path.exists():
            logger.info(f"No puzzle file at {self.path}, starting with an empty corpus")
            return PuzzleCollection()

        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse puzzle file {self.path}: {e}")
            raise ValueError(f"Invalid puzzle file {self.path}: {e}")

        return PuzzleCollection.model_validate(data)

    def list_recent(self, limit: Optional[int] = None) -> List[Puzzle]:
        if limit is None:
            limit = settings.corpus_limit
        if limit <= 0:
            return []
        puzzles = sorted(self.load().puzzles, key=lambda puzzle: puzzle.date)
        return puzzles[-limit:]

    def get_by_date(self, date: str) -> Optional[Puzzle]:
        for puzzle in self.load().puzzles:
            if puzzle.date == date:
                return puzzle
        return None

    def save(self, puzzle: Puzzle) -> bool:
        collection = self.load()

        existing_index = next(
            (i for i, existing in enumerate(collection.puzzles) if existing.date == puzzle.date),
            None
        )
        if existing_index is not None:
            logger.warning(f"Puzzle for {puzzle.date} already exists, replacing it")
            collection.puzzles[existing_index] = puzzle
        else:
            collection.puzzles.append(puzzle)
            logger.info(f"Added new puzzle for {puzzle.date}")

        collection.puzzles.sort(key=lambda item: item.date)
        self._write(collection)

        return existing_index is None

    def _write(self, collection: PuzzleCollection) -> None:
        """Write the collection atomically next to the target file."""
        if self.path.parent and not self.path.parent.exists():
            self.path.parent.mkdir(parents=True, exist_ok=True)

        tmp_path = self.path.with_name(self.path.name + ".tmp")
        with tmp_path.open("w", encoding="utf-8") as f:
            json.dump(collection.model_dump(exclude_none=True), f, ensure_ascii=False, indent=2)
            f.write("\n")
        os.replace(tmp_path, self.path)

        logger.info(f"Saved {len(collection.puzzles)} puzzles to {self.path}")

    def health_check(self) -> bool:
        try:
            self.load()
            return True
        except Exception as e:
            logger.error(f"Puzzle store health check failed: {e}")
            return False

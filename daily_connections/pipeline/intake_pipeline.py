"""Intake pipeline deciding whether an authored puzzle gets published."""

import logging
from typing import Dict, Any, Mapping, Optional, Union
from datetime import datetime, timezone
import time

from ..models.puzzles import Puzzle
from ..models.validation import ValidationPolicy, VerificationResult
from ..database.repository import PuzzleRepository
from ..validation import validate_structure, parse_puzzle, validate, get_usage_statistics
from ..config import settings

logger = logging.getLogger(__name__)


class PuzzleIntakePipeline:
    """Structure check, uniqueness check against the recent corpus, then save."""

    def __init__(
        self,
        repository: PuzzleRepository,
        policy: Optional[ValidationPolicy] = None,
        corpus_limit: Optional[int] = None
    ):
        """Initialize the intake pipeline."""
        self.repository = repository
        self.policy = policy or settings.default_policy()
        self.corpus_limit = settings.corpus_limit if corpus_limit is None else corpus_limit

        # Pipeline statistics
        self.stats = {
            "total_submissions": 0,
            "accepted": 0,
            "rejected": 0,
            "forced": 0,
            "last_submission_time": None
        }

    async def submit_puzzle(
        self,
        data: Union[Mapping[str, Any], Puzzle],
        force: bool = False,
        preview: bool = False,
        policy: Optional[ValidationPolicy] = None
    ) -> Dict[str, Any]:
        """Validate a puzzle and save it when accepted, or when ``force`` is set.

        With ``preview`` the puzzle is checked but never saved.
        """
        start_time = time.time()

        check_result = await self.check_puzzle(data, policy=policy)
        if check_result["stage"] == "structure":
            self._update_stats(outcome="rejected")
            return check_result

        puzzle = Puzzle.model_validate(check_result["puzzle"])
        validation: VerificationResult = check_result["validation"]

        saved = False
        created = False
        if preview:
            logger.info(f"Preview mode, puzzle for {puzzle.date} not saved")
        elif validation.valid or force:
            if not validation.valid:
                logger.warning(f"Saving rejected puzzle for {puzzle.date} because force was requested")
            created = self.repository.save(puzzle)
            saved = True

        if validation.valid:
            self._update_stats(outcome="accepted")
        elif saved:
            self._update_stats(outcome="forced")
        else:
            self._update_stats(outcome="rejected")

        processing_time = time.time() - start_time
        logger.info(
            f"Puzzle for {puzzle.date} {'accepted' if validation.valid else 'rejected'}"
            f"{' and saved' if saved else ''} in {processing_time:.3f} seconds"
        )

        return {
            "success": validation.valid or saved,
            "stage": "complete",
            "saved": saved,
            "created": created,
            "puzzle": check_result["puzzle"],
            "validation": validation,
            "processing_time_seconds": processing_time
        }

    async def check_puzzle(
        self,
        data: Union[Mapping[str, Any], Puzzle],
        policy: Optional[ValidationPolicy] = None
    ) -> Dict[str, Any]:
        """Run the structure and uniqueness checks without saving anything."""
        structure = validate_structure(data)
        if not structure.valid:
            logger.warning(f"Structure validation failed with {len(structure.issues)} issue(s)")
            return {
                "success": False,
                "stage": "structure",
                "saved": False,
                "issues": structure.issues
            }

        puzzle = data if isinstance(data, Puzzle) else parse_puzzle(data)

        corpus = self.repository.list_recent(self.corpus_limit)
        logger.info(f"Checking puzzle for {puzzle.date} against {len(corpus)} recent puzzles")

        validation = validate(puzzle, corpus, policy or self.policy)

        return {
            "success": validation.valid,
            "stage": "uniqueness",
            "saved": False,
            "puzzle": puzzle.model_dump(exclude_none=True),
            "validation": validation
        }

    def get_statistics(self, limit: Optional[int] = None) -> Dict[str, Any]:
        """Word usage statistics over the recent corpus."""
        corpus = self.repository.list_recent(self.corpus_limit if limit is None else limit)
        return get_usage_statistics(corpus).model_dump()

    def _update_stats(self, outcome: str) -> None:
        """Update pipeline statistics."""
        self.stats["total_submissions"] += 1
        self.stats[outcome] += 1
        self.stats["last_submission_time"] = datetime.now(timezone.utc).isoformat()

    def get_status(self) -> Dict[str, Any]:
        """Get current pipeline status and statistics."""
        return {
            "pipeline_status": "operational",
            "repository": {
                "type": self.repository.__class__.__name__,
                "healthy": self.repository.health_check()
            },
            "statistics": self.stats,
            "configuration": {
                "policy": self.policy.model_dump(),
                "corpus_limit": self.corpus_limit,
                "enable_corpus_cache": settings.enable_corpus_cache
            }
        }

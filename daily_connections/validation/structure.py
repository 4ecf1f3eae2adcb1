"""Structural checks run on a raw puzzle document before uniqueness validation."""

import logging
from typing import Any, Dict, Mapping, Union

from ..models.puzzles import Puzzle
from ..models.validation import StructureValidationResult

logger = logging.getLogger(__name__)

WORDS_PER_PUZZLE = 16
GROUPS_PER_PUZZLE = 4
WORDS_PER_GROUP = 4


def validate_structure(data: Union[Mapping[str, Any], Puzzle]) -> StructureValidationResult:
    """Check that a puzzle has 16 distinct words partitioned exactly into 4 groups of 4."""
    if isinstance(data, Puzzle):
        data = data.model_dump()

    if not isinstance(data, Mapping):
        return StructureValidationResult(valid=False, issues=["Puzzle must be an object"])

    issues = []

    date = data.get("date")
    if not date:
        issues.append("Missing date")
    elif not isinstance(date, str):
        issues.append("Date must be a string")

    words = data.get("words")
    groups = data.get("groups")
    if not isinstance(words, list):
        issues.append("Words must be an array")
    if not isinstance(groups, list):
        issues.append("Groups must be an array")

    if issues and not (isinstance(words, list) and isinstance(groups, list)):
        return StructureValidationResult(valid=False, issues=issues)

    if len(words) != WORDS_PER_PUZZLE:
        issues.append(f"Must have exactly {WORDS_PER_PUZZLE} words (found {len(words)})")

    # Membership checks below only consider string entries
    if not all(isinstance(word, str) for word in words):
        issues.append("Words must be strings")
        words = [word for word in words if isinstance(word, str)]

    if len(set(words)) != len(words):
        issues.append("Contains duplicate words")

    if len(groups) != GROUPS_PER_PUZZLE:
        issues.append(f"Must have exactly {GROUPS_PER_PUZZLE} groups (found {len(groups)})")

    group_words = []
    for i, group in enumerate(groups, start=1):
        if not isinstance(group, Mapping):
            issues.append(f"Group {i} must be an object")
            continue

        members = group.get("words")
        if not isinstance(members, list) or len(members) != WORDS_PER_GROUP:
            issues.append(f"Group {i} must have exactly {WORDS_PER_GROUP} words")
        if not isinstance(members, list):
            continue

        if not all(isinstance(word, str) for word in members):
            issues.append(f"Group {i} words must be strings")
            members = [word for word in members if isinstance(word, str)]

        explanation = group.get("explanation")
        if not explanation:
            issues.append(f"Group {i} missing explanation")
        elif not isinstance(explanation, str):
            issues.append(f"Group {i} explanation must be a string")

        color = group.get("color")
        if color is not None and not isinstance(color, str):
            issues.append(f"Group {i} color must be a string")

        difficulty = group.get("difficulty")
        if difficulty is not None and (
            not isinstance(difficulty, int) or difficulty not in range(1, GROUPS_PER_PUZZLE + 1)
        ):
            issues.append(f"Group {i} difficulty must be between 1 and {GROUPS_PER_PUZZLE}")

        for word in members:
            if word not in words:
                issues.append(f'Word "{word}" in group {i} not in main words array')
        group_words.extend(members)

    missing_words = [word for word in words if word not in group_words]
    extra_words = [word for word in group_words if word not in words]

    if missing_words:
        issues.append(f"Words not in any group: {', '.join(missing_words)}")

    if extra_words:
        issues.append(f"Words in groups but not in main array: {', '.join(extra_words)}")

    return StructureValidationResult(valid=not issues, issues=issues)


def parse_puzzle(data: Mapping[str, Any]) -> Puzzle:
    """Build a Puzzle from a document that passed ``validate_structure``."""
    return Puzzle.model_validate(dict(data))


def puzzle_to_document(puzzle: Puzzle) -> Dict[str, Any]:
    """Serialize a puzzle the way it is persisted, omitting unset optional fields."""
    return puzzle.model_dump(exclude_none=True)

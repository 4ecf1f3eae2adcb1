"""Builders for puzzle documents used across the test suite."""

from typing import Dict, List, Sequence, Tuple

from daily_connections.models import Puzzle

COLORS = ["yellow", "green", "blue", "purple"]


def make_document(date: str, groups: Sequence[Tuple[Sequence[str], str]]) -> Dict:
    """Build a raw puzzle document whose word list is the groups in order."""
    return {
        "date": date,
        "words": [word for words, _ in groups for word in words],
        "groups": [
            {
                "words": list(words),
                "explanation": explanation,
                "difficulty": i + 1,
                "color": COLORS[i % len(COLORS)]
            }
            for i, (words, explanation) in enumerate(groups)
        ]
    }


def make_puzzle(date: str, groups: Sequence[Tuple[Sequence[str], str]]) -> Puzzle:
    return Puzzle.model_validate(make_document(date, groups))


def filler_groups(prefix: str, count: int) -> List[Tuple[List[str], str]]:
    """Groups of words that appear nowhere else."""
    return [
        ([f"{prefix}{g}-{w}" for w in range(4)], f"{prefix} group {g}")
        for g in range(count)
    ]


SAMPLE_GROUPS = [
    (["אדום", "כחול", "ירוק", "צהוב"], "צבעים"),
    (["שמש", "ירח", "כוכב", "שביט"], "גרמי שמיים"),
    (["תפוח", "בננה", "ענב", "אגס"], "פירות"),
    (["גיטרה", "תוף", "חליל", "כינור"], "כלי נגינה"),
]


def sample_puzzle(date: str = "2025-01-01") -> Puzzle:
    return make_puzzle(date, SAMPLE_GROUPS)

"""Duplicate and overlap detection against previously published puzzles.

Every function here is a pure decision over a candidate and a corpus snapshot.
Both are expected to be structurally valid ``Puzzle`` objects (see
``validation.structure``); the corpus is never modified.
"""

import logging
from typing import Dict, List, Optional, Sequence

from ..models.puzzles import Puzzle
from ..models.validation import (
    DEFAULT_MIN_GROUP_OVERLAP,
    TOP_REUSED_LIMIT,
    VERBOSE_DETAIL_LIMIT,
    GroupOverlap,
    UsageStatistics,
    ValidationPolicy,
    VerificationResult,
    WordReuse,
    WordUsage,
)

logger = logging.getLogger(__name__)


def _lowered_unique(words: Sequence[str]) -> List[str]:
    """Lower-case words, dropping repeats but keeping first-seen order."""
    return list(dict.fromkeys(word.lower() for word in words))


def get_all_used_words(corpus: Sequence[Puzzle]) -> set:
    """Get every word used in the corpus, lower-cased."""
    used_words = set()
    for puzzle in corpus:
        used_words.update(word.lower() for word in puzzle.words)
    return used_words


def get_all_used_explanations(corpus: Sequence[Puzzle]) -> set:
    """Get every group explanation used in the corpus, lower-cased."""
    return {
        group.explanation.lower()
        for puzzle in corpus
        for group in puzzle.groups
    }


def check_exact_duplicate(candidate: Puzzle, corpus: Sequence[Puzzle]) -> Optional[Puzzle]:
    """Return the first corpus puzzle with the candidate's date or the same word set."""
    candidate_words = candidate.normalized_words()

    for puzzle in corpus:
        if puzzle.date == candidate.date:
            return puzzle
        if puzzle.normalized_words() == candidate_words:
            return puzzle

    return None


def check_duplicate_words(candidate: Puzzle, corpus: Sequence[Puzzle]) -> List[WordReuse]:
    """Report every candidate word that already appeared somewhere in the corpus.

    Whether a word was seen is decided case-insensitively, while the dates
    listed for it are those of puzzles holding the exact spelling.
    """
    used_words = get_all_used_words(corpus)
    duplicates = []

    for word in candidate.words:
        if word.lower() not in used_words:
            continue

        used_in_dates = []
        for puzzle in corpus:
            if word in puzzle.words and puzzle.date not in used_in_dates:
                used_in_dates.append(puzzle.date)

        duplicates.append(WordReuse(word=word, used_in_dates=used_in_dates))

    return duplicates


def check_duplicate_groups(
    candidate: Puzzle,
    corpus: Sequence[Puzzle],
    min_overlap: int = DEFAULT_MIN_GROUP_OVERLAP
) -> List[GroupOverlap]:
    """Find candidate groups that share at least ``min_overlap`` words with a previous group.

    All qualifying (candidate group, previous group) pairs are reported.
    """
    previous_groups = [
        (puzzle.date, group.explanation, set(_lowered_unique(group.words)))
        for puzzle in corpus
        for group in puzzle.groups
    ]

    duplicate_groups = []
    for group_index, group in enumerate(candidate.groups):
        group_words = _lowered_unique(group.words)

        for previous_date, previous_explanation, previous_words in previous_groups:
            overlap = [word for word in group_words if word in previous_words]

            if len(overlap) >= min_overlap:
                duplicate_groups.append(GroupOverlap(
                    group_index=group_index,
                    candidate_explanation=group.explanation,
                    candidate_words=list(group.words),
                    previous_date=previous_date,
                    previous_explanation=previous_explanation,
                    overlapping_words=overlap,
                    overlap_count=len(overlap)
                ))

    return duplicate_groups


def check_similar_explanations(candidate: Puzzle, corpus: Sequence[Puzzle]) -> List[str]:
    """Return candidate explanations already used by a corpus group, ignoring case."""
    used_explanations = get_all_used_explanations(corpus)
    return [
        group.explanation
        for group in candidate.groups
        if group.explanation.lower() in used_explanations
    ]


def get_usage_statistics(corpus: Sequence[Puzzle]) -> UsageStatistics:
    """Count in how many puzzles each word appeared.

    Ties among the most reused words keep the order in which the words were
    first seen in the corpus.
    """
    word_count: Dict[str, int] = {}

    for puzzle in corpus:
        for word in _lowered_unique(puzzle.words):
            word_count[word] = word_count.get(word, 0) + 1

    reused_words = sorted(
        ((word, count) for word, count in word_count.items() if count > 1),
        key=lambda item: item[1],
        reverse=True
    )

    total_puzzles = len(corpus)
    if total_puzzles > 0:
        average_puzzle_size = sum(len(puzzle.words) for puzzle in corpus) / total_puzzles
    else:
        average_puzzle_size = 0.0

    return UsageStatistics(
        total_unique_words=len(word_count),
        total_puzzles=total_puzzles,
        top_reused_words=[
            WordUsage(word=word, count=count)
            for word, count in reused_words[:TOP_REUSED_LIMIT]
        ],
        average_puzzle_size=average_puzzle_size
    )


def validate(
    candidate: Puzzle,
    corpus: Sequence[Puzzle],
    policy: Optional[ValidationPolicy] = None
) -> VerificationResult:
    """Decide whether a candidate puzzle may be published.

    Checks run in a fixed order: exact duplicate (stops everything else when
    found), group overlap (always a rejection), individual word reuse and
    repeated explanations (rejections or warnings depending on the policy).
    """
    policy = policy or ValidationPolicy()
    result = VerificationResult()

    exact_duplicate = check_exact_duplicate(candidate, corpus)
    if exact_duplicate is not None:
        result.exact_duplicate_date = exact_duplicate.date
        result.add_error(f"Exact duplicate of puzzle from {exact_duplicate.date}")
        logger.debug(f"Candidate {candidate.date} duplicates puzzle {exact_duplicate.date}")
        return result

    # Groups
    duplicate_groups = check_duplicate_groups(candidate, corpus, policy.min_group_overlap)
    result.duplicate_groups = duplicate_groups
    if duplicate_groups:
        for overlap in duplicate_groups:
            result.add_error(
                f'Group "{overlap.candidate_explanation}" has {overlap.overlap_count}/4 words '
                f'from group "{overlap.previous_explanation}" ({overlap.previous_date}): '
                f'[{", ".join(overlap.overlapping_words)}]'
            )
    else:
        result.info.append(
            f"All groups are unique (no group has {policy.min_group_overlap}+ words from a previous group)"
        )

    # Individual words
    duplicate_words = check_duplicate_words(candidate, corpus)
    result.duplicate_words = duplicate_words
    if duplicate_words:
        if not policy.allow_word_reuse:
            for reuse in duplicate_words:
                result.add_error(f'Word "{reuse.word}" already used in: {", ".join(reuse.used_in_dates)}')
        else:
            result.warnings.append(
                f"{len(duplicate_words)} word(s) reused from previous puzzles "
                f"(spread across different groups - OK)"
            )
            if policy.verbose:
                for reuse in duplicate_words[:VERBOSE_DETAIL_LIMIT]:
                    result.warnings.append(f'   - "{reuse.word}" was in: {", ".join(reuse.used_in_dates)}')
                if len(duplicate_words) > VERBOSE_DETAIL_LIMIT:
                    result.warnings.append(f"   ... and {len(duplicate_words) - VERBOSE_DETAIL_LIMIT} more")
    else:
        result.info.append("No duplicate words found")

    # Explanations
    similar_explanations = check_similar_explanations(candidate, corpus)
    result.similar_explanations = similar_explanations
    if similar_explanations:
        if not policy.allow_similar_explanations:
            for explanation in similar_explanations:
                result.add_error(f'Explanation already used: "{explanation}"')
        else:
            result.warnings.append(f"{len(similar_explanations)} similar explanation(s) found")
    else:
        result.info.append("All explanations are unique")

    return result

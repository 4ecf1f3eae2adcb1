"""Console rendering of validation results and corpus statistics."""

import logging
from typing import List

from .models.validation import UsageStatistics, VerificationResult

logger = logging.getLogger(__name__)

RULE_WIDTH = 60
TABLE_WIDTH = 70


def render_validation_results(result: VerificationResult) -> List[str]:
    """Render the three message buckets and the verdict as printable lines."""
    lines = ["=" * RULE_WIDTH, "🔍 UNIQUENESS CHECK", "=" * RULE_WIDTH]

    if result.errors:
        lines.append("")
        lines.append("❌ ERRORS:")
        lines.extend(f"   {error}" for error in result.errors)

    if result.warnings:
        lines.append("")
        lines.append("⚠️  WARNINGS:")
        lines.extend(f"   {warning}" for warning in result.warnings)

    if result.info:
        lines.append("")
        lines.append("✅ INFO:")
        lines.extend(f"   {info}" for info in result.info)

    lines.append("")
    lines.append("=" * RULE_WIDTH)
    lines.append("✅ VALIDATION PASSED" if result.valid else "❌ VALIDATION FAILED")
    lines.append("=" * RULE_WIDTH)
    return lines


def display_validation_results(result: VerificationResult) -> bool:
    """Log the rendered result and return the verdict."""
    for line in render_validation_results(result):
        logger.info(line)
    return result.valid


def render_structure_issues(issues: List[str]) -> List[str]:
    """Render structural problems found before the uniqueness check."""
    return ["❌ Structure validation failed:"] + [f"   - {issue}" for issue in issues]


def render_usage_statistics(stats: UsageStatistics) -> List[str]:
    """Render corpus statistics with a table of the most reused words."""
    lines = [
        "=" * TABLE_WIDTH,
        "📊 PUZZLE STATISTICS",
        "=" * TABLE_WIDTH,
        "",
        f"📚 Total puzzles: {stats.total_puzzles}",
        f"🔤 Unique words used: {stats.total_unique_words}",
        f"📈 Average words per puzzle: {stats.average_puzzle_size:g}",
    ]

    if stats.top_reused_words:
        lines.extend([
            "",
            "⚠️  MOST REUSED WORDS:",
            "-" * TABLE_WIDTH,
            "   Word                 | Times Used",
            "-" * TABLE_WIDTH,
        ])
        for usage in stats.top_reused_words:
            lines.append(f"   {usage.word:<20} | {usage.count} times")
    else:
        lines.append("")
        lines.append("✅ No words have been reused yet!")

    lines.append("")
    lines.append("=" * TABLE_WIDTH)
    return lines


def exit_code(valid: bool) -> int:
    """Map a verdict to a process exit status."""
    return 0 if valid else 1

"""Tests for data models."""

import pytest
from pydantic import ValidationError

from daily_connections.config import Settings
from daily_connections.models import (
    Puzzle, PuzzleGroup, PuzzleCollection, PuzzleSubmissionRequest,
    ValidationPolicy, VerificationResult
)


class TestPuzzleModels:
    """Tests for puzzle models."""

    def test_puzzle_group(self):
        """Test PuzzleGroup model."""
        group = PuzzleGroup(words=["שמש", "ירח", "כוכב", "שביט"], explanation="גרמי שמיים", difficulty=2)

        assert len(group.words) == 4
        assert group.explanation == "גרמי שמיים"
        assert group.difficulty == 2
        assert group.color is None

    def test_cardinality_not_enforced_by_model(self):
        """Malformed sizes parse so that structure validation can report them."""
        puzzle = Puzzle(date="2025-01-01", words=["a"], groups=[])

        assert puzzle.words == ["a"]
        assert puzzle.groups == []

    def test_missing_fields_fail(self):
        with pytest.raises(ValidationError):
            Puzzle(date="2025-01-01", groups=[])

    def test_normalized_words(self):
        puzzle = Puzzle(date="2025-01-01", words=["Sun", "MOON"], groups=[])
        assert puzzle.normalized_words() == {"sun", "moon"}

    def test_collection_defaults_to_empty(self):
        assert PuzzleCollection().puzzles == []

    def test_submission_request_defaults(self):
        request = PuzzleSubmissionRequest(puzzle={"date": "2025-01-01"})

        assert request.force is False
        assert request.policy is None


class TestValidationModels:
    """Tests for policy and result models."""

    def test_policy_defaults(self):
        policy = ValidationPolicy()

        assert policy.allow_word_reuse is True
        assert policy.allow_similar_explanations is True
        assert policy.min_group_overlap == 3
        assert policy.verbose is True

    def test_policy_rejects_non_positive_overlap(self):
        with pytest.raises(ValidationError):
            ValidationPolicy(min_group_overlap=0)

    def test_add_error_flips_verdict(self):
        result = VerificationResult()
        assert result.valid is True

        result.add_error("boom")

        assert result.valid is False
        assert result.errors == ["boom"]


class TestSettings:
    """Tests for configuration."""

    def test_default_policy_from_settings(self):
        settings = Settings(allow_word_reuse=False, min_group_overlap=2, verbose_validation=False)

        policy = settings.default_policy()

        assert policy.allow_word_reuse is False
        assert policy.allow_similar_explanations is True
        assert policy.min_group_overlap == 2
        assert policy.verbose is False

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("CORPUS_LIMIT", "25")
        monkeypatch.setenv("ALLOW_SIMILAR_EXPLANATIONS", "false")

        settings = Settings()

        assert settings.corpus_limit == 25
        assert settings.allow_similar_explanations is False

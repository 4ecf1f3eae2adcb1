"""Pipeline orchestration for the Daily Connections editorial service."""

from .intake_pipeline import PuzzleIntakePipeline

__all__ = ["PuzzleIntakePipeline"]

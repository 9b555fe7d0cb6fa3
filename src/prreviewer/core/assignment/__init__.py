"""Reviewer selection logic."""
from .selector import MAX_REVIEWERS, RandomSource, ReviewerSelector

__all__ = [
    "MAX_REVIEWERS",
    "RandomSource",
    "ReviewerSelector",
]

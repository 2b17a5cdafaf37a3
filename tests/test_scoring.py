"""Tests for budget-based lead scoring."""

import pytest

from app.services.scoring import DEFAULT_SCORE, score_lead


@pytest.mark.parametrize("budget,expected", [
    ("500k+", 90),
    ("100k-500k", 75),
    ("50k-100k", 60),
    ("under-50k", DEFAULT_SCORE),
    ("", DEFAULT_SCORE),
    (None, DEFAULT_SCORE),
])
def test_score_lead(budget, expected):
    assert score_lead(budget) == expected


@pytest.mark.parametrize("budget", ["500K+", " 500k+ ", "100K-500K"])
def test_score_lead_requires_exact_bracket(budget):
    """Brackets come from a fixed form select; near-misses are not normalised."""
    assert score_lead(budget) == DEFAULT_SCORE

"""Tests for feedback levels and the compatibility rule."""

import itertools

import numpy as np
import pytest

from f1_setup.core.feedback import (
    BiasFeedback,
    FeedbackLevel,
    compatible_mask,
    feedback_compatible,
    feedback_matches,
)

_LEVELS: list[FeedbackLevel] = list(FeedbackLevel)


def test_levels_totally_ordered() -> None:
    """BAD < GOOD < GREAT < OPTIMAL."""
    assert (
        FeedbackLevel.BAD < FeedbackLevel.GOOD < FeedbackLevel.GREAT < FeedbackLevel.OPTIMAL
    )


def test_compatibility_reflexive() -> None:
    """Every level is compatible with itself."""
    for level in _LEVELS:
        assert feedback_compatible(level, level)


def test_compatibility_symmetric() -> None:
    """compatible(x, y) must equal compatible(y, x)."""
    for a, b in itertools.product(_LEVELS, repeat=2):
        assert feedback_compatible(a, b) == feedback_compatible(b, a)


def test_good_compatibility() -> None:
    """GOOD is compatible with BAD, GOOD and GREAT but not OPTIMAL."""
    assert feedback_compatible(FeedbackLevel.GOOD, FeedbackLevel.BAD)
    assert feedback_compatible(FeedbackLevel.GOOD, FeedbackLevel.GOOD)
    assert feedback_compatible(FeedbackLevel.GOOD, FeedbackLevel.GREAT)
    assert not feedback_compatible(FeedbackLevel.GOOD, FeedbackLevel.OPTIMAL)
    assert not feedback_compatible(FeedbackLevel.BAD, FeedbackLevel.GREAT)


def test_feedback_matches_requires_all_metrics() -> None:
    """One incompatible metric must reject the whole feedback."""
    expected = BiasFeedback.uniform(FeedbackLevel.GOOD)
    close = BiasFeedback(
        FeedbackLevel.BAD,
        FeedbackLevel.GOOD,
        FeedbackLevel.GREAT,
        FeedbackLevel.GOOD,
        FeedbackLevel.BAD,
    )
    far = BiasFeedback(
        FeedbackLevel.BAD,
        FeedbackLevel.GOOD,
        FeedbackLevel.GREAT,
        FeedbackLevel.GOOD,
        FeedbackLevel.OPTIMAL,
    )
    assert feedback_matches(close, expected)
    assert not feedback_matches(far, expected)


def test_compatible_mask_matches_scalar_rule() -> None:
    """Vectorised mask must agree with feedback_matches row by row."""
    rng = np.random.default_rng(1)
    ranks = rng.integers(0, 4, size=(200, 5))
    expected = BiasFeedback(
        FeedbackLevel.GREAT,
        FeedbackLevel.BAD,
        FeedbackLevel.OPTIMAL,
        FeedbackLevel.GOOD,
        FeedbackLevel.GREAT,
    )
    mask = compatible_mask(ranks, expected)
    for row, keep in zip(ranks, mask):
        assert feedback_matches(BiasFeedback.from_ranks(row), expected) == bool(keep)


def test_parse_accepts_names_and_labels() -> None:
    """parse() must be case-insensitive and ignore surrounding spaces."""
    assert FeedbackLevel.parse("optimal") is FeedbackLevel.OPTIMAL
    assert FeedbackLevel.parse(" Great ") is FeedbackLevel.GREAT
    assert FeedbackLevel.parse("BAD") is FeedbackLevel.BAD


def test_parse_rejects_unknown() -> None:
    """Unknown labels must raise ValueError."""
    with pytest.raises(ValueError, match="unknown feedback level"):
        FeedbackLevel.parse("excellent")


def test_bias_feedback_rejects_non_levels() -> None:
    """BiasFeedback fields must be FeedbackLevel members."""
    with pytest.raises(ValueError, match="must be a FeedbackLevel"):
        BiasFeedback("good", "good", "good", "good", "good")  # type: ignore[arg-type]


def test_ranks_round_trip_and_labels() -> None:
    """Ranks and labels must reflect the stored levels."""
    feedback = BiasFeedback(
        FeedbackLevel.OPTIMAL,
        FeedbackLevel.GREAT,
        FeedbackLevel.GOOD,
        FeedbackLevel.BAD,
        FeedbackLevel.GOOD,
    )
    assert feedback.as_ranks().tolist() == [3, 2, 1, 0, 1]
    assert BiasFeedback.from_ranks([3, 2, 1, 0, 1]) == feedback
    assert feedback.labels()["oversteer"] == "optimal"
    assert feedback.labels()["traction"] == "bad"

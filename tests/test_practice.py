"""Tests for the simulated practice driver and scripted programme."""

import pytest

from f1_setup.core.bias_model import compute_bias
from f1_setup.core.feedback import BiasFeedback, FeedbackLevel
from f1_setup.core.optimizer import IterativeOptimizer
from f1_setup.core.parameters import CarBias, SetupParameters
from f1_setup.core.practice import (
    rate_metric,
    run_practice_programme,
    simulate_practice_feedback,
)


def _sample_start() -> SetupParameters:
    return SetupParameters(0.3, 0.7, 0.4, 0.6, 0.5)


def test_rate_metric_bands() -> None:
    """Driver bands are 0.05 / 0.1 / 0.2 from the 0.5 target."""
    assert rate_metric(0.53) is FeedbackLevel.OPTIMAL
    assert rate_metric(0.42) is FeedbackLevel.GREAT
    assert rate_metric(0.65) is FeedbackLevel.GOOD
    assert rate_metric(0.1) is FeedbackLevel.BAD


def test_simulated_feedback_for_neutral_setup() -> None:
    """Middle setup: oversteer and braking feel optimal, the rest bad."""
    feedback = simulate_practice_feedback(compute_bias(SetupParameters.neutral()))
    assert feedback == BiasFeedback(
        FeedbackLevel.OPTIMAL,
        FeedbackLevel.OPTIMAL,
        FeedbackLevel.BAD,
        FeedbackLevel.BAD,
        FeedbackLevel.BAD,
    )


def test_simulated_feedback_perfect_bias() -> None:
    """On-target bias must be rated optimal everywhere."""
    feedback = simulate_practice_feedback(CarBias(0.5, 0.5, 0.5, 0.5, 0.5))
    assert feedback == BiasFeedback.uniform(FeedbackLevel.OPTIMAL)


def test_programme_records_every_round() -> None:
    """Each round is recorded in the session and chained to the next."""
    optimizer = IterativeOptimizer(seed=2024)
    rounds = run_practice_programme(optimizer, _sample_start(), attempts=3)

    assert 1 <= len(rounds) <= 3
    assert [r.attempt for r in rounds] == list(range(1, len(rounds) + 1))
    assert rounds[0].setup == _sample_start()
    assert optimizer.get_stats().attempt_count == len(rounds)
    for prev, nxt in zip(rounds, rounds[1:]):
        assert nxt.setup == prev.recommendation


def test_programme_confidence_matches_model() -> None:
    """Round confidence equals the session's prediction for that setup."""
    optimizer = IterativeOptimizer(seed=2024)
    for rnd in run_practice_programme(optimizer, _sample_start(), attempts=2):
        assert rnd.confidence == optimizer.predict_confidence(rnd.setup)


def test_programme_rejects_zero_attempts() -> None:
    """attempts must be >= 1."""
    with pytest.raises(ValueError, match="attempts"):
        run_practice_programme(IterativeOptimizer(seed=1), _sample_start(), attempts=0)

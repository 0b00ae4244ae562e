"""Tests for the candidate ranking score."""

import numpy as np
import pytest

from f1_setup.core.bias_model import bias_matrix, compute_bias
from f1_setup.core.confidence import compute_confidence, confidence_array
from f1_setup.core.parameters import CarBias, SetupParameters
from f1_setup.core.scoring import score_array, score_setup


def _evaluate(setup: SetupParameters) -> float:
    bias = compute_bias(setup)
    return score_setup(setup, bias, compute_confidence(bias))


def test_neutral_setup_gets_full_balance_bonus() -> None:
    """Middle setup: 35 confidence + 10 balance bonus, no extreme penalty."""
    assert _evaluate(SetupParameters.neutral()) == pytest.approx(45.0)


def test_extreme_setup_gets_no_balance_bonus() -> None:
    """All-ones setup has balance 0.5, so the score equals its confidence."""
    assert _evaluate(SetupParameters(1.0, 1.0, 1.0, 1.0, 1.0)) == pytest.approx(75.0)


def test_bias_above_one_penalised() -> None:
    """Each unit of bias above 1.0 costs 50 points."""
    setup = SetupParameters.neutral()
    bias = CarBias(0.5, 0.5, 0.5, 0.5, 1.2)
    assert score_setup(setup, bias, 80.0) == pytest.approx(80.0 + 10.0 - 10.0)


def test_bias_below_zero_penalised() -> None:
    """Each unit of bias below 0.0 costs 50 points."""
    setup = SetupParameters.neutral()
    bias = CarBias(-0.1, 0.5, 0.5, 0.5, 0.5)
    assert score_setup(setup, bias, 80.0) == pytest.approx(85.0)


def test_score_floored_at_zero() -> None:
    """All-zeros setup overshoots cornering and straights; score floors at 0."""
    assert _evaluate(SetupParameters(0.0, 0.0, 0.0, 0.0, 0.0)) == 0.0


def test_score_array_matches_scalar() -> None:
    """Vectorised scores must equal score_setup exactly."""
    rng = np.random.default_rng(21)
    setups = rng.random((30, 5))
    biases = bias_matrix(setups)
    confidences = confidence_array(biases)
    scores = score_array(setups, biases, confidences)
    for i in range(len(setups)):
        expected = score_setup(
            SetupParameters.from_array(setups[i]),
            CarBias.from_array(biases[i]),
            float(confidences[i]),
        )
        assert scores[i] == expected
        assert scores[i] >= 0.0

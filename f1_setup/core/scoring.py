"""Ranking score for candidate setups.

The score rewards confidence, adds a bonus for setups that stay near the
middle of every slider, and penalises bias values that leave ``[0, 1]``.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from f1_setup.core.parameters import CarBias, SetupParameters

BALANCE_WEIGHT: float = 20.0
EXTREME_BIAS_WEIGHT: float = 50.0


def score_array(
    setups: NDArray[np.float64],
    biases: NDArray[np.float64],
    confidences: NDArray[np.float64],
) -> NDArray[np.float64]:
    """Vectorised :func:`score_setup`.

    Args:
        setups: Setup rows, shape ``(N, 5)``.
        biases: Bias rows, shape ``(N, 5)``.
        confidences: Confidence per row, shape ``(N,)``.

    Returns:
        Scores, shape ``(N,)``, floored at zero.
    """
    setups = np.asarray(setups, dtype=np.float64)
    biases = np.asarray(biases, dtype=np.float64)
    n_params = setups.shape[-1]

    deviation = np.abs(setups - 0.5)
    balance = np.zeros(setups.shape[:-1])
    for k in range(n_params):
        balance = balance + deviation[..., k]
    balance = balance / n_params

    overflow = np.where(
        biases < 0.0,
        np.abs(biases) * EXTREME_BIAS_WEIGHT,
        np.where(biases > 1.0, np.abs(biases - 1.0) * EXTREME_BIAS_WEIGHT, 0.0),
    )
    extreme = np.zeros(biases.shape[:-1])
    for j in range(biases.shape[-1]):
        extreme = extreme + overflow[..., j]

    score = np.asarray(confidences, dtype=np.float64) + (0.5 - balance) * BALANCE_WEIGHT
    score = score - extreme
    return np.maximum(0.0, score)


def score_setup(setup: SetupParameters, bias: CarBias, confidence: float) -> float:
    """Return the ranking score of a single setup (higher is better)."""
    return float(score_array(setup.as_array(), bias.as_array(), np.float64(confidence)))

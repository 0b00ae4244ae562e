"""Confidence scoring and feedback classification of bias vectors.

Every metric is measured against a flat target of 0.5.  The model's
neutral bias (``INITIAL_BIAS``) differs from 0.5 for most metrics, so the
middle setup scores only 35% confidence; this matches the reference
calculator and is kept as-is.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from f1_setup.core.feedback import BiasFeedback, FeedbackLevel
from f1_setup.core.parameters import CarBias

TARGET_BIAS: float = 0.5

# Distance-from-target tolerances, tightest first.
OPTIMAL_TOLERANCE: float = 0.007
GREAT_TOLERANCE: float = 0.04
GOOD_TOLERANCE: float = 0.1

MAX_CONFIDENCE: float = 100.0
MAX_METRIC_PENALTY: float = 20.0
PENALTY_PER_UNIT: float = 100.0  # 1% per 0.01 of distance


# ---------------------------------------------------------------------------
# Confidence
# ---------------------------------------------------------------------------


def confidence_array(biases: NDArray[np.float64]) -> NDArray[np.float64]:
    """Vectorised confidence for bias rows of shape ``(N, 5)``.

    Penalties are subtracted metric by metric from 100 in metric order, then
    the result is floored at zero.
    """
    biases = np.asarray(biases, dtype=np.float64)
    distances = np.abs(biases - TARGET_BIAS)
    penalties = np.where(
        distances > OPTIMAL_TOLERANCE,
        np.minimum(distances * PENALTY_PER_UNIT, MAX_METRIC_PENALTY),
        0.0,
    )
    total = np.full(biases.shape[:-1], MAX_CONFIDENCE)
    for j in range(biases.shape[-1]):
        total = total - penalties[..., j]
    return np.maximum(0.0, total)


def compute_confidence(bias: CarBias) -> float:
    """Return the confidence (0-100) that *bias* is close to ideal.

    Each metric further than 0.007 from 0.5 costs ``distance * 100`` points,
    capped at 20 per metric.
    """
    return float(confidence_array(bias.as_array()))


# ---------------------------------------------------------------------------
# Feedback classification
# ---------------------------------------------------------------------------


def classify_distance(distances: NDArray[np.float64]) -> NDArray[np.int_]:
    """Map distances from target to :class:`FeedbackLevel` ranks."""
    distances = np.asarray(distances, dtype=np.float64)
    return np.select(
        [
            distances <= OPTIMAL_TOLERANCE,
            distances <= GREAT_TOLERANCE,
            distances <= GOOD_TOLERANCE,
        ],
        [int(FeedbackLevel.OPTIMAL), int(FeedbackLevel.GREAT), int(FeedbackLevel.GOOD)],
        default=int(FeedbackLevel.BAD),
    )


def classify_bias_metric(value: float) -> FeedbackLevel:
    """Classify a single bias metric by its own distance from 0.5."""
    return FeedbackLevel(int(classify_distance(abs(value - TARGET_BIAS))))


def classify_feedback(bias: CarBias) -> FeedbackLevel:
    """Classify a whole bias vector by its mean distance from 0.5."""
    distances = np.abs(bias.as_array() - TARGET_BIAS)
    mean_distance = sum(distances.tolist()) / len(distances)
    return FeedbackLevel(int(classify_distance(mean_distance)))


def metric_feedback_ranks(biases: NDArray[np.float64]) -> NDArray[np.int_]:
    """Per-metric feedback ranks for bias rows of shape ``(N, 5)``."""
    return classify_distance(np.abs(np.asarray(biases) - TARGET_BIAS))


def isolated_feedback_ranks(biases: NDArray[np.float64]) -> NDArray[np.int_]:
    """Per-metric ranks with the other four metrics held at 0.5.

    Holding the others at the target makes their distances zero, so the
    whole-vector mean reduces to the metric's own distance divided by five.
    """
    distances = np.abs(np.asarray(biases) - TARGET_BIAS)
    return classify_distance(distances / distances.shape[-1])


def metric_feedback(bias: CarBias) -> BiasFeedback:
    """Feedback a setup should produce, classifying each metric on its own."""
    return BiasFeedback.from_ranks(metric_feedback_ranks(bias.as_array()))


def isolated_feedback(bias: CarBias) -> BiasFeedback:
    """Feedback from :func:`classify_feedback` applied to each metric in isolation."""
    return BiasFeedback.from_ranks(isolated_feedback_ranks(bias.as_array()))

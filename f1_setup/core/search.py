"""Brute-force setup search over a discretised parameter grid.

The grid is the Cartesian product of ``steps + 1`` evenly spaced levels in
``[0, 1]`` for each of the five setup parameters (optionally thinned with a
``stride``).  Grid points are evaluated in numpy batches; the full 21^5 search
is partitioned by front-wing level and the per-partition leaders are merged
with a stable sort, so ties always resolve in enumeration order.
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Iterator
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from f1_setup.core.bias_model import bias_matrix, compute_bias
from f1_setup.core.confidence import (
    compute_confidence,
    confidence_array,
    isolated_feedback_ranks,
    metric_feedback,
    metric_feedback_ranks,
)
from f1_setup.core.feedback import BiasFeedback, compatible_mask
from f1_setup.core.parameters import PARAMETER_NAMES, CarBias, SetupParameters
from f1_setup.core.scoring import score_array, score_setup

logger = logging.getLogger(__name__)

_RANK_KEYS: tuple[str, ...] = ("score", "confidence")


# ---------------------------------------------------------------------------
# Candidate container
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SetupCandidate:
    """An evaluated setup.

    Attributes:
        setup: The setup that was evaluated.
        bias: Bias produced by the setup.
        confidence: Confidence in ``[0, 100]``.
        feedback: Per-metric feedback the setup is expected to produce.
        score: Ranking score (>= 0).
    """

    setup: SetupParameters
    bias: CarBias
    confidence: float
    feedback: BiasFeedback
    score: float


def evaluate_setup(setup: SetupParameters) -> SetupCandidate:
    """Compute bias, confidence, feedback and score for one setup."""
    bias = compute_bias(setup)
    confidence = compute_confidence(bias)
    return SetupCandidate(
        setup=setup,
        bias=bias,
        confidence=confidence,
        feedback=metric_feedback(bias),
        score=score_setup(setup, bias, confidence),
    )


# ---------------------------------------------------------------------------
# Grid enumeration
# ---------------------------------------------------------------------------


def _check_grid(steps: int, stride: int) -> None:
    if steps < 1:
        raise ValueError("steps must be >= 1.")
    if stride < 1:
        raise ValueError("stride must be >= 1.")


def iter_setup_grid(steps: int, stride: int = 1) -> Iterator[SetupParameters]:
    """Lazily enumerate grid setups, last parameter varying fastest.

    This is the public, one-setup-at-a-time form of the grid for callers
    that stream or partition the enumeration themselves.  The search
    functions in this module use the equivalent batch form,
    :func:`setup_grid`, which yields the same points in the same order.

    Args:
        steps: Number of intervals per parameter; levels are ``i / steps``.
        stride: Step between consecutive level indices.

    Yields:
        :class:`SetupParameters` for every grid point.
    """
    _check_grid(steps, stride)
    indices = range(0, steps + 1, stride)
    for combo in itertools.product(indices, repeat=len(PARAMETER_NAMES)):
        yield SetupParameters(*(i / steps for i in combo))


def setup_grid(
    steps: int,
    stride: int = 1,
    first_level: int | None = None,
) -> NDArray[np.float64]:
    """Return grid setups as an array of shape ``(N, 5)``.

    Rows follow the same order as :func:`iter_setup_grid`.

    Args:
        steps: Number of intervals per parameter.
        stride: Step between consecutive level indices.
        first_level: If given, restrict the front-wing parameter to the
            single level index ``first_level`` (a partition of the grid).

    Raises:
        ValueError: If the grid arguments are invalid.
    """
    _check_grid(steps, stride)
    levels = np.arange(0, steps + 1, stride) / steps
    axes = [levels] * len(PARAMETER_NAMES)
    if first_level is not None:
        if not 0 <= first_level <= steps:
            raise ValueError(f"first_level must be in [0, {steps}], got {first_level}.")
        axes[0] = np.array([first_level / steps])
    mesh = np.meshgrid(*axes, indexing="ij")
    return np.stack([m.ravel() for m in mesh], axis=1)


# ---------------------------------------------------------------------------
# Candidate generation
# ---------------------------------------------------------------------------


def _ranked_order(keys: NDArray[np.float64]) -> NDArray[np.intp]:
    # Stable descending order: ties keep enumeration order.
    return np.argsort(-keys, kind="stable")


def generate_candidates(
    steps: int,
    stride: int = 1,
    target: BiasFeedback | None = None,
    rank_by: str = "score",
) -> list[SetupCandidate]:
    """Evaluate every grid point and return ranked candidates.

    Args:
        steps: Number of intervals per parameter.
        stride: Step between consecutive level indices.
        target: Optional feedback constraint.  A grid point is kept only if
            its isolated per-metric feedback is compatible with *target* on
            all five metrics.
        rank_by: ``"score"`` or ``"confidence"``.

    Returns:
        Candidates sorted descending by *rank_by*.

    Raises:
        ValueError: If *rank_by* is unknown or the grid is invalid.
    """
    if rank_by not in _RANK_KEYS:
        raise ValueError(f"rank_by must be one of {_RANK_KEYS}, got {rank_by!r}.")

    setups = setup_grid(steps, stride)
    biases = bias_matrix(setups)
    confidences = confidence_array(biases)

    if target is not None:
        keep = compatible_mask(isolated_feedback_ranks(biases), target)
        setups, biases, confidences = setups[keep], biases[keep], confidences[keep]

    scores = score_array(setups, biases, confidences)
    ranks = metric_feedback_ranks(biases)
    order = _ranked_order(scores if rank_by == "score" else confidences)

    candidates = [
        SetupCandidate(
            setup=SetupParameters.from_array(setups[i]),
            bias=CarBias.from_array(biases[i]),
            confidence=float(confidences[i]),
            feedback=BiasFeedback.from_ranks(ranks[i]),
            score=float(scores[i]),
        )
        for i in order
    ]
    logger.debug(
        "generated %d candidates (steps=%d, stride=%d, constrained=%s)",
        len(candidates),
        steps,
        stride,
        target is not None,
    )
    return candidates


def find_optimal_setup(
    feedback: BiasFeedback | None = None,
    steps: int = 20,
    top_n: int = 10,
) -> list[SetupParameters]:
    """Search the full grid for the highest-confidence setups.

    The grid is split by front-wing level; each partition contributes its
    own top *top_n* rows and the union is re-ranked.

    Args:
        feedback: Optional feedback constraint (see
            :func:`generate_candidates`).
        steps: Number of intervals per parameter (20 gives 0.05 spacing).
        top_n: Number of setups to return.

    Returns:
        Up to *top_n* setups, best first.  Empty if nothing matches.

    Raises:
        ValueError: If ``top_n < 0`` or the grid is invalid.
    """
    if top_n < 0:
        raise ValueError("top_n must be >= 0.")
    _check_grid(steps, 1)

    leaders: list[NDArray[np.float64]] = []
    leader_conf: list[NDArray[np.float64]] = []

    for level in range(steps + 1):
        setups = setup_grid(steps, first_level=level)
        biases = bias_matrix(setups)
        confidences = confidence_array(biases)
        if feedback is not None:
            keep = compatible_mask(isolated_feedback_ranks(biases), feedback)
            setups, confidences = setups[keep], confidences[keep]
        best = _ranked_order(confidences)[:top_n]
        leaders.append(setups[best])
        leader_conf.append(confidences[best])

    all_setups = np.concatenate(leaders)
    all_conf = np.concatenate(leader_conf)
    order = _ranked_order(all_conf)[:top_n]
    logger.debug("grid search kept %d of %d leaders", len(order), len(all_conf))
    return [SetupParameters.from_array(all_setups[i]) for i in order]

"""Scripted practice programme with a simulated driver.

The simulated driver rates each bias metric by its distance from 0.5 using
looser bands than the optimiser's own classifier (a driver's feel is coarser
than the model), which lets a session be exercised end to end without a
human in the loop.
"""

from __future__ import annotations

from dataclasses import dataclass

from f1_setup.core.bias_model import compute_bias
from f1_setup.core.confidence import TARGET_BIAS, compute_confidence
from f1_setup.core.feedback import BiasFeedback, FeedbackLevel
from f1_setup.core.optimizer import IterativeOptimizer
from f1_setup.core.parameters import BIAS_NAMES, CarBias, SetupParameters

# Driver rating bands, tightest first.
DRIVER_OPTIMAL_BAND: float = 0.05
DRIVER_GREAT_BAND: float = 0.1
DRIVER_GOOD_BAND: float = 0.2


def rate_metric(value: float) -> FeedbackLevel:
    """Rate one bias metric the way the simulated driver would."""
    distance = abs(value - TARGET_BIAS)
    if distance <= DRIVER_OPTIMAL_BAND:
        return FeedbackLevel.OPTIMAL
    if distance <= DRIVER_GREAT_BAND:
        return FeedbackLevel.GREAT
    if distance <= DRIVER_GOOD_BAND:
        return FeedbackLevel.GOOD
    return FeedbackLevel.BAD


def simulate_practice_feedback(bias: CarBias) -> BiasFeedback:
    """Return the feedback the simulated driver reports for *bias*."""
    return BiasFeedback(*(rate_metric(getattr(bias, name)) for name in BIAS_NAMES))


@dataclass(frozen=True)
class PracticeRound:
    """One practice run of a scripted programme.

    Attributes:
        attempt: 1-based attempt number.
        setup: Setup that was run.
        confidence: Model confidence of *setup*.
        feedback: Simulated driver feedback.
        recommendation: Next setup proposed by the optimiser, or ``None`` if
            the pool was empty.
    """

    attempt: int
    setup: SetupParameters
    confidence: float
    feedback: BiasFeedback
    recommendation: SetupParameters | None


def run_practice_programme(
    optimizer: IterativeOptimizer,
    start_setup: SetupParameters,
    attempts: int = 3,
) -> list[PracticeRound]:
    """Play record-then-recommend rounds against the simulated driver.

    Each round runs the current setup, records the driver's feedback and
    switches to the optimiser's top recommendation.  The programme stops
    early once the optimiser reports an optimal setup, or when no
    recommendation is available.

    Args:
        optimizer: Session to drive.
        start_setup: Setup for the first run.
        attempts: Maximum number of practice runs (>= 1).

    Returns:
        One :class:`PracticeRound` per run, in order.

    Raises:
        ValueError: If attempts < 1.
    """
    if attempts < 1:
        raise ValueError("attempts must be >= 1.")

    rounds: list[PracticeRound] = []
    current = start_setup

    for attempt in range(1, attempts + 1):
        bias = compute_bias(current)
        feedback = simulate_practice_feedback(bias)
        optimizer.record_attempt(current, feedback)

        recommendations = optimizer.get_best_recommendations(1)
        nxt = recommendations[0] if recommendations else None
        rounds.append(
            PracticeRound(
                attempt=attempt,
                setup=current,
                confidence=compute_confidence(bias),
                feedback=feedback,
                recommendation=nxt,
            )
        )

        if nxt is None or optimizer.is_optimal():
            break
        current = nxt

    return rounds

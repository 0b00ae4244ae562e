"""Iterative setup optimiser driven by practice-session feedback.

An :class:`IterativeOptimizer` is one tuning session.  It owns a pool of
scored candidate setups and the history of recorded practice attempts:

1. The pool starts as a coarse grid (6 levels per parameter by default).
2. Each recorded attempt filters the pool down to candidates whose expected
   per-metric feedback is compatible with what the driver reported.
3. When filtering leaves too few candidates, new ones are drawn by randomly
   perturbing the best survivors and kept if they are also compatible.

All randomness comes from a per-session ``numpy.random.Generator`` so that
sessions are reproducible when a seed is supplied.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

import numpy as np
from numpy.random import Generator

from f1_setup.config import OptimizerConfig
from f1_setup.core.bias_model import compute_bias
from f1_setup.core.confidence import compute_confidence
from f1_setup.core.feedback import BiasFeedback, feedback_matches
from f1_setup.core.parameters import (
    PARAMETER_NAMES,
    SetupParameters,
    ValidationError,
    validate_setup,
)
from f1_setup.core.search import SetupCandidate, evaluate_setup, generate_candidates

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AttemptRecord:
    """A practice run reported by the driver.

    Attributes:
        setup: Setup that was run.
        feedback: Feedback reported for each bias metric.
        confidence: Model confidence of *setup* at the time of recording.
    """

    setup: SetupParameters
    feedback: BiasFeedback
    confidence: float


@dataclass(frozen=True)
class OptimizerStats:
    """Snapshot of a session.

    Attributes:
        pool_size: Number of candidates in the pool.
        attempt_count: Number of recorded attempts.
        best_confidence: Confidence of the top-ranked candidate (0 if empty).
        convergence_rate: Mean confidence gain per attempt (>= 0).
    """

    pool_size: int
    attempt_count: int
    best_confidence: float
    convergence_rate: float


# ---------------------------------------------------------------------------
# Session
# ---------------------------------------------------------------------------


class IterativeOptimizer:
    """Narrow a candidate pool toward the optimal setup, attempt by attempt."""

    def __init__(
        self,
        config: OptimizerConfig | None = None,
        rng: Generator | None = None,
        seed: int | None = None,
    ) -> None:
        """Create a session and build its starting pool.

        Args:
            config: Search settings.  Defaults to :class:`OptimizerConfig`.
            rng: Random source for perturbations.  Takes precedence over
                *seed*.
            seed: Seed for a fresh ``numpy.random.Generator`` when *rng* is
                not given.
        """
        self.config: OptimizerConfig = config if config is not None else OptimizerConfig()
        self._rng: Generator = rng if rng is not None else np.random.default_rng(seed)
        self._candidates: list[SetupCandidate] = []
        self._history: list[AttemptRecord] = []
        self._initialize_candidates()

    # -- properties ----------------------------------------------------------

    @property
    def candidates(self) -> tuple[SetupCandidate, ...]:
        """The current pool, best first."""
        return tuple(self._candidates)

    @property
    def attempt_history(self) -> tuple[AttemptRecord, ...]:
        return tuple(self._history)

    # -- pool management -----------------------------------------------------

    def _initialize_candidates(self) -> None:
        self._candidates = generate_candidates(
            self.config.pool_steps, self.config.pool_stride, rank_by="score"
        )
        logger.debug("initial pool holds %d candidates", len(self._candidates))

    def _sort_candidates(self) -> None:
        self._candidates.sort(key=lambda c: c.score, reverse=True)

    def _narrow_candidates(self, feedback: BiasFeedback) -> None:
        before = len(self._candidates)
        self._candidates = [
            c for c in self._candidates if feedback_matches(c.feedback, feedback)
        ]
        logger.debug("feedback filter kept %d of %d candidates", len(self._candidates), before)

        if len(self._candidates) < self.config.min_pool_size:
            self._expand_candidates_around_best(feedback)

        self._sort_candidates()

    def _expand_candidates_around_best(self, feedback: BiasFeedback) -> None:
        top = self._candidates[: self.config.expand_top]
        added: list[SetupCandidate] = []

        for candidate in top:
            for variation in self.generate_variations(
                candidate.setup,
                self.config.perturbation_range,
                self.config.variations_per_candidate,
            ):
                evaluated = evaluate_setup(variation)
                if feedback_matches(evaluated.feedback, feedback):
                    added.append(evaluated)

        self._candidates.extend(added)
        logger.debug(
            "pool depleted; regenerated %d candidates around %d leaders",
            len(added),
            len(top),
        )

    def generate_variations(
        self,
        base: SetupParameters,
        spread: float,
        count: int,
    ) -> list[SetupParameters]:
        """Draw *count* random perturbations of *base*.

        Each parameter moves by ``(u - 0.5) * spread`` with ``u`` uniform in
        ``[0, 1)``, then is clamped to ``[0, 1]``.  Draws are taken
        variation by variation, parameter by parameter.

        Raises:
            ValueError: If *count* is negative.
        """
        if count < 0:
            raise ValueError("count must be >= 0.")
        jitter = (self._rng.random((count, len(PARAMETER_NAMES))) - 0.5) * spread
        values = np.clip(base.as_array() + jitter, 0.0, 1.0)
        return [SetupParameters.from_array(row) for row in values]

    # -- public API ----------------------------------------------------------

    def record_attempt(self, setup: SetupParameters, feedback: BiasFeedback) -> None:
        """Record a practice run and narrow the pool.

        Args:
            setup: The setup that was run.  Every value must be in ``[0, 1]``.
            feedback: Feedback reported for each bias metric.

        Raises:
            ValidationError: If *setup* is out of range or *feedback* is not
                a :class:`BiasFeedback`.
        """
        validate_setup(setup)
        if not isinstance(feedback, BiasFeedback):
            raise ValidationError(
                f"feedback must be BiasFeedback, got {type(feedback).__name__}."
            )

        confidence = compute_confidence(compute_bias(setup))
        self._history.append(
            AttemptRecord(setup=setup, feedback=feedback, confidence=confidence)
        )
        self._narrow_candidates(feedback)

    def get_best_recommendations(self, count: int = 5) -> list[SetupParameters]:
        """Return the setups of the top *count* candidates (may be empty)."""
        if count < 0:
            raise ValueError("count must be >= 0.")
        return [c.setup for c in self._candidates[:count]]

    def predict_confidence(self, setup: SetupParameters) -> float:
        """Return the model confidence of *setup*, independent of the pool.

        Raises:
            ValidationError: If *setup* is out of range.
        """
        validate_setup(setup)
        return compute_confidence(compute_bias(setup))

    def convergence_rate(self) -> float:
        """Mean confidence change between consecutive attempts, floored at 0."""
        if len(self._history) < 2:
            return 0.0
        confidences = [record.confidence for record in self._history]
        improvements = [b - a for a, b in zip(confidences, confidences[1:])]
        return max(0.0, sum(improvements) / len(improvements))

    def get_stats(self) -> OptimizerStats:
        best = self._candidates[0].confidence if self._candidates else 0.0
        return OptimizerStats(
            pool_size=len(self._candidates),
            attempt_count=len(self._history),
            best_confidence=best,
            convergence_rate=self.convergence_rate(),
        )

    def is_optimal(self) -> bool:
        """True if the top candidate reaches the optimal confidence."""
        if not self._candidates:
            return False
        return self._candidates[0].confidence >= self.config.optimal_confidence

    def estimate_attempts_to_optimal(self) -> int:
        """Estimate the practice runs still needed to reach an optimal setup."""
        stats = self.get_stats()
        target = self.config.optimal_confidence

        if stats.best_confidence >= target:
            return 0
        if stats.convergence_rate <= 0.0:
            return self.config.default_attempt_estimate

        remaining = target - stats.best_confidence
        return math.ceil(remaining / stats.convergence_rate)

    def reset(self) -> None:
        """Discard the attempt history and rebuild the starting pool."""
        self._history = []
        self._initialize_candidates()
        logger.info("session reset; pool rebuilt with %d candidates", len(self._candidates))

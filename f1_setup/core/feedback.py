"""Practice-session feedback levels and the compatibility rule.

Feedback is ordinal: ``BAD < GOOD < GREAT < OPTIMAL``.  Two levels are
*compatible* when they are at most one step apart, which is how a noisy
driver report is matched against the feedback a setup should produce.
"""

from __future__ import annotations

from dataclasses import astuple, dataclass
from enum import IntEnum

import numpy as np
from numpy.typing import NDArray

from f1_setup.core.parameters import BIAS_NAMES

# Maximum rank distance between two compatible levels.
COMPATIBILITY_SPAN: int = 1


class FeedbackLevel(IntEnum):
    """Qualitative rating of one bias metric, ordered worst to best."""

    BAD = 0
    GOOD = 1
    GREAT = 2
    OPTIMAL = 3

    @property
    def label(self) -> str:
        return self.name.lower()

    @classmethod
    def parse(cls, text: str) -> FeedbackLevel:
        """Parse a level from its name or label, case-insensitively.

        Raises:
            ValueError: If *text* names no level.
        """
        key = text.strip().upper()
        try:
            return cls[key]
        except KeyError:
            choices = ", ".join(level.label for level in cls)
            raise ValueError(
                f"unknown feedback level {text!r}; expected one of {choices}."
            ) from None


@dataclass(frozen=True)
class BiasFeedback:
    """One feedback level per bias metric.

    Attributes:
        oversteer: Oversteer rating.
        braking_stability: Braking stability rating.
        cornering: Cornering rating.
        traction: Traction rating.
        straights: Straights rating.
    """

    oversteer: FeedbackLevel
    braking_stability: FeedbackLevel
    cornering: FeedbackLevel
    traction: FeedbackLevel
    straights: FeedbackLevel

    def __post_init__(self) -> None:
        for name in BIAS_NAMES:
            if not isinstance(getattr(self, name), FeedbackLevel):
                raise ValueError(f"'{name}' must be a FeedbackLevel.")

    @classmethod
    def uniform(cls, level: FeedbackLevel) -> BiasFeedback:
        """Return feedback with the same *level* on every metric."""
        return cls(level, level, level, level, level)

    @classmethod
    def from_ranks(cls, ranks: NDArray[np.int_] | list[int]) -> BiasFeedback:
        return cls(*(FeedbackLevel(int(r)) for r in ranks))

    def as_ranks(self) -> NDArray[np.int_]:
        return np.array([int(level) for level in astuple(self)], dtype=np.int_)

    def labels(self) -> dict[str, str]:
        return {name: getattr(self, name).label for name in BIAS_NAMES}


# ---------------------------------------------------------------------------
# Compatibility
# ---------------------------------------------------------------------------


def feedback_compatible(calculated: FeedbackLevel, expected: FeedbackLevel) -> bool:
    """Return True if the two levels are at most one rank apart."""
    return abs(int(calculated) - int(expected)) <= COMPATIBILITY_SPAN


def feedback_matches(calculated: BiasFeedback, expected: BiasFeedback) -> bool:
    """Return True if every metric of *calculated* is compatible with *expected*."""
    return all(
        feedback_compatible(getattr(calculated, name), getattr(expected, name))
        for name in BIAS_NAMES
    )


def compatible_mask(
    ranks: NDArray[np.int_],
    expected: BiasFeedback,
) -> NDArray[np.bool_]:
    """Vectorised :func:`feedback_matches` over rows of a rank matrix.

    Args:
        ranks: Integer feedback ranks, shape ``(N, 5)``.
        expected: Feedback every row is compared against.

    Returns:
        Boolean mask of shape ``(N,)``.
    """
    diff = np.abs(ranks - expected.as_ranks())
    return np.all(diff <= COMPATIBILITY_SPAN, axis=1)

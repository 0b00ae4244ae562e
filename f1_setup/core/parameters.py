"""Setup parameter and car bias value objects.

Setup parameters are normalised to ``[0, 1]`` where 0.5 is the middle
position of each slider in the game's setup screen.  Bias values are
derived from a setup by :func:`f1_setup.core.bias_model.compute_bias` and
are unbounded in principle.
"""

from __future__ import annotations

import math
import numbers
from dataclasses import astuple, dataclass

import numpy as np
from numpy.typing import NDArray

# Canonical ordering used by the bias model and the search grid.
PARAMETER_NAMES: tuple[str, ...] = (
    "front_wing_angle",
    "rear_wing_angle",
    "anti_roll_distribution",
    "tyre_camber",
    "toe_out",
)

BIAS_NAMES: tuple[str, ...] = (
    "oversteer",
    "braking_stability",
    "cornering",
    "traction",
    "straights",
)

PARAMETER_LABELS: dict[str, str] = {
    "front_wing_angle": "Front Wing",
    "rear_wing_angle": "Rear Wing",
    "anti_roll_distribution": "Anti-Roll",
    "tyre_camber": "Tyre Camber",
    "toe_out": "Toe-Out",
}


class ValidationError(ValueError):
    """Raised when a setup or feedback value is rejected at an entry point."""


# ---------------------------------------------------------------------------
# Setup parameters
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SetupParameters:
    """A candidate car configuration.

    Values are not clamped on construction: the bias model is defined for
    any real input.  Use :func:`validate_setup` where out-of-range values
    must be rejected.

    Attributes:
        front_wing_angle: Front wing angle (0.0-1.0).
        rear_wing_angle: Rear wing angle (0.0-1.0).
        anti_roll_distribution: Anti-roll bar distribution (0.0-1.0).
        tyre_camber: Tyre camber (0.0-1.0).
        toe_out: Toe-out (0.0-1.0).
    """

    front_wing_angle: float
    rear_wing_angle: float
    anti_roll_distribution: float
    tyre_camber: float
    toe_out: float

    @classmethod
    def neutral(cls) -> SetupParameters:
        """Return the all-middle setup (every parameter at 0.5)."""
        return cls(0.5, 0.5, 0.5, 0.5, 0.5)

    @classmethod
    def from_array(cls, values: NDArray[np.float64] | list[float]) -> SetupParameters:
        """Build a setup from five values in :data:`PARAMETER_NAMES` order."""
        if len(values) != len(PARAMETER_NAMES):
            raise ValueError(
                f"expected {len(PARAMETER_NAMES)} setup values, got {len(values)}."
            )
        return cls(*(float(v) for v in values))

    @classmethod
    def from_percentages(
        cls,
        front_wing_angle: float,
        rear_wing_angle: float,
        anti_roll_distribution: float,
        tyre_camber: float,
        toe_out: float,
    ) -> SetupParameters:
        """Build a setup from the 0-100 scale shown in the game."""
        return cls(
            front_wing_angle / 100.0,
            rear_wing_angle / 100.0,
            anti_roll_distribution / 100.0,
            tyre_camber / 100.0,
            toe_out / 100.0,
        )

    def as_array(self) -> NDArray[np.float64]:
        return np.array(astuple(self), dtype=np.float64)

    def as_percentages(self) -> dict[str, int]:
        """Return display percentages keyed by human-readable label."""
        return {
            PARAMETER_LABELS[name]: round(getattr(self, name) * 100)
            for name in PARAMETER_NAMES
        }


def validate_setup(setup: SetupParameters) -> SetupParameters:
    """Check that every parameter of *setup* is a finite value in ``[0, 1]``.

    Args:
        setup: Setup to validate.

    Returns:
        The same setup, for call chaining.

    Raises:
        ValidationError: If *setup* is not a :class:`SetupParameters` or any
            value is non-numeric, non-finite or outside ``[0, 1]``.
    """
    if not isinstance(setup, SetupParameters):
        raise ValidationError(
            f"setup must be SetupParameters, got {type(setup).__name__}."
        )
    for name in PARAMETER_NAMES:
        value = getattr(setup, name)
        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            raise ValidationError(
                f"'{name}' must be numeric, got {type(value).__name__}."
            )
        if not math.isfinite(value):
            raise ValidationError(f"'{name}' must be finite, got {value}.")
        if not 0.0 <= value <= 1.0:
            raise ValidationError(f"'{name}' must be in [0, 1], got {value}.")
    return setup


# ---------------------------------------------------------------------------
# Car bias
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CarBias:
    """Handling bias produced by a setup.

    Attributes:
        oversteer: Oversteer bias.
        braking_stability: Braking stability bias.
        cornering: Cornering bias.
        traction: Traction bias.
        straights: Straight-line speed bias.
    """

    oversteer: float
    braking_stability: float
    cornering: float
    traction: float
    straights: float

    @classmethod
    def from_array(cls, values: NDArray[np.float64] | list[float]) -> CarBias:
        """Build a bias from five values in :data:`BIAS_NAMES` order."""
        if len(values) != len(BIAS_NAMES):
            raise ValueError(
                f"expected {len(BIAS_NAMES)} bias values, got {len(values)}."
            )
        return cls(*(float(v) for v in values))

    def as_array(self) -> NDArray[np.float64]:
        return np.array(astuple(self), dtype=np.float64)

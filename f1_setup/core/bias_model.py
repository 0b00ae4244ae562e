"""Linear bias model for the F1 Manager setup screen.

Each bias metric is an affine function of the five setup parameters::

    bias = INITIAL_BIAS + COEFFICIENT_MATRIX . (setup - 0.5)

Rows of the coefficient matrix are bias metrics
``[oversteer, braking_stability, cornering, traction, straights]`` and
columns are setup parameters
``[front_wing, rear_wing, anti_roll, camber, toe_out]``.  The constants come
from community measurements of the game and are not configurable.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from f1_setup.core.parameters import CarBias, SetupParameters

# ---------------------------------------------------------------------------
# Model constants
# ---------------------------------------------------------------------------

COEFFICIENT_MATRIX: NDArray[np.float64] = np.array(
    [
        [0.4, -0.4, -0.1, 0.1, 0.2],  # oversteer
        [-0.2, 0.2, 0.15, -0.25, -0.05],  # braking stability
        [0.3, 0.25, -0.15, 0.25, 0.0],  # cornering
        [-0.15, 0.25, 0.5, -0.1, 0.0],  # traction
        [-0.1, -0.9, 0.0, 0.0, 0.0],  # straights
    ],
    dtype=np.float64,
)
COEFFICIENT_MATRIX.flags.writeable = False

# Bias when every setup parameter sits at the middle position.
INITIAL_BIAS: NDArray[np.float64] = np.array(
    [0.5, 0.45, 0.2, 0.25, 1.0], dtype=np.float64
)
INITIAL_BIAS.flags.writeable = False

NEUTRAL_SETUP_VALUE: float = 0.5


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def bias_matrix(setups: NDArray[np.float64]) -> NDArray[np.float64]:
    """Compute bias rows for a batch of setups.

    The dot product is accumulated parameter by parameter from zero so that
    every row matches the scalar reference arithmetic exactly.

    Args:
        setups: Setup values, shape ``(N, 5)`` (or ``(5,)`` for one setup).

    Returns:
        Bias values with the same shape as *setups*.
    """
    setups = np.asarray(setups, dtype=np.float64)
    diff = setups - NEUTRAL_SETUP_VALUE
    changes = np.zeros_like(diff)
    for k in range(COEFFICIENT_MATRIX.shape[1]):
        changes = changes + diff[..., k, np.newaxis] * COEFFICIENT_MATRIX[:, k]
    return INITIAL_BIAS + changes


def compute_bias(setup: SetupParameters) -> CarBias:
    """Return the car bias produced by *setup*.

    Values outside ``[0, 1]`` are not clamped; the same linear formula
    applies to any input.
    """
    return CarBias.from_array(bias_matrix(setup.as_array()))

"""Tests for tabular candidate reports."""

from f1_setup.core.optimizer import IterativeOptimizer
from f1_setup.reporting import candidates_to_frame


def test_frame_follows_pool_order() -> None:
    """One row per candidate, in pool order."""
    optimizer = IterativeOptimizer(seed=1)
    top = optimizer.candidates[:4]
    frame = candidates_to_frame(top)

    assert len(frame) == 4
    assert list(frame["score"]) == [c.score for c in top]
    assert list(frame["front_wing_angle"]) == [c.setup.front_wing_angle for c in top]
    assert frame.loc[0, "bias_straights"] == top[0].bias.straights


def test_frame_feedback_labels() -> None:
    """Feedback columns hold lowercase level labels."""
    optimizer = IterativeOptimizer(seed=1)
    frame = candidates_to_frame(optimizer.candidates[:10])
    allowed = {"bad", "good", "great", "optimal"}
    for column in [c for c in frame.columns if c.startswith("feedback_")]:
        assert set(frame[column]) <= allowed


def test_empty_frame_keeps_columns() -> None:
    """No candidates gives an empty frame with the full column set."""
    frame = candidates_to_frame([])
    assert frame.empty
    assert "confidence" in frame.columns
    assert len(frame.columns) == 5 + 5 + 2 + 5

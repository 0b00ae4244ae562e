"""Core setup model, search and optimisation modules."""

from f1_setup.core.bias_model import (
    COEFFICIENT_MATRIX,
    INITIAL_BIAS,
    bias_matrix,
    compute_bias,
)
from f1_setup.core.confidence import (
    classify_bias_metric,
    classify_feedback,
    compute_confidence,
    confidence_array,
    isolated_feedback,
    metric_feedback,
)
from f1_setup.core.feedback import (
    BiasFeedback,
    FeedbackLevel,
    feedback_compatible,
    feedback_matches,
)
from f1_setup.core.optimizer import AttemptRecord, IterativeOptimizer, OptimizerStats
from f1_setup.core.parameters import (
    BIAS_NAMES,
    PARAMETER_NAMES,
    CarBias,
    SetupParameters,
    ValidationError,
    validate_setup,
)
from f1_setup.core.practice import (
    PracticeRound,
    run_practice_programme,
    simulate_practice_feedback,
)
from f1_setup.core.scoring import score_array, score_setup
from f1_setup.core.search import (
    SetupCandidate,
    evaluate_setup,
    find_optimal_setup,
    generate_candidates,
    iter_setup_grid,
    setup_grid,
)

__all__ = [
    "AttemptRecord",
    "BIAS_NAMES",
    "BiasFeedback",
    "COEFFICIENT_MATRIX",
    "CarBias",
    "FeedbackLevel",
    "INITIAL_BIAS",
    "IterativeOptimizer",
    "OptimizerStats",
    "PARAMETER_NAMES",
    "PracticeRound",
    "SetupCandidate",
    "SetupParameters",
    "ValidationError",
    "bias_matrix",
    "classify_bias_metric",
    "classify_feedback",
    "compute_bias",
    "compute_confidence",
    "confidence_array",
    "evaluate_setup",
    "feedback_compatible",
    "feedback_matches",
    "find_optimal_setup",
    "generate_candidates",
    "isolated_feedback",
    "iter_setup_grid",
    "metric_feedback",
    "run_practice_programme",
    "score_array",
    "score_setup",
    "setup_grid",
    "simulate_practice_feedback",
    "validate_setup",
]

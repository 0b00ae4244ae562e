"""CLI entrypoint for the F1 Manager Setup Optimizer demonstration."""

from __future__ import annotations

import logging
import sys

from f1_setup import __version__
from f1_setup.config import load_optimizer_config
from f1_setup.core.bias_model import compute_bias
from f1_setup.core.confidence import classify_feedback, compute_confidence
from f1_setup.core.optimizer import IterativeOptimizer
from f1_setup.core.parameters import SetupParameters
from f1_setup.core.practice import run_practice_programme
from f1_setup.core.search import find_optimal_setup
from f1_setup.reporting import candidates_to_frame


def _fmt(setup: SetupParameters) -> str:
    return "  ".join(f"{k}={v:3d}%" for k, v in setup.as_percentages().items())


def main() -> None:
    """Run a scripted tuning session against the simulated driver."""
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    print(f"F1 Manager Setup Optimizer v{__version__}")
    print("=" * 56)

    config = load_optimizer_config()

    # -- Baseline -------------------------------------------------------------
    neutral = SetupParameters.neutral()
    bias = compute_bias(neutral)
    print(f"\nNeutral setup confidence : {compute_confidence(bias):5.1f}%")
    print(f"Neutral setup feedback   : {classify_feedback(bias).label.upper()}")

    # -- Full grid search ----------------------------------------------------
    print(f"\nTop setups from the {config.search_steps + 1}^5 grid:")
    top = find_optimal_setup(steps=config.search_steps, top_n=config.search_top_n)
    for rank, setup in enumerate(top[:3], start=1):
        conf = compute_confidence(compute_bias(setup))
        print(f"  #{rank}  {_fmt(setup)}  ({conf:5.1f}%)")

    # -- Iterative session ---------------------------------------------------
    optimizer = IterativeOptimizer(config=config, seed=2024)
    start = SetupParameters(0.3, 0.7, 0.4, 0.6, 0.5)
    print("\nPractice programme:")
    print("-" * 56)
    for rnd in run_practice_programme(optimizer, start, attempts=3):
        print(f"  Attempt {rnd.attempt}: {_fmt(rnd.setup)}  ({rnd.confidence:5.1f}%)")
        labels = ", ".join(f"{k}={v}" for k, v in rnd.feedback.labels().items())
        print(f"    feedback: {labels}")

    stats = optimizer.get_stats()
    print(
        f"\nPool {stats.pool_size} | attempts {stats.attempt_count} | "
        f"best {stats.best_confidence:.1f}% | "
        f"~{optimizer.estimate_attempts_to_optimal()} more runs"
    )
    print(candidates_to_frame(optimizer.candidates[:5]).round(3).to_string(index=False))


if __name__ == "__main__":
    sys.exit(main() or 0)

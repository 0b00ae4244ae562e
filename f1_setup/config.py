"""Configuration loader for the setup optimiser search settings."""

from dataclasses import dataclass, fields
from pathlib import Path

import yaml

DATA_DIR: Path = Path(__file__).resolve().parent.parent / "data"
CONFIG_PATH: Path = DATA_DIR / "optimizer.yaml"


@dataclass(frozen=True)
class OptimizerConfig:
    """Tunable search and narrowing settings.

    Attributes:
        search_steps: Grid intervals per parameter for the full search.
        search_top_n: Setups returned by the full search.
        pool_steps: Grid intervals per parameter for the session pool.
        pool_stride: Level stride for the session pool grid.
        min_pool_size: Pool size below which candidates are regenerated.
        expand_top: Number of surviving leaders perturbed on regeneration.
        variations_per_candidate: Perturbations drawn per leader.
        perturbation_range: Full width of the uniform jitter per parameter.
        optimal_confidence: Confidence at which a setup counts as optimal.
        default_attempt_estimate: Attempts estimate when not converging.
    """

    search_steps: int = 20
    search_top_n: int = 10
    pool_steps: int = 10
    pool_stride: int = 2
    min_pool_size: int = 5
    expand_top: int = 3
    variations_per_candidate: int = 5
    perturbation_range: float = 0.1
    optimal_confidence: float = 99.0
    default_attempt_estimate: int = 5

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.search_steps < 1:
            raise ValueError("search_steps must be >= 1.")
        if self.pool_steps < 1:
            raise ValueError("pool_steps must be >= 1.")
        if self.pool_stride < 1:
            raise ValueError("pool_stride must be >= 1.")
        for name in (
            "search_top_n",
            "min_pool_size",
            "expand_top",
            "variations_per_candidate",
            "default_attempt_estimate",
        ):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be >= 0.")
        if not 0.0 <= self.perturbation_range <= 1.0:
            raise ValueError("perturbation_range must be between 0.0 and 1.0.")
        if not 0.0 <= self.optimal_confidence <= 100.0:
            raise ValueError("optimal_confidence must be between 0.0 and 100.0.")


_FLOAT_FIELDS: tuple[str, ...] = ("perturbation_range", "optimal_confidence")


def load_optimizer_config(path: Path | None = None) -> OptimizerConfig:
    """Load optimiser settings from a YAML file.

    Every field of :class:`OptimizerConfig` must be present.

    Args:
        path: Optional override for the configuration file path.

    Returns:
        A validated :class:`OptimizerConfig`.

    Raises:
        FileNotFoundError: If the configuration file does not exist.
        ValueError: If a key is missing, has the wrong type, or is out of
            range.
    """
    config_path = path or CONFIG_PATH
    if not config_path.exists():
        raise FileNotFoundError(f"Optimizer config not found: {config_path}")

    with open(config_path, encoding="utf-8") as fh:
        data = yaml.safe_load(fh)

    if not isinstance(data, dict):
        raise ValueError(f"{config_path} must contain a mapping of settings.")

    values: dict[str, int | float] = {}
    for f in fields(OptimizerConfig):
        if f.name not in data:
            raise ValueError(f"{config_path} is missing required field '{f.name}'")
        val = data[f.name]
        # bool is an int subclass; reject it explicitly
        if isinstance(val, bool) or not isinstance(val, (int, float)):
            raise ValueError(
                f"'{f.name}' must be numeric, got {type(val).__name__}"
            )
        if f.name in _FLOAT_FIELDS:
            values[f.name] = float(val)
        else:
            if not float(val).is_integer():
                raise ValueError(f"'{f.name}' must be an integer, got {val}")
            values[f.name] = int(val)

    return OptimizerConfig(**values)

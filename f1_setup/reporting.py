"""Tabular views of candidate setups for shells and notebooks."""

from __future__ import annotations

from collections.abc import Iterable

import pandas as pd

from f1_setup.core.parameters import BIAS_NAMES, PARAMETER_NAMES
from f1_setup.core.search import SetupCandidate

_COLUMNS: list[str] = (
    list(PARAMETER_NAMES)
    + [f"bias_{name}" for name in BIAS_NAMES]
    + ["confidence", "score"]
    + [f"feedback_{name}" for name in BIAS_NAMES]
)


def candidates_to_frame(candidates: Iterable[SetupCandidate]) -> pd.DataFrame:
    """Flatten candidates into a DataFrame, one row per candidate.

    Row order follows *candidates*.  Feedback columns hold lowercase level
    labels (``"bad"``, ``"good"``, ``"great"``, ``"optimal"``).

    Args:
        candidates: Candidates to tabulate, typically a ranked pool.

    Returns:
        A :class:`pandas.DataFrame` with setup, bias, confidence, score and
        feedback columns.  Empty (with columns) if there are no candidates.
    """
    rows: list[dict[str, float | str]] = []
    for cand in candidates:
        row: dict[str, float | str] = {
            name: getattr(cand.setup, name) for name in PARAMETER_NAMES
        }
        for name in BIAS_NAMES:
            row[f"bias_{name}"] = getattr(cand.bias, name)
        row["confidence"] = cand.confidence
        row["score"] = cand.score
        for name, label in cand.feedback.labels().items():
            row[f"feedback_{name}"] = label
        rows.append(row)

    return pd.DataFrame(rows, columns=_COLUMNS)

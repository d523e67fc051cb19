from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from joblib import Parallel, delayed

from soyensemble.components.data import Dataset
from soyensemble.components.evaluation.metrics import score
from soyensemble.components.interfaces import ModelAdapter
from soyensemble.contracts.results import SweepPoint, SweepResult

logger = logging.getLogger(__name__)


def _score_candidate(
    adapter: ModelAdapter,
    train: Dataset,
    test: Dataset,
    param_name: str,
    value: Any,
) -> SweepPoint:
    candidate = adapter.with_params(**{param_name: value})
    model = candidate.fit(train)
    pred = candidate.predict(model, test)
    return SweepPoint(value=value, rmse=score(test.target_array(), pred.values, metric="rmse"))


def sweep(
    adapter: ModelAdapter,
    train: Dataset,
    test: Dataset,
    param_name: str,
    candidate_values: Sequence[Any],
    *,
    n_jobs: Optional[int] = None,
) -> SweepResult:
    """Holdout RMSE for each candidate value of one hyperparameter.

    Each candidate gets its own adapter from ``with_params``; the adapter passed
    in is left unchanged. The best value is the RMSE argmin (first one on ties).

    Raises ValueError for an empty candidate list or an unknown parameter name.
    """
    values = list(candidate_values)
    if not values:
        raise ValueError(f"sweep over '{param_name}' needs at least one candidate value.")

    # fail fast on an unknown parameter before fitting anything
    adapter.with_params(**{param_name: values[0]})

    name = getattr(adapter, "name", "model")
    logger.info("Sweeping %s.%s over %d candidates", name, param_name, len(values))

    if n_jobs is None or n_jobs == 1:
        points = [_score_candidate(adapter, train, test, param_name, v) for v in values]
    else:
        points = Parallel(n_jobs=n_jobs)(
            delayed(_score_candidate)(adapter, train, test, param_name, v) for v in values
        )

    best = min(points, key=lambda p: p.rmse)
    logger.info("%s: best %s=%r (RMSE %.4f)", name, param_name, best.value, best.rmse)

    return SweepResult(
        model_name=name,
        param_name=param_name,
        points=list(points),
        best_value=best.value,
        best_score=best.rmse,
    )


__all__ = ["sweep"]

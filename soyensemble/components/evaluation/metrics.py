from __future__ import annotations

"""Regression metrics with an NA-safe pairing policy.

Pairs where either the actual or the predicted value is undefined (NaN) are
excluded before the metric is computed. When *every* pair is undefined the
metric itself is undefined: the raw metric functions return NaN, and
:func:`score` raises :class:`UndefinedMetricError` so an undefined value can
never be reported as a valid score.
"""

from typing import Any, Callable, Dict, Tuple

import numpy as np
from sklearn.metrics import mean_absolute_error, mean_squared_error, r2_score

from soyensemble.core.shapes import paired_1d
from soyensemble.errors import UndefinedMetricError


def defined_pairs(actual: Any, predicted: Any) -> Tuple[np.ndarray, np.ndarray]:
    """Return the (actual, predicted) pairs where both values are defined."""
    a, p = paired_1d(actual, predicted)
    m = ~(np.isnan(a) | np.isnan(p))
    return a[m], p[m]


def mse(actual: Any, predicted: Any) -> float:
    a, p = defined_pairs(actual, predicted)
    if a.size == 0:
        return float("nan")
    return float(mean_squared_error(a, p))


def rmse(actual: Any, predicted: Any) -> float:
    """Root mean squared error over the defined pairs (NaN if none are defined)."""
    return float(np.sqrt(mse(actual, predicted)))


def mae(actual: Any, predicted: Any) -> float:
    a, p = defined_pairs(actual, predicted)
    if a.size == 0:
        return float("nan")
    return float(mean_absolute_error(a, p))


def r2(actual: Any, predicted: Any) -> float:
    a, p = defined_pairs(actual, predicted)
    if a.size < 2:
        return float("nan")
    return float(r2_score(a, p))


_REG_METRICS: Dict[str, Callable[[Any, Any], float]] = {
    "rmse": rmse,
    "mae": mae,
    "mse": mse,
    "r2": r2,
}

# defined pairs each metric needs
_MIN_PAIRS = {"rmse": 1, "mae": 1, "mse": 1, "r2": 2}

# metrics where a lower value is better (used by sweeps to pick the argmin)
LOWER_IS_BETTER = {"rmse", "mae", "mse"}


def score(actual: Any, predicted: Any, *, metric: str = "rmse") -> float:
    """Compute ``metric`` and refuse to return an undefined value."""
    if metric not in _REG_METRICS:
        raise ValueError(f"Unknown regression metric '{metric}'. Supported: {list(_REG_METRICS)}")
    value = _REG_METRICS[metric](actual, predicted)
    if not np.isfinite(value):
        n_pairs = defined_pairs(actual, predicted)[0].size
        need = _MIN_PAIRS[metric]
        raise UndefinedMetricError(
            f"Metric '{metric}' is undefined: it needs at least {need} defined "
            f"actual/predicted pair(s), got {n_pairs}."
        )
    return value


def list_metrics() -> list[str]:
    return sorted(_REG_METRICS)


__all__ = [
    "defined_pairs",
    "rmse",
    "mae",
    "mse",
    "r2",
    "score",
    "list_metrics",
    "LOWER_IS_BETTER",
]

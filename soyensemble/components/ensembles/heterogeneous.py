from __future__ import annotations

"""Heterogeneous averaging over the regression, bagged-tree and SVM predictors.

Each member is evaluated on its own schema-matched view of the test rows. The
views must describe the same observations in the same order; that is checked
on the row ids, so a silently shuffled or truncated view raises instead of
producing a misaligned average.
"""

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence, Union

import numpy as np

from soyensemble.components.data import Dataset, PredictionVector
from soyensemble.components.ensembles.bagging import BaggingEnsemble
from soyensemble.components.interfaces import ModelAdapter
from soyensemble.errors import AlignmentError

Weights = Union[Sequence[float], np.ndarray]


def _as_vector(v: Any) -> PredictionVector:
    if isinstance(v, PredictionVector):
        return v
    return PredictionVector.positional(v)


def _normalise_weights(weights: Weights, n: int) -> np.ndarray:
    w = np.asarray(weights, dtype=float).ravel()
    if w.shape[0] != n:
        raise ValueError(f"Expected {n} weights, got {w.shape[0]}.")
    if not np.all(np.isfinite(w)) or np.any(w < 0):
        raise ValueError(f"Weights must be finite and non-negative; got {w.tolist()}.")
    total = float(w.sum())
    if total <= 0:
        raise ValueError("Weights must not all be zero.")
    return w / total


def inverse_error_weights(
    errors: Union[Mapping[str, float], Sequence[float]],
) -> Union[dict, np.ndarray]:
    """Weights proportional to 1/error, normalised to sum to 1.

    Mapping input returns a mapping with the same keys; sequence input returns
    an array in the same order. Errors must be finite and strictly positive.
    """
    if isinstance(errors, Mapping):
        keys = list(errors.keys())
        values = np.asarray([errors[k] for k in keys], dtype=float)
    else:
        keys = None
        values = np.asarray(errors, dtype=float).ravel()

    if values.size == 0:
        raise ValueError("inverse_error_weights needs at least one error value.")
    if not np.all(np.isfinite(values)) or np.any(values <= 0):
        raise ValueError(f"Errors must be finite and > 0; got {values.tolist()}.")

    inv = 1.0 / values
    w = inv / inv.sum()
    if keys is not None:
        return {k: float(x) for k, x in zip(keys, w)}
    return w


def average_predictions(
    vectors: Sequence[Any],
    weights: Optional[Weights] = None,
) -> PredictionVector:
    """Elementwise (weighted) mean of aligned prediction vectors.

    Raises
    ------
    AlignmentError
        If the vectors differ in length, or in row ids (value or order).
    """
    if len(vectors) == 0:
        raise ValueError("average_predictions needs at least one prediction vector.")
    vecs = [_as_vector(v) for v in vectors]

    lengths = [len(v) for v in vecs]
    if len(set(lengths)) != 1:
        raise AlignmentError(
            f"Prediction vectors have different lengths {lengths}; refusing to truncate or pad."
        )

    ref = vecs[0].row_ids
    for i, v in enumerate(vecs[1:], start=1):
        if not np.array_equal(v.row_ids, ref):
            n_diff = int(np.sum(v.row_ids != ref))
            raise AlignmentError(
                f"Prediction vector {i} is not aligned with vector 0 "
                f"({n_diff} of {len(ref)} row ids differ in value or order)."
            )

    stacked = np.vstack([v.values for v in vecs])
    if weights is None:
        values = stacked.mean(axis=0)
    else:
        w = _normalise_weights(weights, len(vecs))
        values = w @ stacked
    return PredictionVector(values=values, row_ids=ref)


def combine(
    regression_model: Any,
    regression_test: Dataset,
    bagging_mean_prediction: PredictionVector,
    svm_model: Any,
    svm_test: Dataset,
    *,
    regression_adapter: ModelAdapter,
    svm_adapter: ModelAdapter,
    weights: Optional[Weights] = None,
) -> PredictionVector:
    """Average the regression, bagging and SVM predictions on the test rows.

    With ``weights=None`` this is ``(reg[j] + bag[j] + svm[j]) / 3``. ``weights``
    is ordered (regression, bagging, svm).
    """
    counts = [regression_test.n_rows, len(bagging_mean_prediction), svm_test.n_rows]
    if len(set(counts)) != 1:
        raise AlignmentError(
            f"Ensemble inputs have different row counts "
            f"(regression={counts[0]}, bagging={counts[1]}, svm={counts[2]})."
        )

    reg_pred = regression_adapter.predict(regression_model, regression_test)
    svm_pred = svm_adapter.predict(svm_model, svm_test)
    return average_predictions([reg_pred, bagging_mean_prediction, svm_pred], weights=weights)


@dataclass(frozen=True)
class HeterogeneousEnsemble:
    """The fixed (regression, bagged tree, svm) triple."""

    regression_adapter: ModelAdapter
    regression_model: Any
    bagging: BaggingEnsemble
    svm_adapter: ModelAdapter
    svm_model: Any
    weights: Optional[tuple[float, float, float]] = None

    def predict(self, regression_test: Dataset, tree_test: Dataset, svm_test: Dataset) -> PredictionVector:
        bag_pred = self.bagging.predict(tree_test)
        return combine(
            self.regression_model,
            regression_test,
            bag_pred,
            self.svm_model,
            svm_test,
            regression_adapter=self.regression_adapter,
            svm_adapter=self.svm_adapter,
            weights=self.weights,
        )


__all__ = [
    "HeterogeneousEnsemble",
    "average_predictions",
    "combine",
    "inverse_error_weights",
]

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Union

import numpy as np
from joblib import Parallel, delayed

from soyensemble.components.data import Dataset
from soyensemble.components.evaluation.metrics import score
from soyensemble.components.interfaces import ModelAdapter
from soyensemble.components.splitters.cv_split import fold_indices
from soyensemble.contracts.results import (
    CrossValidationResult,
    CrossValidationSummary,
    FoldMetrics,
    row_id_list,
)
from soyensemble.core.progress import ProgressCallback
from soyensemble.runtime.random.rng import RngManager, as_rng_manager

logger = logging.getLogger(__name__)


@dataclass
class _FoldOutput:
    fold_id: int
    idx_te: np.ndarray
    y_pred: np.ndarray
    metrics: FoldMetrics


def _run_fold(
    *,
    fold_id: int,
    adapter: ModelAdapter,
    dataset: Dataset,
    idx_tr: np.ndarray,
    idx_te: np.ndarray,
) -> _FoldOutput:
    train = dataset.take(idx_tr, name=f"{dataset.name}/fold{fold_id}/train")
    test = dataset.take(idx_te, name=f"{dataset.name}/fold{fold_id}/test")

    model = adapter.fit(train)
    pred = adapter.predict(model, test)
    y_true = test.target_array()

    metrics = FoldMetrics(
        fold_id=fold_id,
        n_train=train.n_rows,
        n_test=test.n_rows,
        rmse=score(y_true, pred.values, metric="rmse"),
        mae=score(y_true, pred.values, metric="mae"),
        test_row_ids=row_id_list(test.row_ids),
    )
    return _FoldOutput(fold_id=fold_id, idx_te=idx_te, y_pred=pred.values, metrics=metrics)


def cross_validate(
    adapter: ModelAdapter,
    dataset: Dataset,
    folds: int = 10,
    seed: Union[None, int, RngManager] = None,
    *,
    shuffle: bool = True,
    n_jobs: Optional[int] = None,
    stream: str = "cv",
    progress: Optional[ProgressCallback] = None,
) -> CrossValidationResult:
    """Seeded k-fold cross-validation of one adapter.

    Every row lands in exactly one test fold and is never part of that fold's
    training set. Each fold is scored with RMSE and MAE; the summary reports
    their mean and population variance (ddof=0) over folds, plus the RMSE
    standard deviation. Out-of-fold predictions are pooled back into the
    dataset's original row order.

    Raises ValueError unless ``2 <= folds <= dataset.n_rows``.
    """
    if not dataset.has_target:
        raise ValueError(f"{dataset.name}: cross-validation needs a target column.")

    rngm = as_rng_manager(seed)
    random_state = rngm.child_seed(f"{stream}/kfold") if shuffle else None
    pairs = fold_indices(dataset.n_rows, n_splits=int(folds), shuffle=shuffle, random_state=random_state)

    name = getattr(adapter, "name", "model")
    logger.info("Cross-validating %s: %d folds over %d rows", name, len(pairs), dataset.n_rows)

    label = f"{stream}: {name}"
    if progress is not None:
        progress.init(total=len(pairs), label=label)

    if n_jobs is None or n_jobs == 1:
        outputs = []
        for fold_id, (idx_tr, idx_te) in enumerate(pairs, start=1):
            outputs.append(
                _run_fold(fold_id=fold_id, adapter=adapter, dataset=dataset, idx_tr=idx_tr, idx_te=idx_te)
            )
            if progress is not None:
                progress.update(current=fold_id, label=label)
    else:
        outputs = Parallel(n_jobs=n_jobs)(
            delayed(_run_fold)(fold_id=fold_id, adapter=adapter, dataset=dataset, idx_tr=idx_tr, idx_te=idx_te)
            for fold_id, (idx_tr, idx_te) in enumerate(pairs, start=1)
        )
        outputs = sorted(outputs, key=lambda o: o.fold_id)

    if progress is not None:
        progress.finalize(label=label)

    # pool out-of-fold predictions back into original order
    oof = np.full(dataset.n_rows, np.nan, dtype=float)
    for out in outputs:
        oof[out.idx_te] = out.y_pred

    rmses = np.asarray([o.metrics.rmse for o in outputs], dtype=float)
    maes = np.asarray([o.metrics.mae for o in outputs], dtype=float)
    summary = CrossValidationSummary(
        n_splits=len(outputs),
        rmse_mean=float(rmses.mean()),
        rmse_var=float(rmses.var()),
        rmse_std=float(rmses.std()),
        mae_mean=float(maes.mean()),
        mae_var=float(maes.var()),
    )
    logger.info("%s: CV RMSE %.4f +/- %.4f", name, summary.rmse_mean, summary.rmse_std)

    return CrossValidationResult(
        model_name=name,
        folds=[o.metrics for o in outputs],
        summary=summary,
        oof_row_ids=row_id_list(dataset.row_ids),
        oof_predictions=[float(v) for v in oof],
    )


__all__ = ["cross_validate"]

from __future__ import annotations

"""Model-comparison experiment orchestration.

Steps, in order:

1. load + clean the observation table
2. one seeded holdout split shared by every model family
3. per-family views (transforms fit on the training rows only)
4. base models (regression, tree, svm): fit, holdout RMSE/MAE
5. bagging over the tree adapter
6. heterogeneous average of regression, bagging and svm
7. k-fold CV of each base model on its training view
8. one-hyperparameter holdout sweep

Core steps (4-6) raise on failure. CV and sweep failures are logged and kept
as report notes so the comparison table is still produced.
"""

import logging
from typing import Dict, List, Optional

import pandas as pd

from soyensemble.components.data import Dataset, PredictionVector
from soyensemble.components.ensembles.bagging import build_bagging
from soyensemble.components.ensembles.heterogeneous import combine, inverse_error_weights
from soyensemble.components.evaluation.cross_validation import cross_validate
from soyensemble.components.evaluation.metrics import score
from soyensemble.components.interfaces import Evaluator
from soyensemble.components.preprocessing.cleaning import clean_observations
from soyensemble.components.preprocessing.views import DatasetViews, build_views
from soyensemble.components.tuning.sweep import sweep
from soyensemble.contracts.results import (
    CrossValidationResult,
    ExperimentReport,
    ModelRecord,
    SweepResult,
    row_id_list,
)
from soyensemble.contracts.run_config import ExperimentConfig
from soyensemble.core.progress import ProgressCallback
from soyensemble.errors import SoyEnsembleError
from soyensemble.factories.eval_factory import make_evaluator
from soyensemble.factories.model_factory import make_adapter
from soyensemble.factories.split_factory import make_splitter
from soyensemble.io.readers.tabular_reader import load_soybean_table
from soyensemble.runtime.random.rng import RngManager

logger = logging.getLogger(__name__)

BASE_FAMILIES = ("regression", "tree", "svm")


def resolve_seed(seed: Optional[int], *, fallback: int = 0) -> int:
    return int(seed) if seed is not None else int(fallback)


def _load_frame(cfg: ExperimentConfig) -> pd.DataFrame:
    if not cfg.data.path:
        raise ValueError("ExperimentConfig.data.path is not set and no frame was given.")
    return load_soybean_table(cfg.data.path, delimiter=cfg.data.delimiter, encoding=cfg.data.encoding)


def _record(
    *,
    name: str,
    kind: str,
    family: Optional[str],
    test: Dataset,
    pred: PredictionVector,
    n_train: int,
    evaluator: Evaluator,
    include_predictions: bool,
    **extra,
) -> ModelRecord:
    y_true = test.target_array()
    rec = ModelRecord(
        name=name,
        kind=kind,
        family=family,
        holdout_rmse=score(y_true, pred.values, metric="rmse"),
        holdout_mae=score(y_true, pred.values, metric="mae"),
        metric_value=evaluator.score(y_true, pred.values),
        n_train=n_train,
        n_test=test.n_rows,
        row_ids=row_id_list(pred.row_ids) if include_predictions else None,
        predictions=pred.tolist() if include_predictions else None,
        **extra,
    )
    logger.info("%s: holdout RMSE %.4f, MAE %.4f", name, rec.holdout_rmse, rec.holdout_mae)
    return rec


def _ensemble_weights(
    cfg: ExperimentConfig,
    cv_by_family: Dict[str, CrossValidationResult],
    oob_rmse: Optional[float],
) -> Optional[Dict[str, float]]:
    if cfg.heterogeneous.weighting == "equal":
        return None

    reg = cv_by_family.get("regression")
    svm = cv_by_family.get("svm")
    tree = cv_by_family.get("tree")
    bag_err = oob_rmse if oob_rmse is not None else (tree.summary.rmse_mean if tree else None)
    if reg is None or svm is None or bag_err is None:
        raise ValueError(
            "inverse_rmse weighting needs CV results for regression and svm, and either an "
            "OOB estimate for bagging or CV results for the tree."
        )
    return inverse_error_weights(
        {"regression": reg.summary.rmse_mean, "bagging": bag_err, "svm": svm.summary.rmse_mean}
    )


def _run_cv(
    cfg: ExperimentConfig,
    adapters: dict,
    views: DatasetViews,
    rngm: RngManager,
    notes: List[str],
    progress: Optional[ProgressCallback],
) -> Dict[str, CrossValidationResult]:
    out: Dict[str, CrossValidationResult] = {}
    for family in BASE_FAMILIES:
        try:
            out[family] = cross_validate(
                adapters[family],
                views.train(family),
                folds=cfg.cv.n_splits,
                seed=rngm,
                shuffle=cfg.cv.shuffle,
                n_jobs=cfg.cv.n_jobs,
                stream=f"cv/{family}",
                progress=progress,
            )
        except (SoyEnsembleError, ValueError) as e:
            logger.warning("Cross-validation of %s skipped: %s", family, e)
            notes.append(f"cross-validation of {family} skipped: {type(e).__name__}: {e}")
    return out


def _run_sweep(
    cfg: ExperimentConfig,
    adapters: dict,
    views: DatasetViews,
    notes: List[str],
) -> Optional[SweepResult]:
    if not cfg.sweep.enabled:
        return None
    family = cfg.sweep.family
    try:
        return sweep(
            adapters[family],
            views.train(family),
            views.test(family),
            cfg.sweep.param_name,
            cfg.sweep.candidates,
        )
    except (SoyEnsembleError, ValueError) as e:
        logger.warning("Sweep of %s.%s skipped: %s", family, cfg.sweep.param_name, e)
        notes.append(f"sweep of {family}.{cfg.sweep.param_name} skipped: {type(e).__name__}: {e}")
        return None


def run_experiment(
    cfg: ExperimentConfig,
    *,
    frame: Optional[pd.DataFrame] = None,
    progress: Optional[ProgressCallback] = None,
) -> ExperimentReport:
    """Run the full comparison and return a structured report.

    ``frame`` is the raw observation table; when omitted it is read from
    ``cfg.data.path``.
    """
    # --- Load + clean --------------------------------------------------------
    raw = frame if frame is not None else _load_frame(cfg)
    base = clean_observations(
        raw,
        predictors=cfg.views.predictors,
        target=cfg.views.target,
        id_column=cfg.data.id_column,
    )
    logger.info("Loaded %d clean observations", len(base))

    # --- RNG -----------------------------------------------------------------
    seed = resolve_seed(cfg.eval.seed, fallback=0)
    rngm = RngManager(seed)

    # --- Shared holdout split ------------------------------------------------
    base_ds = Dataset.from_frame(base, target=cfg.views.target, name="soybean")
    splitter = make_splitter(cfg.split, seed=rngm.child_seed("experiment/split"))
    split = next(iter(splitter.split(base_ds)))
    views = build_views(base, split, cfg.views, seed=rngm.child_seed("views/target_encoding"))
    n_train, n_test = split.train.n_rows, split.test.n_rows
    logger.info("Holdout split: %d train / %d test", n_train, n_test)

    evaluator = make_evaluator(cfg.eval)
    notes: List[str] = []
    records: List[ModelRecord] = []

    # --- Base models ---------------------------------------------------------
    model_cfgs = {"regression": cfg.models.regression, "tree": cfg.models.tree, "svm": cfg.models.svm}
    adapters = {
        family: make_adapter(model_cfgs[family], seed=rngm.child_seed(f"model/{family}"), name=family)
        for family in BASE_FAMILIES
    }
    fitted = {}
    base_preds: Dict[str, PredictionVector] = {}
    for family in BASE_FAMILIES:
        adapter = adapters[family]
        fitted[family] = adapter.fit(views.train(family))
        base_preds[family] = adapter.predict(fitted[family], views.test(family))

    # --- Bagging over the tree -----------------------------------------------
    bag_seed = cfg.bagging.random_state if cfg.bagging.random_state is not None else rngm
    bag_adapter = make_adapter(
        cfg.bagging.base_estimator,
        seed=rngm.child_seed("model/bagging"),
        name="bagging",
    )
    bag, bag_pred = build_bagging(
        bag_adapter,
        views.tree_train,
        views.tree_test,
        cfg.bagging.n_resamples,
        bag_seed,
        oob_score=cfg.bagging.oob_score,
        n_jobs=cfg.bagging.n_jobs,
        progress=progress,
    )

    # --- Cross-validation (robustness, per family) --------------------------
    cv_by_family = _run_cv(cfg, adapters, views, rngm, notes, progress)

    # --- Heterogeneous ensemble ----------------------------------------------
    weights = _ensemble_weights(cfg, cv_by_family, bag.oob_rmse)
    het_pred = combine(
        fitted["regression"],
        views.regression_test,
        bag_pred,
        fitted["svm"],
        views.svm_test,
        regression_adapter=adapters["regression"],
        svm_adapter=adapters["svm"],
        weights=None if weights is None else [weights["regression"], weights["bagging"], weights["svm"]],
    )

    # --- Records -------------------------------------------------------------
    for family in BASE_FAMILIES:
        cv = cv_by_family.get(family)
        records.append(
            _record(
                name=family,
                kind="base",
                family=family,
                test=views.test(family),
                pred=base_preds[family],
                n_train=n_train,
                evaluator=evaluator,
                include_predictions=cfg.include_predictions,
                cv_rmse_mean=cv.summary.rmse_mean if cv else None,
                cv_rmse_std=cv.summary.rmse_std if cv else None,
                cv_mae_mean=cv.summary.mae_mean if cv else None,
            )
        )
    records.append(
        _record(
            name="bagging",
            kind="bagging",
            family="tree",
            test=views.tree_test,
            pred=bag_pred,
            n_train=n_train,
            evaluator=evaluator,
            include_predictions=cfg.include_predictions,
            oob_rmse=bag.oob_rmse,
        )
    )
    records.append(
        _record(
            name="heterogeneous",
            kind="heterogeneous",
            family=None,
            test=views.regression_test,
            pred=het_pred,
            n_train=n_train,
            evaluator=evaluator,
            include_predictions=cfg.include_predictions,
            weights=weights,
        )
    )

    # --- Sweep ---------------------------------------------------------------
    sweep_result = _run_sweep(cfg, adapters, views, notes)

    report = ExperimentReport(
        seed=seed,
        metric=cfg.eval.metric,
        n_rows=int(len(base)),
        n_train=n_train,
        n_test=n_test,
        records=records,
        cross_validation=list(cv_by_family.values()),
        sweep=sweep_result,
        views=views.info,
        notes=notes,
    )
    best = report.best_record()
    if best is not None:
        logger.info("Lowest holdout RMSE: %s (%.4f)", best.name, best.holdout_rmse)
    return report


__all__ = ["run_experiment", "resolve_seed"]

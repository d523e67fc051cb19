# scripts/run_experiment_local.py
from __future__ import annotations

import logging

from soyensemble.contracts import (
    BaggingEnsembleConfig,
    DataModel,
    EvalModel,
    ExperimentConfig,
    HeterogeneousEnsembleConfig,
    SplitCVModel,
    SplitHoldoutModel,
    SweepConfig,
)
from soyensemble.api import LoggingProgress, export_report, run_experiment

# ==== EDIT THESE AS YOU LIKE ==================================================
DATA = DataModel(
    path=r"./data/soybean/data.csv",
    delimiter=None,       # inferred from the header line when None
)

SPLIT = SplitHoldoutModel(test_frac=0.3)   # 320 rows -> 224 train / 96 test

CV = SplitCVModel(n_splits=10, shuffle=True)

BAGGING = BaggingEnsembleConfig(
    n_resamples=50,
    oob_score=True,
    n_jobs=None,          # e.g. -1 to use every core; results do not change
)

HETEROGENEOUS = HeterogeneousEnsembleConfig(weighting="equal")   # or "inverse_rmse"

SWEEP = SweepConfig(family="svm", param_name="C", candidates=[0.1, 0.5, 1, 2, 5, 10, 50, 100])

EVAL = EvalModel(metric="rmse", seed=123)

OUT_DIR = None            # None -> $SOYENSEMBLE_REPORTS_DIR or .soyensemble/reports
# ============================================================================

logger = logging.getLogger("run_experiment_local")


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    cfg = ExperimentConfig(
        data=DATA, split=SPLIT, cv=CV, bagging=BAGGING,
        heterogeneous=HETEROGENEOUS, sweep=SWEEP, eval=EVAL,
    )
    report = run_experiment(cfg, progress=LoggingProgress(logger, every=10))

    print("\n=== MODEL COMPARISON (holdout) ===")
    print(f"rows={report.n_rows}  train={report.n_train}  test={report.n_test}  seed={report.seed}")
    for rec in sorted(report.records, key=lambda r: r.holdout_rmse):
        cv = f"{rec.cv_rmse_mean:.4f} +/- {rec.cv_rmse_std:.4f}" if rec.cv_rmse_mean is not None else "-"
        print(f"  {rec.name:<14} RMSE={rec.holdout_rmse:.4f}  MAE={rec.holdout_mae:.4f}  CV RMSE={cv}")

    if report.sweep is not None:
        print(f"\nSweep {report.sweep.model_name}.{report.sweep.param_name}:")
        for value, err in report.sweep.as_mapping().items():
            print(f"  {value!r:>8}: {err:.4f}")
        print(f"  best = {report.sweep.best_value!r} ({report.sweep.best_score:.4f})")

    for note in report.notes:
        print(f"NOTE: {note}")

    paths = export_report(report, OUT_DIR)
    print(f"\nReport written to {paths['json']} and {paths['csv']}")


if __name__ == "__main__":
    main()

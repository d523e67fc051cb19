"""
Batch runner for the bagged regression tree.

- Loops over a list of resample counts.
- For each count, builds the bagging ensemble on the tree view of one fixed
  holdout split and records holdout RMSE (and OOB RMSE).
- Writes one row per count into a CSV.

USAGE:
    python scripts/batch_bagging_resamples.py

Customize the CONFIG section below for your paths.
"""

from __future__ import annotations

import logging
import math
from pathlib import Path

import pandas as pd

from soyensemble.api import Dataset, build_bagging, build_views, clean_observations, load_soybean_table, make_adapter, rmse
from soyensemble.contracts import DecisionTreeRegressorConfig, SplitHoldoutModel, ViewsModel
from soyensemble.factories.split_factory import make_splitter
from soyensemble.runtime.random.rng import RngManager

# =========================
# ======= CONFIGURE =======
# =========================

DATA_PATH = Path("./data/soybean/data.csv")
RESAMPLE_COUNTS = [1, 5, 10, 25, 50, 100, 200]
SEED = 123
N_JOBS = -1

OUT_CSV = Path("./bagging_resamples_summary.csv")

logger = logging.getLogger("batch_bagging_resamples")


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    views_cfg = ViewsModel()
    base = clean_observations(load_soybean_table(DATA_PATH))
    rngm = RngManager(SEED)

    base_ds = Dataset.from_frame(base, target=views_cfg.target, name="soybean")
    split = next(iter(make_splitter(SplitHoldoutModel(), seed=rngm.child_seed("experiment/split")).split(base_ds)))
    views = build_views(base, split, views_cfg, seed=rngm.child_seed("views/target_encoding"))

    adapter = make_adapter(DecisionTreeRegressorConfig(), seed=rngm.child_seed("model/bagging"), name="bagging")
    y_test = views.tree_test.target_array()

    rows = []
    for n in RESAMPLE_COUNTS:
        logger.info("=== resamples=%d ===", n)
        ens, pred = build_bagging(
            adapter, views.tree_train, views.tree_test, n, rngm, oob_score=True, n_jobs=N_JOBS,
        )
        rows.append({
            "resamples": n,
            "holdout_rmse": rmse(y_test, pred.values),
            "oob_rmse": ens.oob_rmse if ens.oob_rmse is not None else math.nan,
            "n_train": views.tree_train.n_rows,
            "n_test": views.tree_test.n_rows,
        })

    OUT_CSV.parent.mkdir(parents=True, exist_ok=True)
    pd.DataFrame(rows).to_csv(OUT_CSV, index=False)
    print(f"Wrote {OUT_CSV}")


if __name__ == "__main__":
    main()

from __future__ import annotations

"""Per-family dataset views derived from one cleaned base table.

Three schema-shaped variants are produced from the same holdout split:

- ``tree``: continuous predictors as measured, plus season/repetition indicators.
- ``regression``: ``log1p`` -> standardisation -> PCA on the continuous
  predictors, plus the indicators.
- ``svm``: min-max normalised continuous predictors, the indicators and a
  target-encoded cultivar column (out-of-fold on the training rows).

Every transform is fit on the training rows only and then applied to the test
rows. All views keep the base table's row ids and order, so predictions from
different families can be averaged row by row.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

import numpy as np
import pandas as pd
from sklearn.decomposition import PCA
from sklearn.model_selection import KFold
from sklearn.pipeline import make_pipeline
from sklearn.preprocessing import FunctionTransformer, MinMaxScaler, OneHotEncoder, StandardScaler

from soyensemble.components.data import Dataset
from soyensemble.components.splitters.types import Split
from soyensemble.contracts.preprocess_configs import ViewsModel

VIEW_FAMILIES: Tuple[str, ...] = ("regression", "tree", "svm")


@dataclass(frozen=True)
class DatasetViews:
    tree_train: Dataset
    tree_test: Dataset
    regression_train: Dataset
    regression_test: Dataset
    svm_train: Dataset
    svm_test: Dataset
    info: Dict[str, Any] = field(default_factory=dict)

    def train(self, family: str) -> Dataset:
        if family not in VIEW_FAMILIES:
            raise KeyError(f"Unknown view family {family!r}; expected one of {VIEW_FAMILIES}")
        return getattr(self, f"{family}_train")

    def test(self, family: str) -> Dataset:
        if family not in VIEW_FAMILIES:
            raise KeyError(f"Unknown view family {family!r}; expected one of {VIEW_FAMILIES}")
        return getattr(self, f"{family}_test")


def _frame(values: np.ndarray, columns, index: pd.Index) -> pd.DataFrame:
    return pd.DataFrame(np.asarray(values, dtype=float), columns=list(columns), index=index)


def _indicators(train: pd.DataFrame, test: pd.DataFrame, cols) -> Tuple[pd.DataFrame, pd.DataFrame]:
    cols = list(cols)
    if not cols:
        return pd.DataFrame(index=train.index), pd.DataFrame(index=test.index)
    enc = OneHotEncoder(drop="first", handle_unknown="ignore", sparse_output=False)
    tr = enc.fit_transform(train[cols].astype(str))
    te = enc.transform(test[cols].astype(str))
    names = enc.get_feature_names_out(cols)
    return _frame(tr, names, train.index), _frame(te, names, test.index)


def _target_encode(
    train: pd.DataFrame,
    test: pd.DataFrame,
    column: str,
    target: str,
    *,
    folds: int = 5,
    seed: Optional[int] = None,
) -> Tuple[pd.Series, pd.Series, Dict[str, Any]]:
    """Mean training target per level; unseen levels get the global mean.

    Test rows are encoded with means over all training rows. Training rows are
    encoded out-of-fold: each row gets the means of the other folds, so its own
    target never enters its own feature.
    """
    if train.shape[0] < 2:
        raise ValueError("Target encoding needs at least 2 training rows.")
    means = train.groupby(column)[target].mean()
    global_mean = float(train[target].mean())

    te = test[column].map(means).astype(float)
    n_unseen = int(te.isna().sum())
    te = te.fillna(global_mean)

    tr = np.empty(train.shape[0], dtype=float)
    n_splits = min(int(folds), train.shape[0])
    kf = KFold(n_splits=n_splits, shuffle=True, random_state=seed)
    for fit_pos, enc_pos in kf.split(train):
        fit_rows = train.iloc[fit_pos]
        fold_means = fit_rows.groupby(column)[target].mean()
        enc = train[column].iloc[enc_pos].map(fold_means).astype(float)
        tr[enc_pos] = enc.fillna(float(fit_rows[target].mean())).to_numpy()

    name = f"{column}_te"
    return (
        pd.Series(tr, index=train.index, name=name),
        te.rename(name),
        {"levels": int(means.shape[0]), "folds": n_splits, "unseen_test_rows": n_unseen},
    )


def _dataset(features: pd.DataFrame, base: pd.DataFrame, target: str, name: str) -> Dataset:
    return Dataset(features=features, target=base[target].astype(float).copy(), name=name)


def build_views(
    base: pd.DataFrame, split: Split, cfg: ViewsModel, *, seed: Optional[int] = None
) -> DatasetViews:
    """Derive the three train/test views from a cleaned base table and a holdout split.

    ``split`` supplies positional indices into ``base`` (``idx_tr``/``idx_te``).
    ``seed`` fixes the fold assignment of the out-of-fold cultivar encoding.
    """
    if split.idx_tr is None or split.idx_te is None:
        raise ValueError("build_views needs a split with positional train/test indices.")

    tr_rows = base.iloc[np.asarray(split.idx_tr, dtype=int)]
    te_rows = base.iloc[np.asarray(split.idx_te, dtype=int)]
    preds = list(cfg.predictors)

    ind_tr, ind_te = _indicators(tr_rows, te_rows, cfg.indicator_columns)

    # tree: untransformed predictors
    tree_tr = pd.concat([tr_rows[preds].astype(float), ind_tr], axis=1)
    tree_te = pd.concat([te_rows[preds].astype(float), ind_te], axis=1)

    # regression: log1p -> z-score -> PCA
    if (base[preds] <= -1).to_numpy().any():
        raise ValueError("log1p transform needs every continuous predictor > -1.")
    reg_pipe = make_pipeline(
        FunctionTransformer(np.log1p, feature_names_out="one-to-one"),
        StandardScaler(),
        PCA(n_components=cfg.pca_var if cfg.pca_var < 1.0 else None, svd_solver="full"),
    )
    pcs_tr = reg_pipe.fit_transform(tr_rows[preds].to_numpy(dtype=float))
    pcs_te = reg_pipe.transform(te_rows[preds].to_numpy(dtype=float))
    pca: PCA = reg_pipe[-1]
    pc_names = [f"PC{i + 1}" for i in range(pcs_tr.shape[1])]
    reg_tr = pd.concat([_frame(pcs_tr, pc_names, tr_rows.index), ind_tr], axis=1)
    reg_te = pd.concat([_frame(pcs_te, pc_names, te_rows.index), ind_te], axis=1)

    # svm: min-max + target-encoded cultivar
    scaler = MinMaxScaler()
    mm_tr = _frame(scaler.fit_transform(tr_rows[preds].to_numpy(dtype=float)), preds, tr_rows.index)
    mm_te = _frame(scaler.transform(te_rows[preds].to_numpy(dtype=float)), preds, te_rows.index)
    svm_tr_parts = [mm_tr, ind_tr]
    svm_te_parts = [mm_te, ind_te]
    te_info: Dict[str, Any] = {}
    if cfg.target_encode_cultivar:
        enc_tr, enc_te, te_info = _target_encode(
            tr_rows, te_rows, cfg.cultivar_column, cfg.target,
            folds=cfg.target_encode_folds, seed=seed,
        )
        svm_tr_parts.append(enc_tr.to_frame())
        svm_te_parts.append(enc_te.to_frame())
    svm_tr = pd.concat(svm_tr_parts, axis=1)
    svm_te = pd.concat(svm_te_parts, axis=1)

    info = {
        "n_train": int(tr_rows.shape[0]),
        "n_test": int(te_rows.shape[0]),
        "tree": {"columns": [str(c) for c in tree_tr.columns]},
        "regression": {
            "columns": [str(c) for c in reg_tr.columns],
            "pca_components": int(pca.n_components_),
            "pca_explained_variance": float(np.sum(pca.explained_variance_ratio_)),
        },
        "svm": {"columns": [str(c) for c in svm_tr.columns], **({"cultivar_encoding": te_info} if te_info else {})},
    }

    t = cfg.target
    return DatasetViews(
        tree_train=_dataset(tree_tr, tr_rows, t, "tree/train"),
        tree_test=_dataset(tree_te, te_rows, t, "tree/test"),
        regression_train=_dataset(reg_tr, tr_rows, t, "regression/train"),
        regression_test=_dataset(reg_te, te_rows, t, "regression/test"),
        svm_train=_dataset(svm_tr, tr_rows, t, "svm/train"),
        svm_test=_dataset(svm_te, te_rows, t, "svm/test"),
        info=info,
    )


__all__ = ["DatasetViews", "VIEW_FAMILIES", "build_views"]

from __future__ import annotations

import warnings
from typing import Optional, Sequence

import pandas as pd

from soyensemble.contracts.preprocess_configs import (
    SOYBEAN_CATEGORICALS,
    SOYBEAN_PREDICTORS,
    SOYBEAN_TARGET,
)

ROW_ID = "row_id"


def _normalise_label(v) -> str:
    s = str(v).strip()
    # "1.0" and "1" are the same repetition/season level
    try:
        f = float(s)
    except ValueError:
        return s
    return str(int(f)) if f.is_integer() else s


def clean_observations(
    df: pd.DataFrame,
    *,
    predictors: Sequence[str] = SOYBEAN_PREDICTORS,
    categoricals: Sequence[str] = SOYBEAN_CATEGORICALS,
    target: str = SOYBEAN_TARGET,
    id_column: Optional[str] = None,
) -> pd.DataFrame:
    """Return a cleaned copy of the raw table, indexed by a stable ``row_id``.

    Row ids come from ``id_column`` when given (must be unique), otherwise from
    the row's position in the raw file. They are assigned *before* incomplete
    rows are dropped, so a row keeps its id whatever else is removed.
    """
    needed = [*categoricals, *predictors, target]
    missing = [c for c in needed if c not in df.columns]
    if missing:
        raise ValueError(f"Cannot clean observations: missing column(s) {missing}.")

    out = df.copy()
    if id_column is not None:
        if id_column not in out.columns:
            raise ValueError(f"id_column {id_column!r} not found.")
        if out[id_column].duplicated().any():
            raise ValueError(f"id_column {id_column!r} has duplicate values.")
        out.index = pd.Index(out[id_column].to_numpy(), name=ROW_ID)
    else:
        out.index = pd.RangeIndex(len(out), name=ROW_ID)

    for c in categoricals:
        out[c] = out[c].map(_normalise_label, na_action="ignore")
        out.loc[out[c] == "", c] = pd.NA

    for c in [*predictors, target]:
        out[c] = pd.to_numeric(out[c], errors="coerce").astype(float)

    incomplete = out[needed].isna().any(axis=1)
    n_drop = int(incomplete.sum())
    if n_drop:
        warnings.warn(
            f"Dropping {n_drop} of {len(out)} observation(s) with a missing or non-numeric "
            "target/predictor/label value.",
            UserWarning,
        )
        out = out.loc[~incomplete]

    if out.empty:
        raise ValueError("No complete observations left after cleaning.")

    return out[needed].copy()


__all__ = ["ROW_ID", "clean_observations"]

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
import pandas as pd
import pytest

from soyensemble.components.data import Dataset, PredictionVector


def make_soybean_frame(seed: int = 0, n_cultivars: int = 40) -> pd.DataFrame:
    """Synthetic stand-in for the reference table: 40 cultivars x 2 seasons x 4 reps = 320 rows."""
    rng = np.random.default_rng(seed)
    rows = []
    cultivar_effect = rng.normal(0.0, 250.0, size=n_cultivars)
    for season in (1, 2):
        for c in range(n_cultivars):
            for rep in (1, 2, 3, 4):
                ph = rng.normal(60.0, 8.0)
                ifp = rng.normal(14.0, 3.0)
                nlp = rng.normal(60.0, 15.0)
                ngp = nlp * rng.normal(2.2, 0.2)
                ngl = ngp / max(nlp, 1.0)
                ns = rng.integers(2, 8)
                mhg = rng.normal(16.0, 2.0)
                gy = (
                    1500.0
                    + 18.0 * ngp
                    + 60.0 * mhg
                    + 4.0 * ph
                    + 120.0 * (season == 2)
                    + cultivar_effect[c]
                    + rng.normal(0.0, 150.0)
                )
                rows.append(
                    {
                        "Season": season,
                        "Cultivar": f"NEO {c + 1:02d}",
                        "Repetition": rep,
                        "PH": abs(ph),
                        "IFP": abs(ifp),
                        "NLP": abs(nlp),
                        "NGP": abs(ngp),
                        "NGL": abs(ngl),
                        "NS": float(ns),
                        "MHG": abs(mhg),
                        "GY": gy,
                    }
                )
    return pd.DataFrame(rows)


def make_regression_dataset(n: int = 60, seed: int = 0, name: str = "toy") -> Dataset:
    rng = np.random.default_rng(seed)
    X = pd.DataFrame(
        {
            "x1": rng.normal(size=n),
            "x2": rng.normal(size=n),
            "x3": rng.uniform(0.0, 1.0, size=n),
        },
        index=pd.RangeIndex(100, 100 + n, name="row_id"),
    )
    y = pd.Series(
        3.0 * X["x1"] - 2.0 * X["x2"] + 5.0 * X["x3"] + rng.normal(0.0, 0.3, size=n),
        index=X.index,
        name="y",
    )
    return Dataset(features=X, target=y, name=name)


@dataclass
class ConstantAdapter:
    """Adapter that predicts a fixed value for every row."""

    value: float
    name: str = "constant"

    def fit(self, train: Dataset) -> Any:
        return self.value

    def predict(self, model: Any, test: Dataset) -> PredictionVector:
        return PredictionVector.for_dataset(np.full(test.n_rows, float(model)), test)

    def with_params(self, **params: Any) -> "ConstantAdapter":
        return ConstantAdapter(value=params.get("value", self.value), name=self.name)


@pytest.fixture(scope="session")
def soybean_frame() -> pd.DataFrame:
    return make_soybean_frame()


@pytest.fixture
def toy_dataset() -> Dataset:
    return make_regression_dataset()


@pytest.fixture
def toy_split(toy_dataset):
    idx_tr = np.arange(0, 42)
    idx_te = np.arange(42, 60)
    return toy_dataset.take(idx_tr, name="toy/train"), toy_dataset.take(idx_te, name="toy/test")

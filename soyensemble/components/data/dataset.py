from __future__ import annotations

"""Dataset and prediction containers.

Every dataset view carries its row identifiers as the DataFrame index. Views
derived from one cleaned base therefore stay comparable by identity, not only
by position, which is what the heterogeneous ensemble checks before averaging.
"""

from dataclasses import dataclass
from typing import Any, Iterable, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

Schema = Tuple[Tuple[str, str], ...]


def _schema_of(features: pd.DataFrame) -> Schema:
    return tuple((str(c), str(features[c].dtype)) for c in features.columns)


@dataclass(frozen=True)
class Dataset:
    """An ordered, immutable collection of observations sharing one schema.

    Notes
    -----
    - ``features`` and ``target`` share the same index (row ids).
    - ``target`` may be None for prediction-only data.
    - All operations return new objects; the wrapped frames are never edited in place.
    """

    features: pd.DataFrame
    target: Optional[pd.Series] = None
    name: str = "dataset"

    def __post_init__(self) -> None:
        if not isinstance(self.features, pd.DataFrame):
            raise TypeError(f"features must be a pandas DataFrame; got {type(self.features).__name__}")
        if self.target is not None:
            if len(self.target) != len(self.features):
                raise ValueError(
                    f"{self.name}: features and target length mismatch: "
                    f"{len(self.features)} vs {len(self.target)}"
                )
            if not self.target.index.equals(self.features.index):
                raise ValueError(f"{self.name}: features and target indices differ.")

    # --- construction -------------------------------------------------------
    @classmethod
    def from_frame(
        cls,
        df: pd.DataFrame,
        *,
        target: Optional[str] = None,
        name: str = "dataset",
        drop: Sequence[str] = (),
    ) -> "Dataset":
        """Split a frame into features and (optional) target column."""
        excluded = set(drop)
        y = None
        if target is not None:
            if target not in df.columns:
                raise KeyError(f"{name}: target column {target!r} not found")
            y = df[target].astype(float).copy()
            excluded.add(target)
        X = df[[c for c in df.columns if c not in excluded]].copy()
        return cls(features=X, target=y, name=name)

    # --- properties ---------------------------------------------------------
    @property
    def row_ids(self) -> np.ndarray:
        return self.features.index.to_numpy()

    @property
    def n_rows(self) -> int:
        return int(self.features.shape[0])

    @property
    def feature_names(self) -> Tuple[str, ...]:
        return tuple(str(c) for c in self.features.columns)

    @property
    def schema(self) -> Schema:
        return _schema_of(self.features)

    @property
    def has_target(self) -> bool:
        return self.target is not None

    def __len__(self) -> int:
        return self.n_rows

    # --- selection ----------------------------------------------------------
    def take(self, positions: Any, *, name: Optional[str] = None) -> "Dataset":
        """Select rows by position. Repeated positions are allowed (bootstrap)."""
        pos = np.asarray(positions, dtype=int).ravel()
        X = self.features.iloc[pos].copy()
        y = self.target.iloc[pos].copy() if self.target is not None else None
        return Dataset(features=X, target=y, name=name or self.name)

    def subset(self, row_ids: Iterable[Any], *, name: Optional[str] = None) -> "Dataset":
        """Select rows by identifier, in the order given."""
        ids = list(row_ids)
        pos = self.features.index.get_indexer(ids)
        if (pos < 0).any():
            n_missing = int((pos < 0).sum())
            raise KeyError(f"{self.name}: {n_missing} requested row id(s) not present")
        return self.take(pos, name=name)

    def without_target(self) -> "Dataset":
        return Dataset(features=self.features, target=None, name=self.name)

    def target_array(self) -> np.ndarray:
        if self.target is None:
            raise ValueError(f"{self.name}: dataset has no target column")
        return self.target.to_numpy(dtype=float)


@dataclass(frozen=True)
class PredictionVector:
    """Predictions aligned 1:1 with the rows (and row ids) of a test set."""

    values: np.ndarray
    row_ids: np.ndarray

    def __post_init__(self) -> None:
        values = np.asarray(self.values, dtype=float).ravel()
        row_ids = np.asarray(self.row_ids).ravel()
        if values.shape[0] != row_ids.shape[0]:
            raise ValueError(
                f"PredictionVector: values({values.shape[0]}) and row_ids({row_ids.shape[0]}) differ in length"
            )
        object.__setattr__(self, "values", values)
        object.__setattr__(self, "row_ids", row_ids)

    @classmethod
    def for_dataset(cls, values: Any, dataset: Dataset) -> "PredictionVector":
        return cls(values=np.asarray(values, dtype=float), row_ids=dataset.row_ids)

    @classmethod
    def positional(cls, values: Any) -> "PredictionVector":
        """Wrap raw values with positional row ids (0..n-1)."""
        arr = np.asarray(values, dtype=float).ravel()
        return cls(values=arr, row_ids=np.arange(arr.shape[0]))

    def __len__(self) -> int:
        return int(self.values.shape[0])

    def __array__(self, dtype=None, copy=None):
        if dtype is None:
            return self.values.copy()
        return self.values.astype(dtype)

    def tolist(self) -> list[float]:
        return [float(v) for v in self.values.tolist()]

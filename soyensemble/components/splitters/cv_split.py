from __future__ import annotations

from typing import Iterator, Optional

import numpy as np
from sklearn.model_selection import KFold

from soyensemble.components.data import Dataset
from soyensemble.components.splitters.types import Split


def fold_indices(
    n_rows: int,
    n_splits: int = 10,
    shuffle: bool = True,
    random_state: Optional[int] = None,
) -> list[tuple[np.ndarray, np.ndarray]]:
    """Positional (train, test) index pairs for a k-fold partition."""
    if n_splits < 2:
        raise ValueError(f"n_splits must be >= 2; got {n_splits}.")
    if n_splits > n_rows:
        raise ValueError(f"Cannot make {n_splits} folds from {n_rows} rows.")

    splitter = KFold(
        n_splits=n_splits,
        shuffle=shuffle,
        random_state=random_state if shuffle else None,
    )
    placeholder = np.zeros((n_rows, 1))
    return [
        (np.asarray(tr, dtype=int), np.asarray(te, dtype=int))
        for tr, te in splitter.split(placeholder)
    ]


def generate_folds(
    dataset: Dataset,
    n_splits: int = 10,
    shuffle: bool = True,
    random_state: Optional[int] = None,
) -> Iterator[Split]:
    """Yield :class:`Split` for each fold."""
    for fold_id, (idx_tr, idx_te) in enumerate(
        fold_indices(dataset.n_rows, n_splits, shuffle, random_state), start=1
    ):
        yield Split(
            train=dataset.take(idx_tr, name=f"{dataset.name}/fold{fold_id}/train"),
            test=dataset.take(idx_te, name=f"{dataset.name}/fold{fold_id}/test"),
            idx_tr=idx_tr,
            idx_te=idx_te,
        )

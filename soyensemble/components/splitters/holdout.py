from __future__ import annotations

import math
from typing import Tuple, Union

import numpy as np

from soyensemble.components.data import Dataset
from soyensemble.components.splitters.types import Split


def holdout_indices(
    n_rows: int,
    *,
    test_frac: float = 0.3,
    rng: Union[None, int, np.random.Generator] = None,
) -> Tuple[np.ndarray, np.ndarray]:
    """Draw a seeded test sample of floor(test_frac * n_rows) positions.

    Returns sorted (train_positions, test_positions); the two are disjoint and
    together cover 0..n_rows-1.
    """
    if n_rows < 2:
        raise ValueError(f"Holdout split needs at least 2 rows; got {n_rows}.")
    if not 0.0 < test_frac < 1.0:
        raise ValueError(f"test_frac must be in (0, 1); got {test_frac}.")

    n_test = int(math.floor(test_frac * n_rows + 1e-9))
    if n_test < 1 or n_test >= n_rows:
        raise ValueError(
            f"test_frac={test_frac} on {n_rows} rows leaves an empty train or test partition."
        )

    gen = rng if isinstance(rng, np.random.Generator) else np.random.default_rng(rng)
    idx_te = np.sort(gen.choice(n_rows, size=n_test, replace=False))
    mask = np.ones(n_rows, dtype=bool)
    mask[idx_te] = False
    idx_tr = np.flatnonzero(mask)
    return idx_tr, idx_te


def holdout_split(
    dataset: Dataset,
    *,
    test_frac: float = 0.3,
    rng: Union[None, int, np.random.Generator] = None,
) -> Split:
    idx_tr, idx_te = holdout_indices(dataset.n_rows, test_frac=test_frac, rng=rng)
    return Split(
        train=dataset.take(idx_tr, name=f"{dataset.name}/train"),
        test=dataset.take(idx_te, name=f"{dataset.name}/test"),
        idx_tr=idx_tr,
        idx_te=idx_te,
    )

from __future__ import annotations

"""Splitter return contracts.

Splitters yield a *single, stable* fold payload shape so orchestrators never
guess tuple layouts.
"""

from dataclasses import dataclass

import numpy as np

from soyensemble.components.data import Dataset


@dataclass(frozen=True)
class Split:
    """A single train/test split (fold).

    Notes
    -----
    - `idx_tr` / `idx_te` are positional indices into the *original* dataset.
    - `train` / `test` keep the original row ids as their index.
    """

    train: Dataset
    test: Dataset
    idx_tr: np.ndarray
    idx_te: np.ndarray

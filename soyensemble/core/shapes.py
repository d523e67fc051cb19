from __future__ import annotations

"""Public shape utilities.

Conventions
-----------
- prediction and target vectors are 1D float arrays: (n_samples,)
- positional correspondence is the only alignment assumed by these helpers;
  row-identifier alignment is checked by the ensemble combiner.
"""

from typing import Any, Tuple

import numpy as np

from soyensemble.errors import InputSizeError


def coerce_1d(a: Any) -> np.ndarray:
    """Return ``a`` as a 1D float array.

    Column vectors of shape (n, 1) are flattened; anything else that is not 1D
    is rejected.
    """
    arr = np.asarray(a, dtype=float)
    if arr.ndim == 2 and arr.shape[1] == 1:
        arr = arr[:, 0]
    if arr.ndim == 0:
        arr = arr.reshape(1)
    if arr.ndim != 1:
        raise ValueError(f"Expected a 1D vector; got shape {arr.shape}.")
    return arr


def paired_1d(actual: Any, predicted: Any) -> Tuple[np.ndarray, np.ndarray]:
    """Coerce both inputs to 1D float arrays and require equal length."""
    a = coerce_1d(actual)
    p = coerce_1d(predicted)
    if a.shape[0] != p.shape[0]:
        raise InputSizeError(
            f"Length mismatch: actual({a.shape[0]}) vs predicted({p.shape[0]})."
        )
    return a, p

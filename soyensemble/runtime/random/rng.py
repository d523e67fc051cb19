from __future__ import annotations

import hashlib

import numpy as np
from numpy.random import Generator


class RngManager:
    """Named seed streams for one experiment.

    Every random draw in a run (holdout split, bootstrap resamples, CV folds,
    encoding folds, model seeds) takes its seed from a *name* such as
    ``"bagging/resample7"`` or ``"cv/svm/kfold"``. The seed is a hash of the
    root seed and that name, so it is the same whether a unit runs first, last
    or in another process.
    """

    def __init__(self, seed: int | None):
        self._root = 0 if seed is None else int(seed) & 0xFFFFFFFF

    @property
    def root_seed(self) -> int:
        return self._root

    def child_seed(self, name: str) -> int:
        digest = hashlib.sha256(f"{self._root}:{name}".encode("utf-8")).digest()
        # uint32, accepted by numpy and every sklearn random_state
        return int.from_bytes(digest[:4], "little", signed=False)

    def child_generator(self, name: str) -> Generator:
        return np.random.default_rng(self.child_seed(name))


def as_rng_manager(seed: "int | RngManager | None") -> RngManager:
    """Accept either a plain seed or an existing manager."""
    if isinstance(seed, RngManager):
        return seed
    return RngManager(seed)

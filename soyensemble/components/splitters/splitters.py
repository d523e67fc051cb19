from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional

from soyensemble.contracts.split_configs import SplitCVModel, SplitHoldoutModel
from soyensemble.components.data import Dataset
from soyensemble.components.interfaces import Splitter
from soyensemble.components.splitters.cv_split import generate_folds
from soyensemble.components.splitters.holdout import holdout_split
from soyensemble.components.splitters.types import Split


@dataclass
class HoldOutSplitter(Splitter):
    cfg: SplitHoldoutModel
    seed: Optional[int] = None

    def split(self, dataset: Dataset) -> Iterator[Split]:
        yield holdout_split(dataset, test_frac=self.cfg.test_frac, rng=self.seed)


@dataclass
class KFoldSplitter(Splitter):
    cfg: SplitCVModel
    seed: Optional[int] = None

    def split(self, dataset: Dataset) -> Iterator[Split]:
        yield from generate_folds(
            dataset,
            n_splits=self.cfg.n_splits,
            shuffle=self.cfg.shuffle,
            random_state=(self.seed if self.cfg.shuffle else None),
        )

from __future__ import annotations

from typing import Optional, Union

from soyensemble.contracts.split_configs import SplitCVModel, SplitHoldoutModel
from soyensemble.components.interfaces import Splitter
from soyensemble.components.splitters.splitters import HoldOutSplitter, KFoldSplitter

SplitConfig = Union[SplitHoldoutModel, SplitCVModel]


def make_splitter(cfg: SplitConfig, seed: Optional[int] = None) -> Splitter:
    mode = getattr(cfg, "mode", "holdout")
    if mode == "holdout":
        return HoldOutSplitter(cfg=cfg, seed=seed)
    if mode == "kfold":
        return KFoldSplitter(cfg=cfg, seed=seed)
    raise ValueError(f"Unknown split mode: {mode!r}")

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class SplitHoldoutModel(BaseModel):
    mode: Literal["holdout"] = "holdout"
    # |test| = floor(test_frac * n_rows)
    test_frac: float = Field(default=0.3, gt=0.0, lt=1.0)


class SplitCVModel(BaseModel):
    mode: Literal["kfold"] = "kfold"
    n_splits: int = Field(default=10, ge=2)
    shuffle: bool = True
    n_jobs: int | None = None

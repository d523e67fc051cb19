from __future__ import annotations

from typing import List, Union

from pydantic import BaseModel, Field

from .choices import ModelFamily

ParamValue = Union[int, float, str, bool]


class SweepConfig(BaseModel):
    """Holdout sweep of a single hyperparameter for one model family."""

    enabled: bool = True
    family: ModelFamily = "svm"
    param_name: str = "C"
    candidates: List[ParamValue] = Field(
        default_factory=lambda: [0.1, 0.5, 1.0, 2.0, 5.0, 10.0, 50.0, 100.0]
    )

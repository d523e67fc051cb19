from __future__ import annotations

from typing import List, Optional, Union

from pydantic import Field

from .common import ResultModel

ParamValue = Union[int, float, str, bool]


class SweepPoint(ResultModel):
    value: ParamValue
    rmse: float


class SweepResult(ResultModel):
    model_name: str
    param_name: str
    points: List[SweepPoint] = Field(default_factory=list)
    best_value: Optional[ParamValue] = None
    best_score: Optional[float] = None

    def as_mapping(self) -> dict:
        """Return ``{candidate value: holdout RMSE}``."""
        return {p.value: p.rmse for p in self.points}

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import Field

from soyensemble.contracts.choices import ModelKind

from .common import JSONDict, ResultModel, RowId
from .training import CrossValidationResult
from .tuning import SweepResult


class ModelRecord(ResultModel):
    """One row of the comparison report (a base model or an ensemble)."""

    name: str
    kind: ModelKind
    family: Optional[str] = None

    holdout_rmse: float
    holdout_mae: float
    # value of the configured evaluation metric on the holdout rows
    metric_value: float
    n_train: int
    n_test: int

    cv_rmse_mean: Optional[float] = None
    cv_rmse_std: Optional[float] = None
    cv_mae_mean: Optional[float] = None

    oob_rmse: Optional[float] = None
    weights: Optional[Dict[str, float]] = None

    row_ids: Optional[List[RowId]] = None
    predictions: Optional[List[float]] = None


class ExperimentReport(ResultModel):
    seed: int
    metric: str = "rmse"
    n_rows: int
    n_train: int
    n_test: int

    records: List[ModelRecord] = Field(default_factory=list)
    cross_validation: List[CrossValidationResult] = Field(default_factory=list)
    sweep: Optional[SweepResult] = None
    views: JSONDict = Field(default_factory=dict)
    notes: List[str] = Field(default_factory=list)

    def best_record(self) -> Optional[ModelRecord]:
        """Lowest holdout RMSE across models and ensembles."""
        if not self.records:
            return None
        return min(self.records, key=lambda r: r.holdout_rmse)

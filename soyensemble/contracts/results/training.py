from __future__ import annotations

from typing import List

from pydantic import Field

from .common import ResultModel, RowId


class FoldMetrics(ResultModel):
    fold_id: int
    n_train: int
    n_test: int
    rmse: float
    mae: float
    test_row_ids: List[RowId] = Field(default_factory=list)


class CrossValidationSummary(ResultModel):
    n_splits: int
    rmse_mean: float
    rmse_var: float
    rmse_std: float
    mae_mean: float
    mae_var: float


class CrossValidationResult(ResultModel):
    """Per-fold and summary metrics for one adapter."""

    model_name: str
    folds: List[FoldMetrics] = Field(default_factory=list)
    summary: CrossValidationSummary

    # out-of-fold predictions pooled back into original row order
    oof_row_ids: List[RowId] = Field(default_factory=list)
    oof_predictions: List[float] = Field(default_factory=list)


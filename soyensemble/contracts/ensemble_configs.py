from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from .choices import EnsembleWeighting
from .model_configs import DecisionTreeRegressorConfig


class BaggingEnsembleConfig(BaseModel):
    """Bootstrap aggregation over a base adapter (the regression tree by default)."""

    base_estimator: DecisionTreeRegressorConfig = Field(default_factory=DecisionTreeRegressorConfig)
    n_resamples: int = Field(default=50, ge=1)
    oob_score: bool = False
    n_jobs: Optional[int] = None
    random_state: Optional[int] = None


class HeterogeneousEnsembleConfig(BaseModel):
    """Averaging ensemble over the regression, bagging and SVM predictors.

    ``weighting="equal"`` is the baseline contract. ``"inverse_rmse"`` weights each
    member by the inverse of its cross-validated RMSE and must be requested explicitly.
    """

    weighting: EnsembleWeighting = "equal"

from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field

SOYBEAN_PREDICTORS: List[str] = ["PH", "IFP", "NLP", "NGP", "NGL", "NS", "MHG"]
SOYBEAN_CATEGORICALS: List[str] = ["Season", "Cultivar", "Repetition"]
SOYBEAN_TARGET = "GY"


class ViewsModel(BaseModel):
    """How the three model-family views are derived from the cleaned base."""

    predictors: List[str] = Field(default_factory=lambda: list(SOYBEAN_PREDICTORS))
    target: str = SOYBEAN_TARGET
    cultivar_column: str = "Cultivar"
    indicator_columns: List[str] = Field(default_factory=lambda: ["Season", "Repetition"])

    # regression view: log1p -> standardize -> PCA
    pca_var: float = Field(default=0.95, gt=0.0, le=1.0)
    # svm view: min-max -> + target-encoded cultivar
    target_encode_cultivar: bool = True
    # training rows are encoded out-of-fold so no row sees its own target
    target_encode_folds: int = Field(default=5, ge=2)

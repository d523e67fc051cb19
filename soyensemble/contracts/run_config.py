from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel, Field

from .ensemble_configs import BaggingEnsembleConfig, HeterogeneousEnsembleConfig
from .eval_configs import EvalModel
from .model_configs import DecisionTreeRegressorConfig, LinearRegConfig, SVRRegressorConfig
from .preprocess_configs import ViewsModel
from .split_configs import SplitCVModel, SplitHoldoutModel
from .sweep_configs import SweepConfig


class DataModel(BaseModel):
    path: Optional[str] = None

    # Optional parsing hints for delimited text files.
    delimiter: Optional[str] = None
    encoding: Optional[str] = None
    id_column: Optional[str] = None


class ModelsModel(BaseModel):
    regression: LinearRegConfig = Field(default_factory=LinearRegConfig)
    tree: DecisionTreeRegressorConfig = Field(default_factory=DecisionTreeRegressorConfig)
    svm: SVRRegressorConfig = Field(default_factory=SVRRegressorConfig)


class ExperimentConfig(BaseModel):
    """End-to-end configuration for the model-comparison experiment."""

    data: DataModel = Field(default_factory=DataModel)
    views: ViewsModel = Field(default_factory=ViewsModel)
    split: SplitHoldoutModel = Field(default_factory=SplitHoldoutModel)
    cv: SplitCVModel = Field(default_factory=SplitCVModel)
    models: ModelsModel = Field(default_factory=ModelsModel)
    bagging: BaggingEnsembleConfig = Field(default_factory=BaggingEnsembleConfig)
    heterogeneous: HeterogeneousEnsembleConfig = Field(default_factory=HeterogeneousEnsembleConfig)
    sweep: SweepConfig = Field(default_factory=SweepConfig)
    eval: EvalModel = Field(default_factory=lambda: EvalModel(seed=123))
    include_predictions: bool = False


def load_experiment_config(path: Union[str, Path]) -> ExperimentConfig:
    """Read an ExperimentConfig from a JSON file."""
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Experiment config not found: {p}")
    return ExperimentConfig.model_validate_json(p.read_text(encoding="utf-8"))

from .choices import (
    EnsembleWeighting,
    MetricName,
    ModelFamily,
    ModelKind,
    SVMGamma,
    SVMKernel,
    TreeCriterion,
    TreeSplitter,
)
from .model_configs import (
    DecisionTreeRegressorConfig,
    LinearRegConfig,
    ModelConfig,
    SVRRegressorConfig,
    get_model_family,
)
from .split_configs import SplitCVModel, SplitHoldoutModel
from .eval_configs import EvalModel
from .ensemble_configs import BaggingEnsembleConfig, HeterogeneousEnsembleConfig
from .sweep_configs import SweepConfig
from .preprocess_configs import ViewsModel
from .run_config import DataModel, ExperimentConfig, ModelsModel, load_experiment_config

__all__ = [
    # choices
    "EnsembleWeighting", "MetricName", "ModelFamily", "ModelKind",
    "SVMGamma", "SVMKernel", "TreeCriterion", "TreeSplitter",

    # model configs
    "LinearRegConfig", "DecisionTreeRegressorConfig", "SVRRegressorConfig",
    "ModelConfig", "get_model_family",

    # run configs
    "SplitHoldoutModel", "SplitCVModel", "EvalModel",
    "BaggingEnsembleConfig", "HeterogeneousEnsembleConfig", "SweepConfig",
    "ViewsModel", "DataModel", "ModelsModel", "ExperimentConfig",
    "load_experiment_config",
]

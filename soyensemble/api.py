"""Public soyensemble API.

This module is the **stable public surface** of the package:

    from soyensemble.api import run_experiment, build_bagging, combine

Scripts should depend on this module rather than on internal subpackages.
"""

from __future__ import annotations

from soyensemble.use_cases.experiment import run_experiment

from soyensemble.components.data import Dataset, PredictionVector
from soyensemble.components.ensembles import (
    BaggingEnsemble,
    HeterogeneousEnsemble,
    average_predictions,
    bootstrap_indices,
    build_bagging,
    combine,
    inverse_error_weights,
)
from soyensemble.components.evaluation import cross_validate, mae, rmse, score
from soyensemble.components.preprocessing import DatasetViews, build_views, clean_observations
from soyensemble.components.tuning import sweep
from soyensemble.contracts import ExperimentConfig, load_experiment_config
from soyensemble.contracts.results import ExperimentReport
from soyensemble.core.progress import LoggingProgress, ProgressCallback
from soyensemble.factories.model_factory import make_adapter
from soyensemble.io.export import export_report
from soyensemble.io.readers import load_soybean_table

__all__ = [
    "run_experiment",
    "Dataset",
    "PredictionVector",
    "BaggingEnsemble",
    "HeterogeneousEnsemble",
    "average_predictions",
    "bootstrap_indices",
    "build_bagging",
    "combine",
    "inverse_error_weights",
    "cross_validate",
    "rmse",
    "mae",
    "score",
    "DatasetViews",
    "build_views",
    "clean_observations",
    "sweep",
    "ExperimentConfig",
    "load_experiment_config",
    "ExperimentReport",
    "LoggingProgress",
    "ProgressCallback",
    "make_adapter",
    "export_report",
    "load_soybean_table",
]

"""Literal-based choice sets shared by config and result contracts."""

from typing import Literal

MetricName = Literal["rmse", "mae", "mse", "r2"]

ModelFamily = Literal["regression", "tree", "svm"]

ModelKind = Literal["base", "bagging", "heterogeneous"]

SVMKernel = Literal["linear", "poly", "rbf", "sigmoid"]

SVMGamma = Literal["scale", "auto"]

TreeCriterion = Literal["squared_error", "friedman_mse", "absolute_error", "poisson"]

TreeSplitter = Literal["best", "random"]

EnsembleWeighting = Literal["equal", "inverse_rmse"]

__all__ = [
    "MetricName",
    "ModelFamily",
    "ModelKind",
    "SVMKernel",
    "SVMGamma",
    "TreeCriterion",
    "TreeSplitter",
    "EnsembleWeighting",
]

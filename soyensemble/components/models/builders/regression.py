from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from sklearn.linear_model import LinearRegression
from sklearn.svm import SVR
from sklearn.tree import DecisionTreeRegressor

from soyensemble.contracts.model_configs import (
    DecisionTreeRegressorConfig,
    LinearRegConfig,
    SVRRegressorConfig,
)
from soyensemble.components.interfaces import ModelBuilder
from soyensemble.types.sklearn import SkRegressor

from .common import estimator_kwargs


@dataclass
class LinRegBuilder(ModelBuilder):
    cfg: LinearRegConfig

    def make_estimator(self) -> SkRegressor:
        return LinearRegression(**estimator_kwargs(LinearRegression, self.cfg))


@dataclass
class DecisionTreeRegressorBuilder(ModelBuilder):
    cfg: DecisionTreeRegressorConfig
    seed: Optional[int] = None

    def make_estimator(self) -> SkRegressor:
        return DecisionTreeRegressor(**estimator_kwargs(DecisionTreeRegressor, self.cfg, seed=self.seed))


@dataclass
class SVRRegressorBuilder(ModelBuilder):
    # libsvm's SVR has no random_state; its solver is deterministic for fixed data.
    cfg: SVRRegressorConfig

    def make_estimator(self) -> SkRegressor:
        return SVR(**estimator_kwargs(SVR, self.cfg))

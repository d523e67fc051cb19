from __future__ import annotations

"""Base model adapters.

One adapter class serves all three families (linear regression, regression
tree, kernel SVM); the family-specific part is the sklearn estimator produced by
the registered builder for the adapter's config. Fitting algorithms are never
reimplemented here.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

import numpy as np
import pandas as pd

from soyensemble.components.data import Dataset, PredictionVector, Schema
from soyensemble.components.interfaces import ModelAdapter
from soyensemble.components.trainers.fitting import fit_model
from soyensemble.contracts.model_configs import get_model_family
from soyensemble.errors import FitError, SchemaMismatchError
from soyensemble.registries.models import make_model_builder
from soyensemble.types.sklearn import SkRegressor


@dataclass(frozen=True)
class FittedModel:
    """A fitted estimator bound to the schema it was trained on."""

    estimator: SkRegressor
    schema: Schema
    family: str
    name: str
    n_train: int

    @property
    def feature_names(self) -> tuple[str, ...]:
        return tuple(c for c, _ in self.schema)


def _check_schema(model: FittedModel, test: Dataset) -> pd.DataFrame:
    """Return test features ordered like the training schema, or raise."""
    expected = dict(model.schema)
    got = dict(test.schema)

    missing = sorted(set(expected) - set(got))
    extra = sorted(set(got) - set(expected))
    if missing or extra:
        raise SchemaMismatchError(
            f"{model.name}: test data '{test.name}' columns do not match the training schema "
            f"(missing={missing}, unexpected={extra})."
        )

    wrong_types = sorted(c for c in expected if expected[c] != got[c])
    if wrong_types:
        details = ", ".join(f"{c}: {got[c]} != {expected[c]}" for c in wrong_types)
        raise SchemaMismatchError(
            f"{model.name}: test data '{test.name}' column types differ from training ({details})."
        )

    return test.features[list(model.feature_names)]


@dataclass
class SklearnRegressorAdapter(ModelAdapter):
    """Adapter around a registered sklearn regressor builder.

    `seed` is forwarded as ``random_state`` to estimators that accept one, so
    fitting is deterministic for a fixed seed.
    """

    cfg: Any
    seed: Optional[int] = None
    name: str = field(default="")

    def __post_init__(self) -> None:
        if not self.name:
            self.name = str(getattr(self.cfg, "algo", type(self.cfg).__name__))

    @property
    def family(self) -> str:
        return get_model_family(self.cfg)

    def make_estimator(self) -> SkRegressor:
        return make_model_builder(self.cfg, seed=self.seed).make_estimator()

    def fit(self, train: Dataset) -> FittedModel:
        if train.n_rows == 0:
            raise FitError(f"{self.name}: training data '{train.name}' is empty.")
        if not train.has_target:
            raise FitError(f"{self.name}: training data '{train.name}' has no target column.")
        if len(train.feature_names) == 0:
            raise FitError(f"{self.name}: training data '{train.name}' has no feature columns.")

        estimator = self.make_estimator()
        try:
            X = train.features.to_numpy(dtype=float)
            fit_model(estimator, X, train.target_array())
        except Exception as e:
            raise FitError(
                f"{self.name}: fitting on '{train.name}' ({train.n_rows} rows) failed: "
                f"{type(e).__name__}: {e}"
            ) from e

        return FittedModel(
            estimator=estimator,
            schema=train.schema,
            family=self.family,
            name=self.name,
            n_train=train.n_rows,
        )

    def predict(self, model: FittedModel, test: Dataset) -> PredictionVector:
        X = _check_schema(model, test)
        y_pred = model.estimator.predict(X.to_numpy(dtype=float))
        return PredictionVector.for_dataset(np.asarray(y_pred, dtype=float).ravel(), test)

    def with_params(self, **params: Any) -> "SklearnRegressorAdapter":
        cfg_type = type(self.cfg)
        unknown = sorted(k for k in params if k not in cfg_type.model_fields)
        if unknown:
            raise ValueError(f"{cfg_type.__name__} has no parameter(s) {unknown}")
        new_cfg = cfg_type.model_validate({**self.cfg.model_dump(), **params})
        return SklearnRegressorAdapter(cfg=new_cfg, seed=self.seed, name=self.name)

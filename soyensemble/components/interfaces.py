from __future__ import annotations

from typing import Any, Iterator, Protocol

from soyensemble.components.data import Dataset, PredictionVector
from soyensemble.components.splitters.types import Split


class ModelBuilder(Protocol):
    def make_estimator(self) -> Any:
        """Return a configured, unfitted sklearn regressor."""
        ...


class ModelAdapter(Protocol):
    """Fit/predict capability for one model family.

    Adapters are strategies: the engine never depends on how a family fits,
    only on this contract.
    """

    name: str

    def fit(self, train: Dataset) -> Any:
        """Fit on ``train`` and return an immutable fitted model.

        Raises FitError for empty data, a missing target or an estimator failure.
        """
        ...

    def predict(self, model: Any, test: Dataset) -> PredictionVector:
        """Predict ``test`` rows; raises SchemaMismatchError on a column/dtype mismatch."""
        ...

    def with_params(self, **params: Any) -> "ModelAdapter":
        """Return a new adapter with updated hyperparameters (self is unchanged)."""
        ...


class Splitter(Protocol):
    def split(self, dataset: Dataset) -> Iterator[Split]:
        """Yield train/test splits of ``dataset``."""
        ...


class Evaluator(Protocol):
    def score(self, y_true: Any, y_pred: Any) -> float:
        """Return a scalar metric; never an undefined value."""
        ...

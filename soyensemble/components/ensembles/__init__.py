from .bagging import BaggingEnsemble, bootstrap_indices, build_bagging
from .heterogeneous import HeterogeneousEnsemble, average_predictions, combine, inverse_error_weights

__all__ = [
    "BaggingEnsemble",
    "bootstrap_indices",
    "build_bagging",
    "HeterogeneousEnsemble",
    "average_predictions",
    "combine",
    "inverse_error_weights",
]

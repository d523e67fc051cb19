from .metrics import LOWER_IS_BETTER, list_metrics, mae, mse, r2, rmse, score
from .evaluators import RegressionEvaluator
from .cross_validation import cross_validate

__all__ = [
    "LOWER_IS_BETTER",
    "list_metrics",
    "mae",
    "mse",
    "r2",
    "rmse",
    "score",
    "RegressionEvaluator",
    "cross_validate",
]

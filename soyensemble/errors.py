"""Engine exceptions.

These are intentionally lightweight so they can be raised from compute paths
without importing contracts or reporting modules. Each one also derives from the
closest builtin so callers catching ``ValueError``/``RuntimeError`` keep working.
"""


class SoyEnsembleError(Exception):
    """Base class for all engine errors."""


class FitError(SoyEnsembleError, ValueError):
    """Raised when a base model cannot be fit (empty data, missing target, estimator failure)."""


class SchemaMismatchError(SoyEnsembleError, ValueError):
    """Raised when prediction data does not match the schema a model was fit on."""


class EnsembleBuildError(SoyEnsembleError, RuntimeError):
    """Raised when any member of an ensemble fails to fit or predict."""


class AlignmentError(SoyEnsembleError, ValueError):
    """Raised when heterogeneous ensemble inputs do not describe the same rows."""


class InputSizeError(SoyEnsembleError, ValueError):
    """Raised when actual/predicted vectors differ in length."""


class UndefinedMetricError(SoyEnsembleError, ValueError):
    """Raised when a metric cannot be computed because every compared pair is undefined."""


__all__ = [
    "SoyEnsembleError",
    "FitError",
    "SchemaMismatchError",
    "EnsembleBuildError",
    "AlignmentError",
    "InputSizeError",
    "UndefinedMetricError",
]

from .types import Split
from .holdout import holdout_indices, holdout_split
from .cv_split import fold_indices, generate_folds

__all__ = ["Split", "holdout_indices", "holdout_split", "fold_indices", "generate_folds"]

"""Model estimator builders.

Builder classes convert typed config objects into concrete sklearn estimators.
"""

from .regression import DecisionTreeRegressorBuilder, LinRegBuilder, SVRRegressorBuilder

__all__ = [
    "LinRegBuilder",
    "DecisionTreeRegressorBuilder",
    "SVRRegressorBuilder",
]

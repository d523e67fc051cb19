from .adapters import FittedModel, SklearnRegressorAdapter

__all__ = ["FittedModel", "SklearnRegressorAdapter"]

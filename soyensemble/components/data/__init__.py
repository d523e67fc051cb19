from .dataset import Dataset, PredictionVector, Schema

__all__ = ["Dataset", "PredictionVector", "Schema"]

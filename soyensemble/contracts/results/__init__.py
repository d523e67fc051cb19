from .common import JSONDict, JSONList, ResultModel, RowId, finite_or_none, row_id_list
from .training import CrossValidationResult, CrossValidationSummary, FoldMetrics
from .tuning import SweepPoint, SweepResult
from .report import ExperimentReport, ModelRecord

__all__ = [
    "ResultModel",
    "JSONDict",
    "JSONList",
    "RowId",
    "finite_or_none",
    "row_id_list",
    "FoldMetrics",
    "CrossValidationSummary",
    "CrossValidationResult",
    "SweepPoint",
    "SweepResult",
    "ModelRecord",
    "ExperimentReport",
]

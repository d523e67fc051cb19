from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from soyensemble.contracts.eval_configs import EvalModel
from soyensemble.components.interfaces import Evaluator
from soyensemble.components.evaluation.metrics import score as score_fn


@dataclass
class RegressionEvaluator(Evaluator):
    """Scores predictions with the metric configured in EvalModel."""

    cfg: EvalModel

    def score(self, y_true: Any, y_pred: Any) -> float:
        return score_fn(y_true, y_pred, metric=self.cfg.metric)

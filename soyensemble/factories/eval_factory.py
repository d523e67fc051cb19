from __future__ import annotations

from soyensemble.contracts.eval_configs import EvalModel
from soyensemble.components.interfaces import Evaluator
from soyensemble.components.evaluation.evaluators import RegressionEvaluator


def make_evaluator(cfg: EvalModel) -> Evaluator:
    """Create an evaluator strategy from config."""
    return RegressionEvaluator(cfg=cfg)

import math

import numpy as np
import pytest

from soyensemble.components.evaluation import RegressionEvaluator, list_metrics, mae, rmse, score
from soyensemble.contracts import EvalModel
from soyensemble.errors import InputSizeError, UndefinedMetricError
from soyensemble.factories.eval_factory import make_evaluator


def test_identical_vectors_have_zero_rmse():
    v = [1.5, 2.0, -3.0, 10.0]
    assert rmse(v, v) == 0.0


def test_rmse_is_non_negative_and_symmetric():
    rng = np.random.default_rng(1)
    a = rng.normal(size=50)
    b = rng.normal(size=50)
    assert rmse(a, b) >= 0.0
    assert rmse(a, b) == pytest.approx(rmse(b, a))


def test_rmse_known_value():
    # squared errors 1, 4, 9 -> mean 14/3
    assert rmse([0, 0, 0], [1, 2, 3]) == pytest.approx(math.sqrt(14 / 3))


def test_undefined_pairs_are_excluded():
    actual = [1.0, np.nan, 3.0, 4.0]
    predicted = [1.0, 100.0, np.nan, 6.0]
    # only pairs 0 and 3 are defined: errors 0 and 2
    assert rmse(actual, predicted) == pytest.approx(math.sqrt(2.0))
    assert mae(actual, predicted) == pytest.approx(1.0)


def test_all_undefined_returns_nan_and_score_refuses():
    actual = [np.nan, 1.0]
    predicted = [2.0, np.nan]
    assert math.isnan(rmse(actual, predicted))
    with pytest.raises(UndefinedMetricError, match="at least 1 defined .* got 0"):
        score(actual, predicted, metric="rmse")


def test_r2_with_a_single_defined_pair_reports_the_count():
    with pytest.raises(UndefinedMetricError, match="at least 2 defined .* got 1"):
        score([1.0, np.nan], [1.5, 2.0], metric="r2")


def test_length_mismatch_raises():
    with pytest.raises(InputSizeError):
        rmse([1, 2, 3], [1, 2])
    # still a ValueError for generic callers
    with pytest.raises(ValueError):
        mae([1, 2, 3], [1, 2])


def test_unknown_metric():
    with pytest.raises(ValueError, match="Unknown regression metric"):
        score([1, 2], [1, 2], metric="accuracy")
    assert {"rmse", "mae", "mse", "r2"} <= set(list_metrics())


def test_evaluator_uses_configured_metric():
    ev = make_evaluator(EvalModel(metric="mae"))
    assert isinstance(ev, RegressionEvaluator)
    assert ev.score([0, 0], [1, -3]) == pytest.approx(2.0)

import numpy as np
import pandas as pd
import pytest
from sklearn.linear_model import LinearRegression
from sklearn.svm import SVR
from sklearn.tree import DecisionTreeRegressor

from soyensemble.components.data import Dataset
from soyensemble.contracts import DecisionTreeRegressorConfig, LinearRegConfig, SVRRegressorConfig
from soyensemble.errors import FitError, SchemaMismatchError
from soyensemble.factories.model_factory import make_adapter, make_model
from soyensemble.registries.models import list_model_algos


def test_builtin_algos_are_registered():
    assert list_model_algos() == ["linreg", "svr", "tree"]


@pytest.mark.parametrize(
    "cfg, est_type",
    [
        (LinearRegConfig(), LinearRegression),
        (DecisionTreeRegressorConfig(), DecisionTreeRegressor),
        (SVRRegressorConfig(), SVR),
    ],
)
def test_builders_make_sklearn_estimators(cfg, est_type):
    assert isinstance(make_model(cfg, seed=0).make_estimator(), est_type)


def test_tree_seed_becomes_random_state():
    est = make_model(DecisionTreeRegressorConfig(), seed=7).make_estimator()
    assert est.random_state == 7
    assert est.min_samples_split == 20


def test_fit_predict_returns_aligned_vector(toy_split):
    train, test = toy_split
    adapter = make_adapter(LinearRegConfig(), name="regression")
    model = adapter.fit(train)
    pred = adapter.predict(model, test)

    assert len(pred) == test.n_rows
    assert np.array_equal(pred.row_ids, test.row_ids)
    assert model.family == "regression"
    assert model.feature_names == ("x1", "x2", "x3")


def test_fit_is_deterministic_for_fixed_seed(toy_split):
    train, test = toy_split
    a = make_adapter(DecisionTreeRegressorConfig(min_samples_split=2, min_samples_leaf=1), seed=3)
    p1 = a.predict(a.fit(train), test)
    p2 = a.predict(a.fit(train), test)
    assert np.array_equal(p1.values, p2.values)


def test_fit_rejects_empty_training_data(toy_dataset):
    adapter = make_adapter(LinearRegConfig())
    empty = toy_dataset.take([], name="empty")
    with pytest.raises(FitError, match="empty"):
        adapter.fit(empty)


def test_fit_rejects_missing_target(toy_dataset):
    adapter = make_adapter(SVRRegressorConfig())
    with pytest.raises(FitError, match="no target"):
        adapter.fit(toy_dataset.without_target())


def test_estimator_failure_is_wrapped(toy_dataset):
    y = toy_dataset.target.copy()
    y.iloc[0] = np.nan
    bad = Dataset(features=toy_dataset.features, target=y, name="bad")
    with pytest.raises(FitError) as info:
        make_adapter(LinearRegConfig()).fit(bad)
    assert isinstance(info.value.__cause__, ValueError)


def test_predict_rejects_missing_column(toy_split):
    train, test = toy_split
    adapter = make_adapter(LinearRegConfig())
    model = adapter.fit(train)
    narrowed = Dataset(features=test.features.drop(columns=["x3"]), target=test.target, name="narrow")
    with pytest.raises(SchemaMismatchError, match="missing"):
        adapter.predict(model, narrowed)


def test_predict_rejects_dtype_change(toy_split):
    train, test = toy_split
    adapter = make_adapter(LinearRegConfig())
    model = adapter.fit(train)
    feats = test.features.copy()
    feats["x1"] = feats["x1"].astype("float32")
    with pytest.raises(SchemaMismatchError, match="types"):
        adapter.predict(model, Dataset(features=feats, target=test.target))


def test_predict_reorders_columns_to_training_schema(toy_split):
    train, test = toy_split
    adapter = make_adapter(LinearRegConfig())
    model = adapter.fit(train)
    shuffled = Dataset(features=test.features[["x3", "x1", "x2"]], target=test.target)
    assert np.allclose(adapter.predict(model, shuffled).values, adapter.predict(model, test).values)


def test_with_params_returns_new_adapter():
    adapter = make_adapter(SVRRegressorConfig(C=1.0), seed=5, name="svm")
    other = adapter.with_params(C=10.0)
    assert other.cfg.C == 10.0
    assert adapter.cfg.C == 1.0
    assert other.name == "svm" and other.seed == 5


def test_with_params_rejects_unknown_name():
    with pytest.raises(ValueError, match="no parameter"):
        make_adapter(SVRRegressorConfig()).with_params(not_a_param=1)


def test_fitting_never_mutates_input(toy_split):
    train, _ = toy_split
    before = train.features.copy()
    make_adapter(LinearRegConfig()).fit(train)
    pd.testing.assert_frame_equal(train.features, before)


def test_unknown_config_type_is_rejected():
    from soyensemble.registries import make_model_builder

    class KNNConfig:
        algo = "knn"

    with pytest.raises(ValueError, match="Unsupported algo"):
        make_model_builder(KNNConfig())


def test_config_fields_map_onto_estimator_kwargs():
    from soyensemble.components.models.builders.common import estimator_kwargs

    kw = estimator_kwargs(DecisionTreeRegressor, DecisionTreeRegressorConfig(max_depth=None), seed=3)
    assert "algo" not in kw and "max_depth" not in kw
    assert kw["random_state"] == 3
    assert "random_state" not in estimator_kwargs(SVR, SVRRegressorConfig(), seed=3)

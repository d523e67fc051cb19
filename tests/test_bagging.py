import numpy as np
import pandas as pd
import pytest

from soyensemble.components.data import Dataset
from soyensemble.components.ensembles import bootstrap_indices, build_bagging
from soyensemble.contracts import DecisionTreeRegressorConfig
from soyensemble.errors import EnsembleBuildError, FitError
from soyensemble.factories.model_factory import make_adapter
from soyensemble.runtime.random.rng import RngManager


def _tree():
    return make_adapter(DecisionTreeRegressorConfig(min_samples_split=4, min_samples_leaf=2), seed=11, name="tree")


def test_bootstrap_sample_has_size_n_with_duplicates_and_omissions():
    idx = bootstrap_indices(200, np.random.default_rng(0))
    assert idx.shape == (200,)
    assert idx.min() >= 0 and idx.max() < 200
    # with n=200 a bootstrap sample essentially always repeats and omits rows
    assert np.unique(idx).size < 200


def test_bootstrap_is_deterministic_per_generator():
    a = bootstrap_indices(50, RngManager(5).child_generator("bagging/resample3"))
    b = bootstrap_indices(50, RngManager(5).child_generator("bagging/resample3"))
    c = bootstrap_indices(50, RngManager(5).child_generator("bagging/resample4"))
    assert np.array_equal(a, b)
    assert not np.array_equal(a, c)


def test_single_resample_equals_one_fit_on_that_resample(toy_split):
    train, test = toy_split
    adapter = _tree()
    _, pred = build_bagging(adapter, train, test, resamples=1, seed=42)

    positions = bootstrap_indices(train.n_rows, RngManager(42).child_generator("bagging/resample0"))
    model = adapter.fit(train.take(positions))
    expected = adapter.predict(model, test)

    assert np.allclose(pred.values, expected.values)


def test_same_seed_gives_identical_predictions(toy_split):
    train, test = toy_split
    _, p1 = build_bagging(_tree(), train, test, resamples=10, seed=7)
    _, p2 = build_bagging(_tree(), train, test, resamples=10, seed=7)
    _, p3 = build_bagging(_tree(), train, test, resamples=10, seed=8)
    assert np.array_equal(p1.values, p2.values)
    assert not np.array_equal(p1.values, p3.values)


def test_ensemble_holds_exactly_r_members_and_prediction_is_their_mean(toy_split):
    train, test = toy_split
    adapter = _tree()
    ens, pred = build_bagging(adapter, train, test, resamples=5, seed=1)

    assert len(ens) == 5
    assert len(pred) == test.n_rows
    assert np.array_equal(pred.row_ids, test.row_ids)

    member_preds = np.vstack([adapter.predict(m, test).values for m in ens.members])
    assert np.allclose(pred.values, member_preds.mean(axis=0))
    assert np.allclose(ens.predict(test).values, pred.values)


def test_parallel_build_matches_serial(toy_split):
    train, test = toy_split
    _, serial = build_bagging(_tree(), train, test, resamples=6, seed=3)
    _, parallel = build_bagging(_tree(), train, test, resamples=6, seed=3, n_jobs=2)
    assert np.allclose(serial.values, parallel.values)


def test_zero_resamples_is_rejected(toy_split):
    train, test = toy_split
    with pytest.raises(ValueError):
        build_bagging(_tree(), train, test, resamples=0, seed=1)


def test_empty_training_pool_is_rejected(toy_split):
    train, test = toy_split
    empty = train.take(np.arange(0))
    with pytest.raises(EnsembleBuildError, match="empty training set"):
        build_bagging(_tree(), empty, test, resamples=3, seed=1)


def test_test_rows_in_training_pool_are_rejected(toy_dataset):
    train = toy_dataset.take(np.arange(0, 40))
    test = toy_dataset.take(np.arange(35, 60))
    with pytest.raises(EnsembleBuildError, match="disjoint"):
        build_bagging(_tree(), train, test, resamples=2, seed=1)


def test_member_failure_aborts_the_whole_build(toy_split):
    train, test = toy_split
    y = train.target.copy()
    y[:] = np.nan
    broken = Dataset(features=train.features, target=y, name="broken")
    with pytest.raises(EnsembleBuildError) as info:
        build_bagging(_tree(), broken, test, resamples=3, seed=1)
    assert isinstance(info.value.__cause__, FitError)


def test_oob_rmse_is_reported_when_requested(toy_split):
    train, test = toy_split
    ens, _ = build_bagging(_tree(), train, test, resamples=30, seed=2, oob_score=True)
    assert ens.oob_rmse is not None and ens.oob_rmse > 0.0

    ens_no_oob, _ = build_bagging(_tree(), train, test, resamples=3, seed=2)
    assert ens_no_oob.oob_rmse is None


def test_build_leaves_inputs_untouched(toy_split):
    train, test = toy_split
    before = train.features.copy()
    build_bagging(_tree(), train, test, resamples=3, seed=0)
    pd.testing.assert_frame_equal(train.features, before)

import pytest

from soyensemble.components.tuning import sweep
from soyensemble.contracts import SVRRegressorConfig
from soyensemble.factories.model_factory import make_adapter


def test_sweep_maps_every_candidate_and_picks_the_argmin(toy_split):
    train, test = toy_split
    adapter = make_adapter(SVRRegressorConfig(), name="svm")
    res = sweep(adapter, train, test, "C", [0.1, 1.0, 10.0])

    mapping = res.as_mapping()
    assert list(mapping) == [0.1, 1.0, 10.0]
    assert res.best_value == min(mapping, key=mapping.get)
    assert res.best_score == pytest.approx(min(mapping.values()))
    assert res.model_name == "svm" and res.param_name == "C"


def test_sweep_leaves_the_adapter_unchanged(toy_split):
    train, test = toy_split
    adapter = make_adapter(SVRRegressorConfig(C=1.0))
    sweep(adapter, train, test, "C", [5.0, 50.0])
    assert adapter.cfg.C == 1.0


def test_empty_candidate_list(toy_split):
    train, test = toy_split
    with pytest.raises(ValueError, match="at least one"):
        sweep(make_adapter(SVRRegressorConfig()), train, test, "C", [])


def test_unknown_parameter(toy_split):
    train, test = toy_split
    with pytest.raises(ValueError, match="no parameter"):
        sweep(make_adapter(SVRRegressorConfig()), train, test, "alpha", [1.0])

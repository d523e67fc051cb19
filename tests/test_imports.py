import importlib

import pytest

MODULES = [
    "soyensemble",
    "soyensemble.api",
    "soyensemble.errors",
    "soyensemble.contracts",
    "soyensemble.contracts.results",
    "soyensemble.core.progress",
    "soyensemble.core.shapes",
    "soyensemble.runtime.random.rng",
    "soyensemble.registries.models",
    "soyensemble.registries.builtins.models",
    "soyensemble.components.data",
    "soyensemble.components.models",
    "soyensemble.components.splitters",
    "soyensemble.components.evaluation",
    "soyensemble.components.ensembles",
    "soyensemble.components.tuning",
    "soyensemble.components.preprocessing",
    "soyensemble.factories.model_factory",
    "soyensemble.factories.split_factory",
    "soyensemble.factories.eval_factory",
    "soyensemble.io.readers",
    "soyensemble.io.export",
    "soyensemble.use_cases",
]


@pytest.mark.parametrize("name", MODULES)
def test_module_imports(name):
    importlib.import_module(name)


def test_public_api_surface():
    import soyensemble.api as api

    for name in api.__all__:
        assert hasattr(api, name), name

from __future__ import annotations

from typing import Any, Callable, Optional

from soyensemble.components.interfaces import ModelBuilder
from soyensemble.registries.base import Registry

# (cfg, seed) -> ModelBuilder
ModelBuilderFactory = Callable[[Any, Optional[int]], ModelBuilder]

_BY_CONFIG: Registry[type, ModelBuilderFactory] = Registry(_name="model_builders_by_config")
_BY_ALGO: Registry[str, ModelBuilderFactory] = Registry(_name="model_builders_by_algo")

_builtins_loaded = False


def register_model_builder(
    config_type: type, *, algo: str
) -> Callable[[ModelBuilderFactory], ModelBuilderFactory]:
    """Register a builder factory under its config class and its ``algo`` key."""

    def deco(factory: ModelBuilderFactory) -> ModelBuilderFactory:
        _BY_CONFIG.register(config_type)(factory)
        _BY_ALGO.register(algo)(factory)
        return factory

    return deco


def _load_builtins() -> None:
    global _builtins_loaded
    if not _builtins_loaded:
        from soyensemble.registries.builtins import models as _  # noqa: F401

        _builtins_loaded = True


def make_model_builder(cfg: Any, *, seed: Optional[int] = None) -> ModelBuilder:
    """Builder for ``cfg``, looked up by config class, then by ``cfg.algo``."""
    _load_builtins()
    factory = _BY_CONFIG.try_get(type(cfg))
    if factory is None:
        factory = _BY_ALGO.try_get(str(getattr(cfg, "algo", "")))
    if factory is None:
        raise ValueError(f"Unsupported algo: {getattr(cfg, 'algo', None)} ({type(cfg).__name__})")
    return factory(cfg, seed)


def list_model_algos() -> list[str]:
    _load_builtins()
    return sorted(_BY_ALGO.keys())

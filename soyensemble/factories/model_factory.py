from __future__ import annotations

from typing import Any, Optional

from soyensemble.components.models.adapters import SklearnRegressorAdapter
from soyensemble.registries.models import make_model_builder
from soyensemble.components.interfaces import ModelBuilder


def make_model(cfg: Any, *, seed: Optional[int] = None) -> ModelBuilder:
    """Thin wrapper around the model registry."""
    return make_model_builder(cfg, seed=seed)


def make_adapter(cfg: Any, *, seed: Optional[int] = None, name: Optional[str] = None) -> SklearnRegressorAdapter:
    """Build the fit/predict adapter for a model config."""
    # Resolve the builder eagerly so an unsupported config fails here, not at fit time.
    make_model_builder(cfg, seed=seed)
    return SklearnRegressorAdapter(cfg=cfg, seed=seed, name=name or "")

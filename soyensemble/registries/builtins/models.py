"""Registrations of the three base model families.

Imported for its side-effects by :mod:`soyensemble.registries.models`.
"""

from __future__ import annotations

from typing import Optional

from soyensemble.contracts.model_configs import (
    DecisionTreeRegressorConfig,
    LinearRegConfig,
    SVRRegressorConfig,
)
from soyensemble.components.models.builders import (
    DecisionTreeRegressorBuilder,
    LinRegBuilder,
    SVRRegressorBuilder,
)
from soyensemble.registries.models import register_model_builder


@register_model_builder(LinearRegConfig, algo="linreg")
def _linreg(cfg: LinearRegConfig, seed: Optional[int]) -> LinRegBuilder:
    return LinRegBuilder(cfg)


@register_model_builder(DecisionTreeRegressorConfig, algo="tree")
def _tree(cfg: DecisionTreeRegressorConfig, seed: Optional[int]) -> DecisionTreeRegressorBuilder:
    return DecisionTreeRegressorBuilder(cfg, seed=seed)


@register_model_builder(SVRRegressorConfig, algo="svr")
def _svr(cfg: SVRRegressorConfig, seed: Optional[int]) -> SVRRegressorBuilder:
    # SVR takes no seed
    return SVRRegressorBuilder(cfg)

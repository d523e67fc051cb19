from __future__ import annotations

"""Shared scikit-learn typing aliases used across the engine internals.

These aliases mirror the scikit-learn mixin classes so internal signatures stay
readable without importing estimator classes everywhere.
"""

from typing import TypeAlias

from sklearn.base import RegressorMixin

SkRegressor: TypeAlias = RegressorMixin

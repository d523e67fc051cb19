"""Soybean yield model-comparison engine.

Prefer importing from :mod:`soyensemble.api`; it is the stable public surface.
"""

__version__ = "0.1.0"

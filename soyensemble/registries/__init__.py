"""Config -> model builder registries.

New model families register a builder here; adapters and factories resolve
builders by config type (or algo key) and never branch on family names.
"""

from .models import list_model_algos, make_model_builder, register_model_builder

__all__ = ["make_model_builder", "register_model_builder", "list_model_algos"]

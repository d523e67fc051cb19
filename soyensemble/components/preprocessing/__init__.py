from .cleaning import ROW_ID, clean_observations
from .views import VIEW_FAMILIES, DatasetViews, build_views

__all__ = ["ROW_ID", "clean_observations", "VIEW_FAMILIES", "DatasetViews", "build_views"]

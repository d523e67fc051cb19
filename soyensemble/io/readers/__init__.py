from .tabular_reader import REQUIRED_COLUMNS, load_soybean_table

__all__ = ["REQUIRED_COLUMNS", "load_soybean_table"]

from .data_classes import LoaderContext, ColumnCastingStats, TableCastingStats
from .loader_interface import LoaderInterface, PandasLoader, ParquetLoader

__all__ = [
    "LoaderContext",
    "ColumnCastingStats",
    "TableCastingStats",
    "LoaderInterface",
    "PandasLoader",
    "ParquetLoader",
]

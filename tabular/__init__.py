"""
In-memory tabular cache with cursor navigation, sorting, bulk remapping
and on-demand type conversion.

Exports the cache, its collaborators and its exceptions.
"""

from tabular.cache import RESOLUTION_ORDER, ResolutionStep, TabularCache
from tabular.cell import Cell
from tabular.conversion import (
    CompositeConverter,
    Converter,
    NumericConverter,
    PassThroughConverter,
    TemporalConverter,
    TextConverter,
    create_on_demand_converter,
)
from tabular.errors import (
    ConversionError,
    InvalidArgumentError,
    InvalidCursorStateError,
    MappingError,
    SourceError,
    TabularCacheError,
    TypeConversionError,
)
from tabular.mapping import ColumnConverter, FunctionColumnConverter, Mapper
from tabular.metadata import ColumnMeta, TableMetadata
from tabular.sorting import RowComparator, natural_compare
from tabular.sources import InMemorySource, SQLAlchemyResultSource, TabularSource
from tabular.values import ValueKind, is_assignable, kind_of

__all__ = [
    # Cache
    "TabularCache",
    "Cell",
    "RESOLUTION_ORDER",
    "ResolutionStep",
    # Metadata and values
    "ColumnMeta",
    "TableMetadata",
    "ValueKind",
    "is_assignable",
    "kind_of",
    # Bulk mapping
    "ColumnConverter",
    "FunctionColumnConverter",
    "Mapper",
    # On-demand conversion
    "CompositeConverter",
    "Converter",
    "NumericConverter",
    "PassThroughConverter",
    "TemporalConverter",
    "TextConverter",
    "create_on_demand_converter",
    # Sorting
    "RowComparator",
    "natural_compare",
    # Sources
    "InMemorySource",
    "SQLAlchemyResultSource",
    "TabularSource",
    # Errors
    "ConversionError",
    "InvalidArgumentError",
    "InvalidCursorStateError",
    "MappingError",
    "SourceError",
    "TabularCacheError",
    "TypeConversionError",
]

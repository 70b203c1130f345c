"""
Bulk (eager) column mapping.

A Mapper holds one ColumnConverter per source type name. remap_rows()
walks every column whose type name has a converter and rewrites the
mapped value of each cell in that column. Original values are never
touched.

Failure policy: the first converter error aborts the pass with a
MappingError. Cells already rewritten keep their new mapped values;
there is no rollback.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Mapping, Optional, Sequence, Union

from core.logging import get_logger
from tabular.cell import Cell
from tabular.errors import MappingError
from tabular.metadata import TableMetadata


logger = get_logger(__name__)


class ColumnConverter(ABC):
    """
    Converts one mapped value during a bulk remap.

    Implementations receive the column index and metadata so one converter
    can serve several columns of the same type differently.
    """

    @abstractmethod
    def convert(self, value: Any, column_index: int, metadata: TableMetadata) -> Any:
        """
        Convert a single value.

        Args:
            value: Current mapped value (may be None)
            column_index: 1-based column index
            metadata: Metadata of the table being remapped

        Returns:
            The new mapped value
        """
        pass


class FunctionColumnConverter(ColumnConverter):
    """Adapts a plain one-argument callable to ColumnConverter."""

    def __init__(self, func: Callable[[Any], Any]):
        self._func = func

    def convert(self, value: Any, column_index: int, metadata: TableMetadata) -> Any:
        return self._func(value)

    def __repr__(self) -> str:
        return f"FunctionColumnConverter({getattr(self._func, '__name__', self._func)!r})"


ConverterLike = Union[ColumnConverter, Callable[[Any], Any]]


def _as_column_converter(converter: ConverterLike) -> ColumnConverter:
    if isinstance(converter, ColumnConverter):
        return converter
    if callable(converter):
        return FunctionColumnConverter(converter)
    raise TypeError(f"Not a column converter: {converter!r}")


class Mapper:
    """
    Table of bulk converters keyed by lower-cased source type name.

    A Mapper built with converters=None has no table at all, and remapping
    with it is a no-op.

    Usage:
        mapper = Mapper({"varchar": str.upper, "CHAR": str.strip})
        cache.remap(mapper)
    """

    def __init__(self, converters: Optional[Mapping[str, ConverterLike]] = None):
        self._converters: Optional[dict[str, ColumnConverter]] = None
        if converters is not None:
            self._converters = {}
            for type_name, converter in converters.items():
                self.register(type_name, converter)

    def register(self, type_name: str, converter: ConverterLike) -> "Mapper":
        """Register (or replace) the converter for a type name."""
        if self._converters is None:
            self._converters = {}
        self._converters[type_name.lower()] = _as_column_converter(converter)
        return self

    @property
    def converters(self) -> Optional[dict[str, ColumnConverter]]:
        """Copy of the table, or None if the mapper has no table."""
        if self._converters is None:
            return None
        return dict(self._converters)

    def get(self, type_name: Optional[str]) -> Optional[ColumnConverter]:
        """Case-insensitive lookup; None for a missing type name or table."""
        if type_name is None or self._converters is None:
            return None
        return self._converters.get(type_name.lower())

    def __repr__(self) -> str:
        if self._converters is None:
            return "Mapper(None)"
        return f"Mapper({sorted(self._converters)})"


def remap_rows(
    rows: Sequence[Sequence[Cell]],
    metadata: TableMetadata,
    mapper: Optional[Mapper],
) -> int:
    """
    Apply a mapper to every row in place.

    Args:
        rows: Row storage of a cache
        metadata: Metadata of those rows
        mapper: Converter table; None (or a table-less Mapper) does nothing

    Returns:
        Number of columns that had a converter applied

    Raises:
        MappingError: If any converter fails. Earlier cells stay converted.
    """
    if mapper is None or mapper.converters is None:
        return 0

    remapped = 0
    for column in metadata:
        converter = mapper.get(column.type_name)
        if converter is None:
            continue

        index = column.ordinal - 1
        for row_number, row in enumerate(rows, start=1):
            cell = row[index]
            try:
                cell.mapped = converter.convert(cell.mapped, column.ordinal, metadata)
            except Exception as e:
                logger.warning(
                    "Remap aborted",
                    column=column.name,
                    type_name=column.type_name,
                    row=row_number,
                    error=str(e),
                )
                raise MappingError(
                    f"Mapping column {column.name!r} ({column.type_name}) failed at row {row_number}: {e}",
                    column_index=column.ordinal,
                    row=row_number,
                ) from e

        remapped += 1
        logger.debug(
            "Column remapped",
            column=column.name,
            type_name=column.type_name,
            rows=len(rows),
        )

    return remapped

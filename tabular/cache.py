"""
In-memory, cursor-navigable, sortable table.

TabularCache holds a snapshot of a tabular source as rows of Cells and
exposes a scrollable cursor over them. Values can be read raw (mapped
value only) or as a requested ValueKind, in which case the cache walks
an ordered list of resolution steps and falls back to its on-demand
converter.

Cursor positions are 1-based:
    0        before the first row
    1..n     on a row
    n + 1    after the last row

Thread safety: not thread-safe. Callers must serialize navigation,
sorting and remapping.
"""

import functools
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any, Callable, Iterable, NamedTuple, Optional, Sequence, Union

from core.logging import get_logger
from tabular.cell import Cell
from tabular.conversion.base import Converter
from tabular.conversion.passthrough import PassThroughConverter
from tabular.errors import (
    ConversionError,
    InvalidArgumentError,
    InvalidCursorStateError,
    TypeConversionError,
)
from tabular.mapping import Mapper, remap_rows
from tabular.metadata import ColumnMeta, TableMetadata
from tabular.sorting import Comparator, RowComparator
from tabular.sources.base import TabularSource
from tabular.sources.memory import ColumnSpec, build_columns
from tabular.values import DesiredType, ValueKind, is_assignable, resolve_kind


logger = get_logger(__name__)


Column = Union[int, str]
Columns = Union[Column, Sequence[Column]]
Comparators = Union[Comparator, Sequence[Optional[Comparator]], None]


class TabularCache:
    """
    Scrollable, sortable snapshot of tabular data.

    Construction is all-or-nothing: every row is copied in up front and
    must have exactly one value per column.

    Usage:
        cache = TabularCache(
            [("id", "INTEGER"), ("price", "VARCHAR")],
            [(3, "9.50"), (1, "2.25")],
            converter=CompositeConverter.standard(),
        )
        cache.sort_ascending("id")
        while cache.next():
            price = cache.get_decimal("price")
    """

    def __init__(
        self,
        columns: Iterable[ColumnSpec],
        rows: Iterable[Sequence[Any]],
        mapper: Optional[Mapper] = None,
        converter: Optional[Converter] = None,
    ):
        """
        Build a cache from column descriptors and row values.

        Args:
            columns: ColumnMeta objects, names, (name, type_name) tuples or dicts
            rows: One sequence of values per row, in column order
            mapper: Bulk converters applied once after loading
            converter: On-demand converter. Defaults to PassThroughConverter;
                use create_on_demand_converter(settings) to pick one from config.

        Raises:
            InvalidArgumentError: If a row has the wrong number of values
            MappingError: If the initial remap fails
        """
        self._metadata = TableMetadata(build_columns(columns))
        self._rows: list[list[Cell]] = self._load_rows(rows)
        self._cursor = 0
        self._converter: Converter = (
            converter if converter is not None else PassThroughConverter()
        )

        logger.debug(
            "Tabular cache loaded",
            columns=self._metadata.column_count,
            rows=len(self._rows),
            converter=type(self._converter).__name__,
        )

        self.remap(mapper)

    @classmethod
    def from_source(
        cls,
        source: TabularSource,
        mapper: Optional[Mapper] = None,
        converter: Optional[Converter] = None,
    ) -> "TabularCache":
        """Build a cache by reading a TabularSource once."""
        return cls(source.columns(), source.rows(), mapper=mapper, converter=converter)

    def _load_rows(self, rows: Iterable[Sequence[Any]]) -> list[list[Cell]]:
        count = self._metadata.column_count
        loaded: list[list[Cell]] = []
        for number, values in enumerate(rows, start=1):
            values = tuple(values)
            if len(values) != count:
                raise InvalidArgumentError(
                    f"Row {number} has {len(values)} values, expected {count}"
                )
            loaded.append([Cell.load(value) for value in values])
        return loaded

    # =========================================
    # Metadata
    # =========================================

    @property
    def metadata(self) -> TableMetadata:
        return self._metadata

    @property
    def columns(self) -> tuple[ColumnMeta, ...]:
        return self._metadata.columns

    @property
    def converter(self) -> Converter:
        return self._converter

    @property
    def record_count(self) -> int:
        """Number of rows."""
        return len(self._rows)

    def __len__(self) -> int:
        return len(self._rows)

    def find_column(self, label: Optional[str]) -> int:
        """1-based index of the column with this label, or 0 if there is none."""
        return self._metadata.find_column(label)

    def _column_index(self, column: Column) -> int:
        if isinstance(column, str):
            return self._metadata.find_column(column)
        if isinstance(column, bool) or not isinstance(column, int):
            raise InvalidArgumentError(f"Column must be an index or a label, got {column!r}")
        return column

    def _has_column(self, column_index: int) -> bool:
        return 1 <= column_index <= self._metadata.column_count

    # =========================================
    # Cursor navigation
    # =========================================

    @property
    def row(self) -> int:
        """Current cursor position (0 = before first, n + 1 = after last)."""
        return self._cursor

    def get_row(self) -> int:
        return self._cursor

    def before_first(self) -> None:
        self._cursor = 0

    def after_last(self) -> None:
        self._cursor = len(self._rows) + 1

    def first(self) -> bool:
        """Move to row 1. Returns False if the table is empty."""
        self._cursor = 1
        return len(self._rows) > 0

    def last(self) -> bool:
        """Move to row n. Returns False if the table is empty."""
        self._cursor = len(self._rows)
        return self._cursor > 0

    def next(self) -> bool:
        """Advance one row. Stays put once after the last row."""
        if self._cursor <= len(self._rows):
            self._cursor += 1
        return self._cursor <= len(self._rows)

    def previous(self) -> bool:
        """Step back one row. Stays put once before the first row."""
        if self._cursor >= 1:
            self._cursor -= 1
        return self._cursor >= 1 and len(self._rows) > 0

    def absolute(self, row: int) -> bool:
        """
        Move to an absolute row.

        Negative rows count from the end (-1 is the last row). Positions
        outside 1..n park the cursor before the first or after the last
        row and return False.
        """
        count = len(self._rows)
        if row < 0:
            row += count + 1
        if row < 1:
            self._cursor = 0
            return False
        if row > count:
            self._cursor = count + 1
            return False
        self._cursor = row
        return True

    def relative(self, delta: int) -> bool:
        return self.absolute(self._cursor + delta)

    def is_before_first(self) -> bool:
        return self._cursor < 1

    def is_after_last(self) -> bool:
        return self._cursor > len(self._rows)

    def is_first(self) -> bool:
        return self._cursor == 1 and len(self._rows) > 0

    def is_last(self) -> bool:
        return self._cursor > 0 and self._cursor == len(self._rows)

    def _current_row(self) -> list[Cell]:
        if not 1 <= self._cursor <= len(self._rows):
            raise InvalidCursorStateError(self._cursor, len(self._rows))
        return self._rows[self._cursor - 1]

    # =========================================
    # Value access
    # =========================================

    def current_values(self) -> tuple[Any, ...]:
        """Mapped values of the current row as a new tuple."""
        return tuple(cell.mapped for cell in self._current_row())

    def get_object(self, column: Column, desired_type: Optional[DesiredType] = None) -> Any:
        """
        Read a value from the current row.

        Without desired_type this is the mapped value, with no fallback to
        the original value or the converter. With desired_type the first
        matching step of the resolution order wins:

            1. mapped value, if None or already of the desired kind
            2. original value, if None or already of the desired kind
            3. on-demand conversion of the original value
            4. on-demand conversion of the mapped value

        Args:
            column: 1-based index or column label
            desired_type: ValueKind, a supported Python type, or a kind name

        Returns:
            The value, or None if the column does not exist

        Raises:
            InvalidArgumentError: If desired_type is not a supported type
            InvalidCursorStateError: If the cursor is not on a row
            TypeConversionError: If no step produced the desired kind
        """
        if desired_type is None:
            column_index = self._column_index(column)
            if not self._has_column(column_index):
                return None
            return self._current_row()[column_index - 1].mapped
        return self.get_typed(column, desired_type)

    def get_typed(self, column: Column, desired_type: DesiredType) -> Any:
        """Typed read; see get_object(). desired_type must not be None."""
        desired = resolve_kind(desired_type)
        column_index = self._column_index(column)
        if not self._has_column(column_index):
            return None
        cell = self._current_row()[column_index - 1]

        try:
            for step in RESOLUTION_ORDER:
                if step.matches(self, cell, column_index, desired):
                    return step.produce(self, cell, column_index, desired)
        except ConversionError as e:
            raise TypeConversionError(
                f"Failed to convert column {column_index} to {desired.value}: {e}"
            ) from e

        raise TypeConversionError(
            f"Column {column_index} cannot be presented as {desired.value}: "
            f"no stored value matches and no converter accepts it"
        )

    def is_available(self, column: Column, desired_type: DesiredType) -> bool:
        """
        Whether get_typed() would find a value for this column and kind.

        Walks the same resolution order but only probes; nothing is
        converted. Exceptions raised by the converter's probe propagate.
        Returns False for a column that does not exist.

        Raises:
            InvalidArgumentError: If desired_type is None or unsupported
            InvalidCursorStateError: If the cursor is not on a row
        """
        desired = resolve_kind(desired_type)
        column_index = self._column_index(column)
        if not self._has_column(column_index):
            return False
        cell = self._current_row()[column_index - 1]

        for step in RESOLUTION_ORDER:
            if step.matches(self, cell, column_index, desired):
                return True
        return False

    def _can_convert(self, value: Any, column_index: int, desired: ValueKind) -> bool:
        return self._converter.can_convert(value, column_index, self._metadata, desired)

    def _convert(self, value: Any, column_index: int, desired: ValueKind) -> Any:
        return self._converter.convert(value, column_index, self._metadata, desired)

    # Typed convenience accessors

    def get_boolean(self, column: Column) -> Optional[bool]:
        return self.get_typed(column, ValueKind.BOOLEAN)

    def get_int(self, column: Column) -> Optional[int]:
        return self.get_typed(column, ValueKind.INTEGER)

    def get_float(self, column: Column) -> Optional[float]:
        return self.get_typed(column, ValueKind.FLOAT)

    def get_decimal(self, column: Column) -> Optional[Decimal]:
        return self.get_typed(column, ValueKind.DECIMAL)

    def get_string(self, column: Column) -> Optional[str]:
        return self.get_typed(column, ValueKind.STRING)

    def get_bytes(self, column: Column) -> Optional[bytes]:
        return self.get_typed(column, ValueKind.BINARY)

    def get_date(self, column: Column) -> Optional[date]:
        return self.get_typed(column, ValueKind.DATE)

    def get_time(self, column: Column) -> Optional[time]:
        return self.get_typed(column, ValueKind.TIME)

    def get_timestamp(self, column: Column) -> Optional[datetime]:
        return self.get_typed(column, ValueKind.TIMESTAMP)

    # =========================================
    # Bulk remap
    # =========================================

    def remap(self, mapper: Optional[Mapper]) -> None:
        """
        Rewrite mapped values of every column whose type has a converter.

        Does nothing when mapper is None or has no table. Original values
        are never changed. The cursor is left where it is.

        Raises:
            MappingError: On the first failing cell. Cells converted before
                it keep their new values.
        """
        remapped = remap_rows(self._rows, self._metadata, mapper)
        if remapped:
            logger.debug("Remap completed", columns=remapped, rows=len(self._rows))

    # =========================================
    # Sorting
    # =========================================

    def sort_ascending(self, columns: Columns, comparators: Comparators = None) -> None:
        """
        Stable sort on mapped values, smallest first.

        Args:
            columns: Column index or label, or a sequence of them (most
                significant first)
            comparators: cmp(a, b) -> int callable for a single column, or
                a sequence aligned with columns; None entries and a None
                argument mean natural ordering

        The cursor is moved before the first row.
        """
        self._sort(columns, comparators, descending=False)

    def sort_descending(self, columns: Columns, comparators: Comparators = None) -> None:
        """Like sort_ascending(), largest first. A None key still never decides."""
        self._sort(columns, comparators, descending=True)

    def _sort(self, columns: Columns, comparators: Comparators, descending: bool) -> None:
        if isinstance(columns, (int, str)):
            columns = [columns]
        if comparators is not None and callable(comparators):
            comparators = [comparators]

        column_indices = [self._column_index(column) for column in columns]
        row_comparator = RowComparator(
            column_indices,
            comparators,
            descending,
            self._metadata.column_count,
        )
        self._rows.sort(key=functools.cmp_to_key(row_comparator))
        self._cursor = 0

        logger.debug(
            "Rows sorted",
            columns=column_indices,
            descending=descending,
            rows=len(self._rows),
        )

    def __repr__(self) -> str:
        return (
            f"TabularCache(columns={self._metadata.column_count}, "
            f"rows={len(self._rows)}, row={self._cursor})"
        )


class ResolutionStep(NamedTuple):
    """One step of typed-value resolution: a match test and the value it yields."""
    name: str
    matches: Callable[[TabularCache, Cell, int, ValueKind], bool]
    produce: Callable[[TabularCache, Cell, int, ValueKind], Any]


def _stored_matches(value: Any, desired: ValueKind) -> bool:
    return value is None or is_assignable(value, desired)


# First match wins. The order is part of the public behaviour.
RESOLUTION_ORDER: tuple[ResolutionStep, ...] = (
    ResolutionStep(
        "mapped",
        lambda cache, cell, index, desired: _stored_matches(cell.mapped, desired),
        lambda cache, cell, index, desired: cell.mapped,
    ),
    ResolutionStep(
        "original",
        lambda cache, cell, index, desired: _stored_matches(cell.original, desired),
        lambda cache, cell, index, desired: cell.original,
    ),
    ResolutionStep(
        "convert_original",
        lambda cache, cell, index, desired: cache._can_convert(cell.original, index, desired),
        lambda cache, cell, index, desired: cache._convert(cell.original, index, desired),
    ),
    ResolutionStep(
        "convert_mapped",
        lambda cache, cell, index, desired: cache._can_convert(cell.mapped, index, desired),
        lambda cache, cell, index, desired: cache._convert(cell.mapped, index, desired),
    ),
)

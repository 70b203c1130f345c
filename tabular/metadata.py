"""
Column metadata for a tabular cache.

Descriptors are produced once from the data source and are immutable
afterwards. Converters receive the TableMetadata alongside the column
index so they can make per-column decisions.
"""

from typing import Any, Iterable, Iterator, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from tabular.errors import InvalidArgumentError


class ColumnMeta(BaseModel):
    """Immutable descriptor for one column."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(
        ...,
        min_length=1,
        description="Column name as reported by the source",
    )
    label: str = Field(
        default="",
        description="Display label; lookups by name match against this. Defaults to name",
    )
    type_name: Optional[str] = Field(
        default=None,
        description="Source type name (e.g. 'VARCHAR'); keys bulk remapping",
    )
    ordinal: int = Field(
        ...,
        ge=1,
        description="1-based position of the column",
    )

    @model_validator(mode="before")
    @classmethod
    def _default_label(cls, data: Any) -> Any:
        if isinstance(data, dict) and not str(data.get("label") or "").strip():
            data = {**data, "label": data.get("name")}
        return data


class TableMetadata:
    """
    Ordered, immutable collection of ColumnMeta.

    Column indices are 1-based throughout, matching cursor rows.
    """

    def __init__(self, columns: Iterable[ColumnMeta]):
        self._columns: tuple[ColumnMeta, ...] = tuple(columns)
        for expected, column in enumerate(self._columns, start=1):
            if column.ordinal != expected:
                raise InvalidArgumentError(
                    f"Column {column.name!r} has ordinal {column.ordinal}, expected {expected}"
                )

    @property
    def columns(self) -> tuple[ColumnMeta, ...]:
        return self._columns

    @property
    def column_count(self) -> int:
        return len(self._columns)

    def column(self, column_index: int) -> ColumnMeta:
        """Get the descriptor for a 1-based column index."""
        if not 1 <= column_index <= len(self._columns):
            raise IndexError(f"Column index {column_index} out of range 1..{len(self._columns)}")
        return self._columns[column_index - 1]

    def column_name(self, column_index: int) -> str:
        return self.column(column_index).name

    def column_label(self, column_index: int) -> str:
        return self.column(column_index).label

    def column_type_name(self, column_index: int) -> Optional[str]:
        return self.column(column_index).type_name

    def find_column(self, label: Optional[str]) -> int:
        """1-based index of the first column with this label, or 0 if none."""
        if label is None:
            return 0
        for column in self._columns:
            if column.label == label:
                return column.ordinal
        return 0

    def __len__(self) -> int:
        return len(self._columns)

    def __iter__(self) -> Iterator[ColumnMeta]:
        return iter(self._columns)

    def __repr__(self) -> str:
        names = ", ".join(column.name for column in self._columns)
        return f"TableMetadata({names})"

"""
Source backed by Python sequences.
"""

from typing import Any, Iterable, Mapping, Sequence, Union

from tabular.errors import InvalidArgumentError
from tabular.metadata import ColumnMeta
from tabular.sources.base import TabularSource


ColumnSpec = Union[ColumnMeta, str, tuple, Mapping[str, Any]]


def build_columns(specs: Iterable[ColumnSpec]) -> list[ColumnMeta]:
    """
    Turn loose column specs into ColumnMeta with ordinals 1..n.

    Accepted forms per column:
        "name"
        ("name", "TYPE")
        {"name": ..., "type_name": ..., "label": ...}
        ColumnMeta (its ordinal must already match its position)
    """
    columns: list[ColumnMeta] = []
    for ordinal, spec in enumerate(specs, start=1):
        if isinstance(spec, ColumnMeta):
            columns.append(spec)
        elif isinstance(spec, str):
            columns.append(ColumnMeta(name=spec, ordinal=ordinal))
        elif isinstance(spec, tuple):
            if not 1 <= len(spec) <= 2:
                raise InvalidArgumentError(f"Column tuple must be (name[, type_name]): {spec!r}")
            name, *rest = spec
            columns.append(ColumnMeta(name=name, type_name=rest[0] if rest else None, ordinal=ordinal))
        elif isinstance(spec, Mapping):
            columns.append(ColumnMeta(**{**spec, "ordinal": ordinal}))
        else:
            raise InvalidArgumentError(f"Unsupported column spec: {spec!r}")
    return columns


class InMemorySource(TabularSource):
    """
    Rows and columns supplied directly by the caller.

    Usage:
        source = InMemorySource(
            [("id", "INTEGER"), ("name", "VARCHAR")],
            [(1, "ada"), (2, "grace")],
        )
    """

    def __init__(self, columns: Iterable[ColumnSpec], rows: Iterable[Sequence[Any]]):
        self._columns = build_columns(columns)
        self._rows = [tuple(row) for row in rows]

    def columns(self) -> Sequence[ColumnMeta]:
        return list(self._columns)

    def rows(self) -> Iterable[Sequence[Any]]:
        return iter(self._rows)

"""
Source adapting an executed SQLAlchemy result.

The adapter does not run queries. The caller executes a statement on its
own connection and hands over the Result; the adapter only reads the
column names, the declared column types (when the statement is given)
and the rows.
"""

from typing import Any, Iterable, Optional, Sequence

from sqlalchemy.engine import Result
from sqlalchemy.exc import CompileError, SQLAlchemyError
from sqlalchemy.sql.expression import Select

from core.logging import get_logger
from tabular.errors import SourceError
from tabular.metadata import ColumnMeta
from tabular.sources.base import TabularSource


logger = get_logger(__name__)


def _type_name(sql_type: Any) -> Optional[str]:
    """Generic SQL name of a type without parameters: VARCHAR(20) -> VARCHAR."""
    try:
        compiled = str(sql_type)
    except CompileError:
        return None
    name = compiled.split("(", 1)[0].strip()
    return name or None


class SQLAlchemyResultSource(TabularSource):
    """
    Materializes a SQLAlchemy Result.

    Type names come from the statement's selected columns. Without a
    statement, or when the statement's column count does not match the
    result, every column's type_name is None and bulk remapping will not
    touch the table.

    Usage:
        stmt = select(users.c.id, users.c.name)
        with engine.connect() as conn:
            source = SQLAlchemyResultSource(conn.execute(stmt), stmt)
            cache = TabularCache.from_source(source)
    """

    def __init__(self, result: Result, statement: Optional[Select] = None):
        self._result = result
        self._statement = statement
        self._rows: Optional[list[tuple]] = None
        self._names = list(result.keys())

    def columns(self) -> Sequence[ColumnMeta]:
        type_names: list[Optional[str]] = [None] * len(self._names)
        if self._statement is not None:
            selected = list(self._statement.selected_columns)
            if len(selected) == len(self._names):
                type_names = [_type_name(column.type) for column in selected]
            else:
                logger.warning(
                    "Statement does not match result, column types unknown",
                    statement_columns=len(selected),
                    result_columns=len(self._names),
                )

        return [
            ColumnMeta(name=name, type_name=type_name, ordinal=ordinal)
            for ordinal, (name, type_name) in enumerate(zip(self._names, type_names), start=1)
        ]

    def rows(self) -> Iterable[Sequence[Any]]:
        if self._rows is None:
            try:
                self._rows = [tuple(row) for row in self._result.fetchall()]
            except SQLAlchemyError as e:
                raise SourceError(f"Failed to read result rows: {e}") from e
            logger.debug("Result drained", rows=len(self._rows), columns=len(self._names))
        return iter(self._rows)

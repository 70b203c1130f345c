"""
Abstract base class for tabular data sources.

A source is read exactly once, when a cache is built from it. It has to
describe its columns and yield one value per column for each row, in
column order. The cache never goes back to the source afterwards.
"""

from abc import ABC, abstractmethod
from typing import Any, Iterable, Sequence

from tabular.metadata import ColumnMeta


class TabularSource(ABC):
    """
    Abstract interface for anything a TabularCache can be loaded from.

    Usage:
        source = InMemorySource(["id", "name"], [(1, "a"), (2, "b")])
        cache = TabularCache.from_source(source)
    """

    @abstractmethod
    def columns(self) -> Sequence[ColumnMeta]:
        """
        Describe the columns.

        Returns:
            Column descriptors with ordinals 1..n
        """
        pass

    @abstractmethod
    def rows(self) -> Iterable[Sequence[Any]]:
        """
        Yield the row values.

        Each row must hold exactly one value per column.

        Raises:
            SourceError: If the rows cannot be read
        """
        pass

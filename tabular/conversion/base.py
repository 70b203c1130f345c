"""
Abstract base class for on-demand converters.

An on-demand converter is asked, per access, whether a stored value can
be presented as a desired ValueKind and, if so, to produce it. It never
changes what is stored in the cache.

Design principles:
- Two methods only: can_convert is a cheap probe, convert does the work
- Logically invalid requests fail with ConversionError
- Column index and metadata are passed through for column-aware converters
"""

from abc import ABC, abstractmethod
from typing import Any

from tabular.metadata import TableMetadata
from tabular.values import ValueKind


class Converter(ABC):
    """
    Abstract interface for on-demand converters.

    Usage:
        converter = NumericConverter()

        if converter.can_convert(value, 2, metadata, ValueKind.DECIMAL):
            amount = converter.convert(value, 2, metadata, ValueKind.DECIMAL)
    """

    @abstractmethod
    def can_convert(
        self,
        value: Any,
        column_index: int,
        metadata: TableMetadata,
        desired: ValueKind,
    ) -> bool:
        """
        Check whether value can be presented as the desired kind.

        Args:
            value: Stored value (original or mapped), may be None
            column_index: 1-based column index
            metadata: Metadata of the owning table
            desired: Kind the caller asked for

        Returns:
            True if convert() should be attempted
        """
        pass

    @abstractmethod
    def convert(
        self,
        value: Any,
        column_index: int,
        metadata: TableMetadata,
        desired: ValueKind,
    ) -> Any:
        """
        Convert value to the desired kind.

        Args:
            value: Stored value (original or mapped)
            column_index: 1-based column index
            metadata: Metadata of the owning table
            desired: Kind the caller asked for

        Returns:
            The converted value

        Raises:
            ConversionError: If the conversion is not possible
        """
        pass

"""
Default on-demand converter: never converts anything.

A cache using it answers typed requests only from values that already
have the requested kind.
"""

from typing import Any

from tabular.conversion.base import Converter
from tabular.errors import ConversionError
from tabular.metadata import TableMetadata
from tabular.values import ValueKind


class PassThroughConverter(Converter):
    """Converter that refuses every request."""

    def can_convert(
        self,
        value: Any,
        column_index: int,
        metadata: TableMetadata,
        desired: ValueKind,
    ) -> bool:
        return False

    def convert(
        self,
        value: Any,
        column_index: int,
        metadata: TableMetadata,
        desired: ValueKind,
    ) -> Any:
        raise ConversionError(
            f"Pass-through converter cannot convert {type(value).__name__} to {desired.value}"
        )

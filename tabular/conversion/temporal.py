"""
On-demand conversion between date/time kinds.
"""

from datetime import datetime, time
from typing import Any, Callable

from tabular.conversion.base import Converter
from tabular.errors import ConversionError
from tabular.metadata import TableMetadata
from tabular.values import ValueKind, kind_of


class TemporalConverter(Converter):
    """
    Narrows timestamps and widens dates.

    - TIMESTAMP -> DATE, TIME, STRING
    - DATE -> TIMESTAMP (midnight), STRING
    - TIME -> STRING
    Text output is ISO 8601.
    """

    ROUTES: dict[tuple[ValueKind, ValueKind], Callable[[Any], Any]] = {
        (ValueKind.TIMESTAMP, ValueKind.DATE): lambda v: v.date(),
        (ValueKind.TIMESTAMP, ValueKind.TIME): lambda v: v.timetz(),
        (ValueKind.TIMESTAMP, ValueKind.STRING): lambda v: v.isoformat(),
        (ValueKind.DATE, ValueKind.TIMESTAMP): lambda v: datetime.combine(v, time()),
        (ValueKind.DATE, ValueKind.STRING): lambda v: v.isoformat(),
        (ValueKind.TIME, ValueKind.STRING): lambda v: v.isoformat(),
    }

    def can_convert(
        self,
        value: Any,
        column_index: int,
        metadata: TableMetadata,
        desired: ValueKind,
    ) -> bool:
        if value is None:
            return False
        return (kind_of(value), desired) in self.ROUTES

    def convert(
        self,
        value: Any,
        column_index: int,
        metadata: TableMetadata,
        desired: ValueKind,
    ) -> Any:
        route = self.ROUTES.get((kind_of(value), desired)) if value is not None else None
        if route is None:
            raise ConversionError(
                f"Cannot convert {type(value).__name__} to {desired.value}"
            )
        return route(value)

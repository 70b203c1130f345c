"""
Dispatching on-demand converter.

Routes each request to the converters registered for the source value's
kind, in registration order. The first one that accepts the request
does the conversion.
"""

from typing import Any, Iterable, Optional, Union

from tabular.conversion.base import Converter
from tabular.conversion.numeric import NumericConverter
from tabular.conversion.temporal import TemporalConverter
from tabular.conversion.text import TextConverter
from tabular.errors import ConversionError
from tabular.metadata import TableMetadata
from tabular.values import NUMERIC_KINDS, TEMPORAL_KINDS, ValueKind, kind_of


class CompositeConverter(Converter):
    """
    Converter built from per-source-kind converters.

    Usage:
        converter = CompositeConverter()
        converter.register(ValueKind.STRING, TextConverter())
        converter.register(NUMERIC_KINDS, NumericConverter())
    """

    def __init__(self):
        self._routes: dict[ValueKind, list[Converter]] = {}

    @classmethod
    def standard(cls) -> "CompositeConverter":
        """Numeric widening/narrowing, text parsing and temporal conversion."""
        composite = cls()
        composite.register(NUMERIC_KINDS, NumericConverter())
        composite.register(ValueKind.STRING, TextConverter())
        composite.register(TEMPORAL_KINDS, TemporalConverter())
        return composite

    def register(
        self,
        source_kinds: Union[ValueKind, Iterable[ValueKind]],
        converter: Converter,
    ) -> "CompositeConverter":
        """Route values of the given kind(s) to converter, after any earlier registrations."""
        if isinstance(source_kinds, ValueKind):
            source_kinds = (source_kinds,)
        for kind in source_kinds:
            self._routes.setdefault(kind, []).append(converter)
        return self

    def converters_for(self, kind: ValueKind) -> list[Converter]:
        return list(self._routes.get(kind, ()))

    def _select(
        self,
        value: Any,
        column_index: int,
        metadata: TableMetadata,
        desired: ValueKind,
    ) -> Optional[Converter]:
        if value is None:
            return None
        for converter in self._routes.get(kind_of(value), ()):
            if converter.can_convert(value, column_index, metadata, desired):
                return converter
        return None

    def can_convert(
        self,
        value: Any,
        column_index: int,
        metadata: TableMetadata,
        desired: ValueKind,
    ) -> bool:
        return self._select(value, column_index, metadata, desired) is not None

    def convert(
        self,
        value: Any,
        column_index: int,
        metadata: TableMetadata,
        desired: ValueKind,
    ) -> Any:
        converter = self._select(value, column_index, metadata, desired)
        if converter is None:
            raise ConversionError(
                f"No converter registered for {type(value).__name__} -> {desired.value}"
            )
        return converter.convert(value, column_index, metadata, desired)

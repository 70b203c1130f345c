"""
On-demand conversion between numeric kinds.

Handles int, float and Decimal sources (bool is its own kind and is not
numeric here) and can present them as any numeric kind or as text.
"""

import math
from decimal import Decimal, InvalidOperation
from typing import Any

from tabular.conversion.base import Converter
from tabular.errors import ConversionError
from tabular.metadata import TableMetadata
from tabular.values import NUMERIC_KINDS, ValueKind, kind_of


class NumericConverter(Converter):
    """
    Widens and narrows numbers on access.

    - float -> INTEGER truncates toward zero
    - float -> DECIMAL goes through repr() so 0.1 stays Decimal("0.1")
    - NaN and infinities cannot become INTEGER or DECIMAL
    """

    TARGETS = NUMERIC_KINDS | {ValueKind.STRING}

    def can_convert(
        self,
        value: Any,
        column_index: int,
        metadata: TableMetadata,
        desired: ValueKind,
    ) -> bool:
        if value is None:
            return False
        return kind_of(value) in NUMERIC_KINDS and desired in self.TARGETS

    def convert(
        self,
        value: Any,
        column_index: int,
        metadata: TableMetadata,
        desired: ValueKind,
    ) -> Any:
        if not self.can_convert(value, column_index, metadata, desired):
            raise ConversionError(
                f"Cannot convert {type(value).__name__} to {desired.value} numerically"
            )

        if desired == ValueKind.STRING:
            return str(value)
        if desired == ValueKind.FLOAT:
            return float(value)

        if not self._is_finite(value):
            raise ConversionError(f"Cannot convert non-finite {value!r} to {desired.value}")

        if desired == ValueKind.INTEGER:
            return int(value)

        # DECIMAL
        try:
            if isinstance(value, float):
                return Decimal(repr(value))
            return Decimal(value)
        except InvalidOperation as e:
            raise ConversionError(f"Cannot convert {value!r} to decimal: {e}")

    @staticmethod
    def _is_finite(value: Any) -> bool:
        if isinstance(value, Decimal):
            return value.is_finite()
        if isinstance(value, float):
            return math.isfinite(value)
        return True

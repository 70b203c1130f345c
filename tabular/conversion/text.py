"""
On-demand parsing of text values.
"""

from datetime import date, datetime, time
from decimal import Decimal, InvalidOperation
from typing import Any, Callable

from tabular.conversion.base import Converter
from tabular.errors import ConversionError
from tabular.metadata import TableMetadata
from tabular.values import ValueKind, kind_of


_TRUE_WORDS = frozenset({"true", "t", "yes", "y", "1"})
_FALSE_WORDS = frozenset({"false", "f", "no", "n", "0"})


def _parse_boolean(text: str) -> bool:
    word = text.lower()
    if word in _TRUE_WORDS:
        return True
    if word in _FALSE_WORDS:
        return False
    raise ValueError(f"not a boolean word: {text!r}")


def _parse_decimal(text: str) -> Decimal:
    try:
        return Decimal(text)
    except InvalidOperation:
        raise ValueError(f"not a decimal: {text!r}")


class TextConverter(Converter):
    """
    Parses strings into other kinds.

    can_convert() only looks at kinds: any string is a candidate for any
    parsable target. Text that turns out not to parse fails in convert()
    with ConversionError. Surrounding whitespace is ignored.
    Dates and times use ISO 8601.
    """

    PARSERS: dict[ValueKind, Callable[[str], Any]] = {
        ValueKind.INTEGER: int,
        ValueKind.FLOAT: float,
        ValueKind.DECIMAL: _parse_decimal,
        ValueKind.BOOLEAN: _parse_boolean,
        ValueKind.DATE: date.fromisoformat,
        ValueKind.TIME: time.fromisoformat,
        ValueKind.TIMESTAMP: datetime.fromisoformat,
    }

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding

    def can_convert(
        self,
        value: Any,
        column_index: int,
        metadata: TableMetadata,
        desired: ValueKind,
    ) -> bool:
        if value is None or kind_of(value) != ValueKind.STRING:
            return False
        return desired in self.PARSERS or desired == ValueKind.BINARY

    def convert(
        self,
        value: Any,
        column_index: int,
        metadata: TableMetadata,
        desired: ValueKind,
    ) -> Any:
        if not self.can_convert(value, column_index, metadata, desired):
            raise ConversionError(
                f"Cannot parse {type(value).__name__} as {desired.value}"
            )

        if desired == ValueKind.BINARY:
            return value.encode(self.encoding)

        try:
            return self.PARSERS[desired](value.strip())
        except ValueError as e:
            raise ConversionError(f"Cannot parse {value!r} as {desired.value}: {e}")

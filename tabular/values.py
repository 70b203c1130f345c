"""
Closed set of value kinds and their compatibility table.

Every stored value is classified into exactly one ValueKind through a
fixed lookup, and "is this value usable as kind X" is answered by the
table below rather than by isinstance() against arbitrary classes.
This keeps bool out of INTEGER and datetime out of DATE, which plain
isinstance() checks would get wrong.
"""

from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import Any, Optional, Union

from tabular.errors import InvalidArgumentError


class ValueKind(str, Enum):
    """Kinds of values a cell can hold or a caller can ask for."""
    BOOLEAN = "boolean"
    INTEGER = "integer"
    FLOAT = "float"
    DECIMAL = "decimal"
    STRING = "string"
    BINARY = "binary"
    DATE = "date"
    TIME = "time"
    TIMESTAMP = "timestamp"
    OBJECT = "object"  # Anything else; also the "any kind" target

    @property
    def is_numeric(self) -> bool:
        return self in NUMERIC_KINDS

    @property
    def is_temporal(self) -> bool:
        return self in TEMPORAL_KINDS


NUMERIC_KINDS = frozenset({ValueKind.INTEGER, ValueKind.FLOAT, ValueKind.DECIMAL})
TEMPORAL_KINDS = frozenset({ValueKind.DATE, ValueKind.TIME, ValueKind.TIMESTAMP})

# Order matters: bool before int, datetime before date.
_CLASSIFICATION: tuple[tuple[type, ValueKind], ...] = (
    (bool, ValueKind.BOOLEAN),
    (int, ValueKind.INTEGER),
    (float, ValueKind.FLOAT),
    (Decimal, ValueKind.DECIMAL),
    (str, ValueKind.STRING),
    (bytes, ValueKind.BINARY),
    (bytearray, ValueKind.BINARY),
    (memoryview, ValueKind.BINARY),
    (datetime, ValueKind.TIMESTAMP),
    (date, ValueKind.DATE),
    (time, ValueKind.TIME),
)

# Python types a caller may pass instead of a ValueKind.
_TYPE_TO_KIND: dict[type, ValueKind] = {
    bool: ValueKind.BOOLEAN,
    int: ValueKind.INTEGER,
    float: ValueKind.FLOAT,
    Decimal: ValueKind.DECIMAL,
    str: ValueKind.STRING,
    bytes: ValueKind.BINARY,
    datetime: ValueKind.TIMESTAMP,
    date: ValueKind.DATE,
    time: ValueKind.TIME,
    object: ValueKind.OBJECT,
}

# desired kind -> stored kinds that satisfy it without conversion
_COMPATIBLE: dict[ValueKind, frozenset[ValueKind]] = {
    kind: frozenset({kind}) for kind in ValueKind if kind is not ValueKind.OBJECT
}
_COMPATIBLE[ValueKind.OBJECT] = frozenset(ValueKind)

DesiredType = Union[ValueKind, type]


def kind_of(value: Any) -> ValueKind:
    """Classify a non-None value. Unknown types are OBJECT."""
    for python_type, kind in _CLASSIFICATION:
        if isinstance(value, python_type):
            return kind
    return ValueKind.OBJECT


def is_assignable(value: Any, desired: ValueKind) -> bool:
    """Whether a non-None value already satisfies the desired kind."""
    return kind_of(value) in _COMPATIBLE[desired]


def resolve_kind(desired: Optional[DesiredType]) -> ValueKind:
    """
    Normalize a caller-supplied desired type to a ValueKind.

    Raises:
        InvalidArgumentError: If desired is None or not a supported type
    """
    if desired is None:
        raise InvalidArgumentError("desired type must not be None")
    if isinstance(desired, ValueKind):
        return desired
    if isinstance(desired, str):
        try:
            return ValueKind(desired.lower())
        except ValueError:
            raise InvalidArgumentError(f"Unknown value kind: {desired!r}")
    kind = _TYPE_TO_KIND.get(desired) if isinstance(desired, type) else None
    if kind is None:
        raise InvalidArgumentError(
            f"Unsupported desired type: {desired!r}. "
            f"Supported: {[k.value for k in ValueKind]} or {[t.__name__ for t in _TYPE_TO_KIND]}"
        )
    return kind

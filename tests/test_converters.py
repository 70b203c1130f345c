"""
Tests for the on-demand converters and their factory.
"""

import math
from datetime import date, datetime, time, timezone
from decimal import Decimal

import pytest

from core.config import Settings
from tabular import (
    CompositeConverter,
    ConversionError,
    NumericConverter,
    PassThroughConverter,
    TableMetadata,
    TemporalConverter,
    TextConverter,
    ValueKind,
)
from tabular.conversion import OnDemandConversion, create_on_demand_converter, get_conversion_mode


@pytest.fixture
def metadata():
    return TableMetadata([])


def _convert(converter, value, desired, metadata):
    return converter.convert(value, 1, metadata, desired)


# =========================================
# PassThroughConverter
# =========================================

def test_pass_through_refuses_everything(metadata):
    converter = PassThroughConverter()

    assert not converter.can_convert("5", 1, metadata, ValueKind.INTEGER)
    assert not converter.can_convert(5, 1, metadata, ValueKind.OBJECT)
    with pytest.raises(ConversionError):
        _convert(converter, "5", ValueKind.INTEGER, metadata)


# =========================================
# NumericConverter
# =========================================

def test_numeric_widening(metadata):
    converter = NumericConverter()

    assert _convert(converter, 3, ValueKind.FLOAT, metadata) == 3.0
    assert _convert(converter, 3, ValueKind.DECIMAL, metadata) == Decimal(3)
    assert _convert(converter, Decimal("2.5"), ValueKind.FLOAT, metadata) == 2.5


def test_numeric_float_to_integer_truncates(metadata):
    converter = NumericConverter()

    assert _convert(converter, 2.9, ValueKind.INTEGER, metadata) == 2
    assert _convert(converter, -2.9, ValueKind.INTEGER, metadata) == -2


def test_numeric_float_to_decimal_keeps_short_repr(metadata):
    assert _convert(NumericConverter(), 0.1, ValueKind.DECIMAL, metadata) == Decimal("0.1")


def test_numeric_to_text(metadata):
    assert _convert(NumericConverter(), 7.25, ValueKind.STRING, metadata) == "7.25"


@pytest.mark.parametrize("value", [math.nan, math.inf, Decimal("NaN")])
@pytest.mark.parametrize("desired", [ValueKind.INTEGER, ValueKind.DECIMAL])
def test_numeric_non_finite_values_fail(metadata, value, desired):
    with pytest.raises(ConversionError):
        _convert(NumericConverter(), value, desired, metadata)


def test_numeric_ignores_booleans_and_text(metadata):
    converter = NumericConverter()

    assert not converter.can_convert(True, 1, metadata, ValueKind.INTEGER)
    assert not converter.can_convert("5", 1, metadata, ValueKind.INTEGER)
    assert not converter.can_convert(5, 1, metadata, ValueKind.DATE)
    assert not converter.can_convert(None, 1, metadata, ValueKind.FLOAT)


# =========================================
# TextConverter
# =========================================

@pytest.mark.parametrize(
    "text, desired, expected",
    [
        (" 42 ", ValueKind.INTEGER, 42),
        ("1.5", ValueKind.FLOAT, 1.5),
        ("9.50", ValueKind.DECIMAL, Decimal("9.50")),
        ("Yes", ValueKind.BOOLEAN, True),
        ("0", ValueKind.BOOLEAN, False),
        ("2024-02-29", ValueKind.DATE, date(2024, 2, 29)),
        ("13:45:00", ValueKind.TIME, time(13, 45)),
        ("2024-02-29T13:45:00", ValueKind.TIMESTAMP, datetime(2024, 2, 29, 13, 45)),
    ],
)
def test_text_parsing(metadata, text, desired, expected):
    assert _convert(TextConverter(), text, desired, metadata) == expected


def test_text_to_binary_uses_encoding(metadata):
    assert _convert(TextConverter(), "é", ValueKind.BINARY, metadata) == b"\xc3\xa9"
    assert _convert(TextConverter("latin-1"), "é", ValueKind.BINARY, metadata) == b"\xe9"


@pytest.mark.parametrize(
    "text, desired",
    [
        ("five", ValueKind.INTEGER),
        ("1.2.3", ValueKind.DECIMAL),
        ("maybe", ValueKind.BOOLEAN),
        ("yesterday", ValueKind.DATE),
    ],
)
def test_text_unparsable_raises_conversion_error(metadata, text, desired):
    converter = TextConverter()

    # The probe only looks at kinds
    assert converter.can_convert(text, 1, metadata, desired)
    with pytest.raises(ConversionError):
        _convert(converter, text, desired, metadata)


def test_text_only_handles_strings(metadata):
    converter = TextConverter()

    assert not converter.can_convert(b"5", 1, metadata, ValueKind.INTEGER)
    assert not converter.can_convert(5, 1, metadata, ValueKind.STRING)
    assert not converter.can_convert("5", 1, metadata, ValueKind.OBJECT)


# =========================================
# TemporalConverter
# =========================================

def test_temporal_routes(metadata):
    converter = TemporalConverter()
    stamp = datetime(2024, 5, 1, 8, 30, tzinfo=timezone.utc)

    assert _convert(converter, stamp, ValueKind.DATE, metadata) == date(2024, 5, 1)
    assert _convert(converter, stamp, ValueKind.TIME, metadata) == time(8, 30, tzinfo=timezone.utc)
    assert _convert(converter, stamp, ValueKind.STRING, metadata) == "2024-05-01T08:30:00+00:00"
    assert _convert(converter, date(2024, 5, 1), ValueKind.TIMESTAMP, metadata) == datetime(2024, 5, 1)
    assert _convert(converter, time(8, 30), ValueKind.STRING, metadata) == "08:30:00"


def test_temporal_rejects_unknown_routes(metadata):
    converter = TemporalConverter()

    assert not converter.can_convert(time(8), 1, metadata, ValueKind.TIMESTAMP)
    assert not converter.can_convert("2024-05-01", 1, metadata, ValueKind.DATE)
    with pytest.raises(ConversionError):
        _convert(converter, time(8), ValueKind.DATE, metadata)


# =========================================
# CompositeConverter
# =========================================

def test_composite_dispatches_by_source_kind(metadata):
    converter = CompositeConverter.standard()

    assert _convert(converter, "12", ValueKind.INTEGER, metadata) == 12
    assert _convert(converter, 12, ValueKind.STRING, metadata) == "12"
    assert _convert(converter, date(2024, 1, 2), ValueKind.STRING, metadata) == "2024-01-02"


def test_composite_without_route_refuses(metadata):
    converter = CompositeConverter.standard()

    assert not converter.can_convert(b"12", 1, metadata, ValueKind.INTEGER)
    assert not converter.can_convert(None, 1, metadata, ValueKind.INTEGER)
    with pytest.raises(ConversionError):
        _convert(converter, b"12", ValueKind.INTEGER, metadata)


def test_composite_first_accepting_converter_wins(metadata):
    primary = TextConverter()
    fallback = TextConverter("latin-1")
    converter = CompositeConverter().register(ValueKind.STRING, primary).register(ValueKind.STRING, fallback)

    assert converter.converters_for(ValueKind.STRING) == [primary, fallback]
    assert _convert(converter, "é", ValueKind.BINARY, metadata) == b"\xc3\xa9"
    assert converter.converters_for(ValueKind.DATE) == []


# =========================================
# Factory
# =========================================

def test_factory_defaults_to_pass_through():
    settings = Settings(on_demand_conversion="none")

    assert get_conversion_mode(settings) == OnDemandConversion.NONE
    assert isinstance(create_on_demand_converter(settings), PassThroughConverter)


def test_factory_standard_mode():
    settings = Settings(on_demand_conversion="standard")

    converter = create_on_demand_converter(settings)
    assert isinstance(converter, CompositeConverter)
    assert converter.converters_for(ValueKind.STRING)
    # Each call builds a fresh converter
    assert create_on_demand_converter(settings) is not converter


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

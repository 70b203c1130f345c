"""
On-demand conversion layer.

Converters answer "can this value be presented as kind X" and perform
the conversion when asked. They are consulted by the cache only after
the stored values have failed to match the requested kind.

Available converters:
- PassThroughConverter (default, never converts)
- NumericConverter, TextConverter, TemporalConverter
- CompositeConverter (dispatch by source kind)
"""

from tabular.conversion.base import Converter
from tabular.conversion.composite import CompositeConverter
from tabular.conversion.factory import (
    OnDemandConversion,
    create_on_demand_converter,
    get_conversion_mode,
)
from tabular.conversion.numeric import NumericConverter
from tabular.conversion.passthrough import PassThroughConverter
from tabular.conversion.temporal import TemporalConverter
from tabular.conversion.text import TextConverter

__all__ = [
    # Abstract interface
    "Converter",
    # Implementations
    "CompositeConverter",
    "NumericConverter",
    "PassThroughConverter",
    "TemporalConverter",
    "TextConverter",
    # Factory functions
    "OnDemandConversion",
    "create_on_demand_converter",
    "get_conversion_mode",
]

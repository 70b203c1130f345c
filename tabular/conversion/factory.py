"""
Factory for the on-demand converter a cache uses by default.

The choice comes from Settings and is handed to the cache constructor;
nothing here is stored globally.
"""

from enum import Enum
from typing import TYPE_CHECKING

from core.logging import get_logger
from tabular.conversion.base import Converter
from tabular.conversion.composite import CompositeConverter
from tabular.conversion.passthrough import PassThroughConverter


if TYPE_CHECKING:
    from core.config import Settings


logger = get_logger(__name__)


class OnDemandConversion(str, Enum):
    """Supported on-demand conversion modes."""
    NONE = "none"
    STANDARD = "standard"


def get_conversion_mode(settings: "Settings") -> OnDemandConversion:
    """
    Determine which on-demand conversion mode the settings ask for.

    Args:
        settings: Application settings

    Returns:
        The configured conversion mode
    """
    mode = settings.on_demand_conversion.lower()

    try:
        return OnDemandConversion(mode)
    except ValueError:
        raise ValueError(
            f"Unsupported on-demand conversion: {mode}. "
            f"Supported modes: {[m.value for m in OnDemandConversion]}"
        )


def create_on_demand_converter(settings: "Settings") -> Converter:
    """
    Create the on-demand converter selected by settings.

    Args:
        settings: Application settings

    Returns:
        A new converter instance
    """
    mode = get_conversion_mode(settings)

    if mode == OnDemandConversion.STANDARD:
        logger.debug("Creating standard on-demand converter")
        return CompositeConverter.standard()

    logger.debug("Creating pass-through on-demand converter")
    return PassThroughConverter()

"""
A single row/column intersection.
"""

from dataclasses import dataclass
from typing import Any


@dataclass
class Cell:
    """
    Original and mapped value for one cell.

    original is the value the source produced and is never touched again.
    mapped starts equal to original and is rewritten only by a bulk remap.
    None in either field is the absent domain value.
    """
    original: Any
    mapped: Any

    @classmethod
    def load(cls, value: Any) -> "Cell":
        """Create a freshly loaded cell where both forms are the source value."""
        return cls(original=value, mapped=value)

"""
Row ordering for multi-key sorts.

RowComparator compares two rows on their mapped values, key by key.
The first key that gives a non-zero result decides. A key where either
value is None, or whose column index is out of range, never decides.
Descending order swaps the two rows before comparing instead of
negating the result, so None handling is identical in both directions.
"""

from typing import Any, Callable, Optional, Sequence

from tabular.cell import Cell


Comparator = Callable[[Any, Any], int]


def natural_compare(left: Any, right: Any) -> int:
    """
    Three-way comparison using the values' own ordering.

    Raises:
        TypeError: If the values do not support ordering against each other
    """
    if left < right:
        return -1
    if right < left:
        return 1
    return 0


class RowComparator:
    """
    cmp-style comparator over rows of Cells.

    Args:
        column_indices: 1-based keys, most significant first
        comparators: Optional comparators aligned with column_indices.
            A None entry means natural ordering for that key. A sequence
            shorter than column_indices raises IndexError when the
            missing position is first reached.
        descending: Swap the compared rows
        column_count: Number of columns in the rows
    """

    def __init__(
        self,
        column_indices: Sequence[int],
        comparators: Optional[Sequence[Optional[Comparator]]],
        descending: bool,
        column_count: int,
    ):
        self.column_indices = tuple(column_indices)
        self.comparators = comparators
        self.descending = descending
        self.column_count = column_count

    def __call__(self, first: Sequence[Cell], second: Sequence[Cell]) -> int:
        if self.descending:
            first, second = second, first

        for position, column_index in enumerate(self.column_indices):
            comparator = None
            if self.comparators is not None:
                comparator = self.comparators[position]

            if not 1 <= column_index <= self.column_count:
                continue

            left = first[column_index - 1].mapped
            right = second[column_index - 1].mapped
            if left is None or right is None:
                continue

            result = (comparator or natural_compare)(left, right)
            if result != 0:
                return result

        return 0

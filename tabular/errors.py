"""
Exceptions raised by the tabular cache.

Cursor misuse, failed type resolution and failed bulk mapping are kept
as distinct types so callers can tell "wrong position" apart from
"wrong type" apart from "bad converter".
"""


class TabularCacheError(Exception):
    """Base exception for tabular cache operations."""
    pass


class InvalidCursorStateError(TabularCacheError):
    """A row accessor was called while the cursor is not on a row."""

    def __init__(self, row: int, record_count: int):
        super().__init__(
            f"Cursor position {row} is invalid (valid rows are 1..{record_count})"
        )
        self.row = row
        self.record_count = record_count


class TypeConversionError(TabularCacheError):
    """No resolution step produced a value of the desired kind."""
    pass


class ConversionError(TabularCacheError):
    """A converter was asked for a conversion it cannot perform."""
    pass


class MappingError(TabularCacheError):
    """A bulk remap failed. Cells converted before the failure keep their new values."""

    def __init__(self, message: str, column_index: int, row: int):
        super().__init__(message)
        self.column_index = column_index
        self.row = row


class InvalidArgumentError(TabularCacheError, ValueError):
    """An argument was None or otherwise unusable."""
    pass


class SourceError(TabularCacheError):
    """A data source could not be materialized into rows."""
    pass

"""
Data sources a TabularCache can be loaded from.

Supported sources:
- InMemorySource (Python sequences)
- SQLAlchemyResultSource (an executed SQLAlchemy Result)
"""

from tabular.sources.base import TabularSource
from tabular.sources.memory import InMemorySource, build_columns
from tabular.sources.sql import SQLAlchemyResultSource

__all__ = [
    "TabularSource",
    "InMemorySource",
    "SQLAlchemyResultSource",
    "build_columns",
]

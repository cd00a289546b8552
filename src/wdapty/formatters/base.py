"""Base formatter interface for query result rendering."""

from abc import ABC, abstractmethod

import polars as pl


class BaseFormatter(ABC):
    """Abstract base class for output formatters."""

    @abstractmethod
    def render(self, df: pl.DataFrame) -> None:
        """Write the collected table to its destination."""

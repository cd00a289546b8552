"""Output formatters for query results."""

from typing import Optional

from rich.console import Console

from .base import BaseFormatter
from .csv_formatter import CsvFormatter
from .rich_formatter import RichFormatter

__all__ = ["BaseFormatter", "CsvFormatter", "RichFormatter", "get_formatter"]


def get_formatter(output_file: Optional[str] = None, console: Optional[Console] = None) -> BaseFormatter:
    """CSV when an output file is given, otherwise a console table."""
    if output_file:
        return CsvFormatter(output_file)
    return RichFormatter(console)

"""Rich formatter: prints the result table to the terminal."""

from typing import Optional

import polars as pl
from rich.console import Console
from rich.table import Table

from .base import BaseFormatter


class RichFormatter(BaseFormatter):
    """Render the table with rich, one column per DataFrame column."""

    def __init__(self, console: Optional[Console] = None, max_rows: Optional[int] = None) -> None:
        self.console = console or Console()
        self.max_rows = max_rows

    def build_table(self, df: pl.DataFrame) -> Table:
        table = Table(show_lines=False, pad_edge=True)
        for name, dtype in df.schema.items():
            justify = "right" if dtype.is_numeric() else "left"
            table.add_column(name, justify=justify, style="cyan" if justify == "left" else None)

        rows = df if self.max_rows is None else df.head(self.max_rows)
        for row in rows.iter_rows():
            table.add_row(*("" if value is None else str(value) for value in row))

        table.caption = f"{df.height} rows x {df.width} columns"
        return table

    def render(self, df: pl.DataFrame) -> None:
        self.console.print()
        self.console.print(self.build_table(df))
        self.console.print()

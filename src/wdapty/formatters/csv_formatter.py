"""CSV formatter: writes the result table to a file."""

import logging
from pathlib import Path

import polars as pl

from ..config import expand_path
from ..exceptions import OutputWriteError
from .base import BaseFormatter

logger = logging.getLogger(__name__)


class CsvFormatter(BaseFormatter):
    """Render the table as CSV at ``output_file``.

    The parent directory must already exist.
    """

    def __init__(self, output_file: str) -> None:
        self.output_file = output_file

    @property
    def path(self) -> Path:
        return expand_path(self.output_file)

    def render(self, df: pl.DataFrame) -> None:
        try:
            df.write_csv(self.path)
        except (OSError, pl.exceptions.PolarsError) as e:
            raise OutputWriteError(self.output_file, str(e)) from e
        logger.info("Wrote %d rows to %s", df.height, self.path)

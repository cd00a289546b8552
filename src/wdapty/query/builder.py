"""Query construction and execution over a lazily scanned table.

A query is planned first (index arguments checked, source path resolved,
projection and filter built) and then executed stage by stage::

    IDLE -> SCANNING -> FILTERING (only with an index) -> PROJECTING
         -> COLLECTING -> DONE

Any error moves the builder to FAILED and aborts the remaining stages, so a
partial table is never handed to the formatter.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterator, List, Mapping, Optional

import polars as pl

from ..credentials import resolve_credentials
from ..exceptions import (
    IndexValueError,
    InvalidExecutionTypeError,
    MissingIndexArgumentError,
    QueryExecutionError,
    SourceNotFoundError,
    WdaptyError,
)
from ..formatters.base import BaseFormatter
from ..patterns import PatternStore, TemplateExpander, resolve_source_path
from .datetime_parser import parse_datetime
from .source import (
    PROFILE_HINT,
    SCANNERS,
    CloudSource,
    Source,
    resolve_source,
    scan_source,
)

logger = logging.getLogger(__name__)


class QueryStage(Enum):
    IDLE = "idle"
    SCANNING = "scanning"
    FILTERING = "filtering"
    PROJECTING = "projecting"
    COLLECTING = "collecting"
    DONE = "done"
    FAILED = "failed"


@dataclass
class QuerySpec:
    """Everything needed to run one query.

    Exactly one of ``source_path`` / ``pattern`` is normally set; when both
    are, the pattern wins. ``index_name`` and ``index_value`` go together.
    """

    source_path: Optional[str] = None
    pattern: Optional[str] = None
    index_name: Optional[str] = None
    index_value: Optional[str] = None
    columns: Optional[List[str]] = None
    profile: Optional[str] = None
    execution_type: str = "parq"
    provider: str = "aws"


class QueryBuilder:
    """Builds and runs a query described by a QuerySpec.

    Parameters
    ----------
    spec:
        The query to run.
    store, expander:
        Used only when ``spec.pattern`` is set.
    env, credentials_path:
        Credential sources for cloud paths; default to the process
        environment and ``~/.aws/credentials``.
    formatter:
        Receives the collected table.
    """

    def __init__(
        self,
        spec: QuerySpec,
        store: Optional[PatternStore] = None,
        expander: Optional[TemplateExpander] = None,
        env: Optional[Mapping[str, str]] = None,
        credentials_path: Optional[Path] = None,
        formatter: Optional[BaseFormatter] = None,
    ) -> None:
        self.spec = spec
        self.store = store
        self.expander = expander
        self.env = env
        self.credentials_path = credentials_path
        self.formatter = formatter
        self.stage = QueryStage.IDLE
        self.source: Optional[Source] = None

    # ── planning ─────────────────────────────────────────────────────

    @staticmethod
    def select_projection(requested: Optional[List[str]] = None) -> List[pl.Expr]:
        """Column expressions to keep: the requested ones (de-duplicated,
        order preserved) or every column."""
        if not requested:
            return [pl.all()]
        return [pl.col(name) for name in dict.fromkeys(requested)]

    @staticmethod
    def build_index_filter(index_name: str, index_value: str) -> pl.Expr:
        """Equality predicate ``column[index_name] == parsed datetime``."""
        try:
            parts = parse_datetime(index_value)
        except WdaptyError as e:
            raise IndexValueError(index_value) from e
        return pl.col(index_name) == parts.to_expr()

    def _validate_index(self) -> None:
        if (self.spec.index_name is None) != (self.spec.index_value is None):
            raise MissingIndexArgumentError()

    def _validate_execution_type(self) -> None:
        if self.spec.execution_type not in SCANNERS:
            raise InvalidExecutionTypeError(self.spec.execution_type, sorted(SCANNERS))

    def _resolve_path(self) -> str:
        store = self.store or PatternStore()
        expander = self.expander or TemplateExpander()
        return resolve_source_path(self.spec.pattern, self.spec.source_path, store, expander)

    # ── execution ────────────────────────────────────────────────────

    @contextmanager
    def _stage(self, stage: QueryStage) -> Iterator[None]:
        self.stage = stage
        logger.debug("Query stage: %s", stage.value)
        try:
            yield
        except WdaptyError as e:
            e.add_detail("stage", stage.value)
            self.stage = QueryStage.FAILED
            raise
        except pl.exceptions.PolarsError as e:
            self.stage = QueryStage.FAILED
            raise QueryExecutionError(
                "Query failed", details={"reason": _first_line(e), "stage": stage.value}
            ) from e

    def scan(self, source_path: str, profile: Optional[str] = None) -> pl.LazyFrame:
        """Open ``source_path`` lazily, resolving credentials for cloud paths."""
        self.source = resolve_source(
            source_path,
            lambda: resolve_credentials(
                self.spec.provider,
                profile=profile,
                credentials_path=self.credentials_path,
                env=self.env,
            ),
        )
        logger.info("Scanning %s", self.source)
        return scan_source(self.source, self.spec.execution_type)

    def _collect(self, lf: pl.LazyFrame) -> pl.DataFrame:
        try:
            return lf.collect()
        except pl.exceptions.ColumnNotFoundError as e:
            raise QueryExecutionError(
                "Column not found", details={"reason": _first_line(e)}
            ) from e
        except OSError as e:
            hint = PROFILE_HINT if isinstance(self.source, CloudSource) else None
            raise SourceNotFoundError(str(self.source), hint=hint) from e

    def run(self) -> pl.DataFrame:
        """Plan and execute the query, then hand the table to the formatter.

        Raises:
            MissingIndexArgumentError: If only one index argument is given
            IndexValueError: If the index value is not a valid datetime
            InvalidExecutionTypeError: If no scanner handles the execution type
            SourceNotFoundError: If the source cannot be opened
            QueryExecutionError: If the engine rejects the query
        """
        spec = self.spec
        try:
            self._validate_index()
            self._validate_execution_type()
            projection = self.select_projection(spec.columns)
            index_filter = None
            if spec.index_name is not None and spec.index_value is not None:
                index_filter = self.build_index_filter(spec.index_name, spec.index_value)
            source_path = self._resolve_path()
        except WdaptyError:
            self.stage = QueryStage.FAILED
            raise

        with self._stage(QueryStage.SCANNING):
            lf = self.scan(source_path, spec.profile)

        if index_filter is not None:
            with self._stage(QueryStage.FILTERING):
                lf = lf.filter(index_filter)

        with self._stage(QueryStage.PROJECTING):
            lf = lf.select(projection)

        with self._stage(QueryStage.COLLECTING):
            df = self._collect(lf)

        self.stage = QueryStage.DONE
        logger.info("Collected %d rows x %d columns", df.height, df.width)

        if self.formatter is not None:
            self.formatter.render(df)
        return df


def _first_line(error: Exception) -> str:
    text = str(error).strip()
    return text.splitlines()[0] if text else type(error).__name__

"""Query construction: datetime literals, scan targets, and the builder."""

from .builder import QueryBuilder, QuerySpec, QueryStage
from .datetime_parser import DateParts, parse_datetime
from .source import CloudSource, LocalSource, resolve_source, scan_source

__all__ = [
    "QueryBuilder",
    "QuerySpec",
    "QueryStage",
    "DateParts",
    "parse_datetime",
    "LocalSource",
    "CloudSource",
    "resolve_source",
    "scan_source",
]

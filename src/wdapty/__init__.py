"""
wdapty - query tabular files through named path patterns.

Resolves a file path from a saved pattern, reads AWS credentials for S3
sources, and downloads or searches the file with a lazy polars scan.
"""

__version__ = "0.1.0"

from .credentials import CredentialSet, resolve_credentials
from .patterns import PatternStore, TemplateExpander
from .query import DateParts, QueryBuilder, QuerySpec, parse_datetime

__all__ = [
    "QueryBuilder",  # Main entry point
    "QuerySpec",
    "PatternStore",
    "TemplateExpander",
    "CredentialSet",
    "resolve_credentials",
    "DateParts",
    "parse_datetime",
]

"""Exception hierarchy for wdapty."""

from .base import WdaptyError
from .config import (
    AlreadyExistsError,
    ConfigIOError,
    ConfigurationError,
    FailedToParseError,
    FormatError,
    MissingSourceError,
    PatternNotFoundError,
)
from .credentials import (
    CredentialsError,
    MissingCredentialsError,
    UnsupportedProviderError,
)
from .query import (
    IndexValueError,
    InvalidExecutionTypeError,
    MissingIndexArgumentError,
    OutputWriteError,
    QueryError,
    QueryExecutionError,
    SourceNotFoundError,
)

__all__ = [
    "WdaptyError",
    "ConfigurationError",
    "ConfigIOError",
    "FormatError",
    "FailedToParseError",
    "AlreadyExistsError",
    "PatternNotFoundError",
    "MissingSourceError",
    "CredentialsError",
    "MissingCredentialsError",
    "UnsupportedProviderError",
    "QueryError",
    "MissingIndexArgumentError",
    "IndexValueError",
    "SourceNotFoundError",
    "InvalidExecutionTypeError",
    "QueryExecutionError",
    "OutputWriteError",
]

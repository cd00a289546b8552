"""Query pipeline exceptions: index arguments, scanning, collecting, output."""

from typing import List, Optional

from .base import WdaptyError


class QueryError(WdaptyError):
    """Base class for errors raised while building or running a query."""

    pass


class MissingIndexArgumentError(QueryError):
    """Raised when only one of index name / index value is supplied."""

    def __init__(self):
        super().__init__("Search failed. Either index-name or index-value is missing")


class IndexValueError(QueryError):
    """Raised when the index value cannot be turned into a filter."""

    def __init__(self, index_value: str):
        super().__init__("Failed to format index-value", details={"value": index_value})
        self.index_value = index_value


class SourceNotFoundError(QueryError):
    """Raised when the scan target cannot be opened."""

    def __init__(self, source: str, hint: Optional[str] = None):
        details = {"source": source}
        if hint:
            details["hint"] = hint
        super().__init__("File does not exist", details=details)
        self.source = source
        self.hint = hint


class InvalidExecutionTypeError(QueryError):
    """Raised for an execution type with no registered scanner."""

    def __init__(self, execution_type: str, supported: List[str]):
        super().__init__(
            "Invalid Execution type",
            details={"execution_type": execution_type, "supported": ", ".join(supported)},
        )
        self.execution_type = execution_type


class QueryExecutionError(QueryError):
    """Raised when the query engine rejects the query while collecting."""

    pass


class OutputWriteError(WdaptyError):
    """Raised when the result table cannot be written."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Failed to create file {path}", details={"reason": reason})
        self.path = path
        self.reason = reason

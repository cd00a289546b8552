"""Configuration exceptions: store files, pattern grammar, path resolution."""

from pathlib import Path
from typing import Optional

from .base import WdaptyError


class ConfigurationError(WdaptyError):
    """Base class for configuration-related errors."""

    pass


class ConfigIOError(ConfigurationError):
    """Raised when a store or credentials file cannot be created, read or written."""

    def __init__(self, path: Path, action: str, reason: str):
        super().__init__(
            f"Failed to {action} {path}",
            details={"reason": reason},
        )
        self.path = path
        self.action = action
        self.reason = reason


class FormatError(ConfigurationError):
    """Raised when a value does not follow its expected grammar."""

    pass


class FailedToParseError(FormatError):
    """Raised when a single datetime field is not a valid integer."""

    def __init__(self, field: str, token: str):
        super().__init__(f"Failed to parse {field}", details={"value": token})
        self.field = field
        self.token = token


class AlreadyExistsError(ConfigurationError):
    """Raised when adding a pattern whose name is already registered."""

    def __init__(self, name: str):
        super().__init__(f"Pattern {name} already exists")
        self.name = name


class PatternNotFoundError(ConfigurationError):
    """Raised when a pattern name is not registered in the store."""

    def __init__(self, name: str, store_path: Optional[Path] = None):
        details = {"store": str(store_path)} if store_path else None
        super().__init__(f"Pattern {name} not found", details=details)
        self.name = name


class MissingSourceError(ConfigurationError):
    """Raised when neither a pattern nor a file name identifies the source."""

    def __init__(self):
        super().__init__(
            "file name should be valued by option or by setting pattern and reading file"
        )

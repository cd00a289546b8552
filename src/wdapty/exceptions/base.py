"""Base exception for wdapty."""

from typing import Dict, Optional


class WdaptyError(Exception):
    """Base exception for all wdapty errors.

    ``details`` is rendered after the message as ``(key=value, ...)``, which
    is what the CLI prints on stderr.
    """

    def __init__(self, message: str, details: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.details = dict(details or {})

    def add_detail(self, key: str, value: str) -> "WdaptyError":
        """Record ``key`` unless it is already set; returns self."""
        self.details.setdefault(key, value)
        return self

    def __str__(self) -> str:
        if not self.details:
            return self.message
        rendered = ", ".join(f"{k}={v}" for k, v in self.details.items())
        return f"{self.message} ({rendered})"

"""Named path patterns: storage and placeholder expansion."""

from .store import PatternStore, is_valid_entry
from .template import (
    ChainPrompter,
    ConsolePrompter,
    StaticPrompter,
    TemplateExpander,
    resolve_source_path,
)

__all__ = [
    "PatternStore",
    "is_valid_entry",
    "TemplateExpander",
    "ConsolePrompter",
    "StaticPrompter",
    "ChainPrompter",
    "resolve_source_path",
]

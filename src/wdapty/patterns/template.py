"""Placeholder extraction and substitution for path patterns.

A pattern such as ``s3://bucket/{env}/{date}/{env}.parq`` references the
placeholders ``env`` and ``date``. Each distinct placeholder is asked for once
through a prompter and every occurrence is replaced with the trimmed answer.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Callable, Dict, List, Mapping, Optional

from rich.prompt import Prompt

from ..exceptions import FormatError, MissingSourceError
from .store import PatternStore

logger = logging.getLogger(__name__)

PLACEHOLDER = re.compile(r"\{([^{}]+)\}")

# ask(name) -> value
Prompter = Callable[[str], str]


class ConsolePrompter:
    """Blocks on the terminal until the user types a value."""

    def __init__(self, console=None) -> None:
        self.console = console

    def __call__(self, name: str) -> str:
        return Prompt.ask(f"Please type value for {name}", console=self.console)


class StaticPrompter:
    """Answers from pre-bound values; never touches the terminal."""

    def __init__(self, values: Mapping[str, str]) -> None:
        self.values = dict(values)

    def __call__(self, name: str) -> str:
        if name not in self.values:
            raise FormatError(f"No value bound for placeholder {name}")
        return self.values[name]


class ChainPrompter:
    """Uses pre-bound values first and falls back to another prompter."""

    def __init__(self, values: Mapping[str, str], fallback: Prompter) -> None:
        self.values = dict(values)
        self.fallback = fallback

    def __call__(self, name: str) -> str:
        if name in self.values:
            return self.values[name]
        return self.fallback(name)


class TemplateExpander:
    """Turns a pattern into a concrete path by asking for its placeholders."""

    def __init__(self, prompter: Optional[Prompter] = None) -> None:
        self.prompter = prompter or ConsolePrompter()

    @staticmethod
    def extract_placeholders(template: str) -> List[str]:
        """Placeholder names in textual order, duplicates included."""
        return PLACEHOLDER.findall(template)

    def ask_values(self, template: str) -> Dict[str, str]:
        """Ask once per distinct placeholder, in first-occurrence order."""
        values: Dict[str, str] = {}
        for name in self.extract_placeholders(template):
            if name in values:
                continue
            values[name] = self.prompter(name).strip()
        return values

    @staticmethod
    def substitute(template: str, values: Mapping[str, str]) -> str:
        """Replace every ``{name}`` in one pass; answers are not re-expanded."""
        return PLACEHOLDER.sub(lambda m: values.get(m.group(1), m.group(0)), template)

    def resolve(self, template: str) -> str:
        values = self.ask_values(template)
        resolved = self.substitute(template, values)
        logger.debug("Expanded pattern %s into %s", template, resolved)
        return resolved


def resolve_source_path(
    pattern: Optional[str],
    file_name: Optional[str | Path],
    store: PatternStore,
    expander: TemplateExpander,
) -> str:
    """Pick the path to scan: a named pattern wins over an explicit file name.

    Raises:
        PatternNotFoundError: If ``pattern`` is not registered
        MissingSourceError: If neither argument is given
    """
    if pattern:
        return expander.resolve(store.get(pattern))
    if file_name:
        return str(file_name)
    raise MissingSourceError()

"""Named path patterns kept in a flat ``name=value`` text file.

The store is read and rewritten in full on every call; there is no locking,
so concurrent writers from separate processes may race.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from ..config import DEFAULT_PATTERN_STORE, expand_path
from ..exceptions import AlreadyExistsError, ConfigIOError, FormatError, PatternNotFoundError

logger = logging.getLogger(__name__)

PATTERN_FORMAT = re.compile(r"[A-Za-z0-9_\-.]+=[^\s\n]+")


def is_valid_entry(line: str) -> bool:
    """Return True if ``line`` is a well-formed ``name=value`` entry."""
    return PATTERN_FORMAT.fullmatch(line) is not None


class PatternStore:
    """Registry of named patterns backed by a text file.

    Usage::

        store = PatternStore()
        store.add("daily", "s3://bucket/{date}/data.parq")
        store.list()  # {"daily": "s3://bucket/{date}/data.parq"}
    """

    def __init__(self, path: Optional[Path] = None) -> None:
        self.path = expand_path(path or DEFAULT_PATTERN_STORE)

    def _read_lines(self) -> List[str]:
        if not self.path.exists():
            logger.debug("Pattern store %s does not exist yet", self.path)
            return []
        try:
            return self.path.read_text(encoding="utf-8").splitlines()
        except OSError as e:
            raise ConfigIOError(self.path, "read pattern store", str(e)) from e

    def ensure_exists(self) -> Path:
        """Create the store file and its parent directory if needed."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.touch(exist_ok=True)
        except OSError as e:
            raise ConfigIOError(self.path, "create pattern store", str(e)) from e
        return self.path

    def list(self) -> Dict[str, str]:
        """Return every well-formed entry, in file order.

        Malformed lines are skipped without error.
        """
        patterns: Dict[str, str] = {}
        for line in self._read_lines():
            if not is_valid_entry(line):
                continue
            name, value = line.split("=", 1)
            patterns[name] = value
        return patterns

    def get(self, name: str) -> str:
        patterns = self.list()
        if name not in patterns:
            raise PatternNotFoundError(name, self.path)
        return patterns[name]

    def add(self, name: str, value: str) -> None:
        """Append ``name=value`` to the store.

        Raises:
            AlreadyExistsError: If ``name`` is already registered
            FormatError: If the entry does not match the pattern grammar
        """
        if name in self.list():
            raise AlreadyExistsError(name)

        entry = f"{name}={value}"
        if not is_valid_entry(entry):
            raise FormatError(
                f"Pattern {entry} is not compliant with pattern_format name=value"
            )

        self.ensure_exists()
        try:
            existing = self.path.read_text(encoding="utf-8")
            prefix = "\n" if existing and not existing.endswith("\n") else ""
            with open(self.path, "a", encoding="utf-8") as f:
                f.write(f"{prefix}{entry}\n")
        except OSError as e:
            raise ConfigIOError(self.path, "save pattern", str(e)) from e

        logger.info("Saved pattern %s to %s", name, self.path)

    def add_entry(self, line: str) -> None:
        """Add a raw ``name=value`` line, as typed by the user."""
        line = line.strip()
        if "=" not in line:
            raise FormatError(f"Pattern {line} is not compliant with pattern_format name=value")
        name, value = line.split("=", 1)
        self.add(name, value)

    def remove(self, name: str) -> None:
        """Drop every line registering ``name``. No error if it is absent."""
        lines = self._read_lines()
        prefix = f"{name}="
        kept = [line for line in lines if not line.startswith(prefix)]
        if len(kept) == len(lines):
            logger.debug("Pattern %s not present in %s", name, self.path)
            return

        try:
            self.path.write_text("".join(f"{line}\n" for line in kept), encoding="utf-8")
        except OSError as e:
            raise ConfigIOError(self.path, "rewrite pattern store", str(e)) from e

        logger.info("Removed pattern %s from %s", name, self.path)

    def initialize(self, entries: Iterable[str]) -> Path:
        """Create the store and add each raw entry in turn."""
        self.ensure_exists()
        for entry in entries:
            self.add_entry(entry)
        return self.path

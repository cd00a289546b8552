"""Scan targets: a local file or an object in cloud storage.

The path is classified once, into ``LocalSource`` or ``CloudSource``, and
everything downstream dispatches on that type.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Optional, Union

import polars as pl

from ..config import SUPPORTED_EXECUTION_TYPES, expand_path
from ..credentials import CredentialSet
from ..exceptions import InvalidExecutionTypeError, SourceNotFoundError
from ..logging_config import get_logger

logger = get_logger(__name__)

CLOUD_PREFIXES = ("s3://", "s3a://")

PROFILE_HINT = "the file may need credentials from another profile, pass --profile"


@dataclass(frozen=True)
class LocalSource:
    path: Path

    def __str__(self) -> str:
        return str(self.path)


@dataclass(frozen=True)
class CloudSource:
    bucket: str
    key: str
    credentials: CredentialSet
    scheme: str = "s3://"

    @property
    def url(self) -> str:
        return f"{self.scheme}{self.bucket}/{self.key}"

    def __str__(self) -> str:
        return self.url


Source = Union[LocalSource, CloudSource]


def cloud_prefix(path: str) -> Optional[str]:
    """Return the cloud scheme ``path`` starts with, if any."""
    for prefix in CLOUD_PREFIXES:
        if path.startswith(prefix):
            return prefix
    return None


def resolve_source(
    path: str,
    credentials_for: Callable[[], CredentialSet],
) -> Source:
    """Classify ``path``; credentials are only resolved for cloud paths."""
    prefix = cloud_prefix(path)
    if prefix is None:
        return LocalSource(expand_path(path))

    bucket, _, key = path[len(prefix):].partition("/")
    if not bucket or not key:
        raise SourceNotFoundError(path, hint="expected <scheme>://<bucket>/<key>")
    return CloudSource(bucket=bucket, key=key, credentials=credentials_for(), scheme=prefix)


def _scan_parquet(source: Source) -> pl.LazyFrame:
    if isinstance(source, CloudSource):
        return pl.scan_parquet(source.url, storage_options=source.credentials.storage_options())
    return pl.scan_parquet(source.path)


SCANNERS: Dict[str, Callable[[Source], pl.LazyFrame]] = {
    "parq": _scan_parquet,
}


def scan_source(source: Source, execution_type: str = "parq") -> pl.LazyFrame:
    """Open ``source`` lazily with the scanner registered for ``execution_type``.

    Raises:
        InvalidExecutionTypeError: If no scanner handles ``execution_type``
        SourceNotFoundError: If the source cannot be opened
    """
    scanner = SCANNERS.get(execution_type)
    if scanner is None:
        raise InvalidExecutionTypeError(execution_type, list(SUPPORTED_EXECUTION_TYPES))

    if isinstance(source, LocalSource):
        if not source.path.is_file():
            raise SourceNotFoundError(str(source.path))
        try:
            return scanner(source)
        except (OSError, pl.exceptions.PolarsError) as e:
            raise SourceNotFoundError(str(source.path)) from e

    try:
        return scanner(source)
    except (OSError, pl.exceptions.PolarsError) as e:
        raise SourceNotFoundError(source.url, hint=PROFILE_HINT) from e

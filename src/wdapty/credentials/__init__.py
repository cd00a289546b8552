"""Credential resolution for cloud-hosted sources."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping, Optional

from ..config import DEFAULT_CREDENTIALS_FILE, SUPPORTED_PROVIDERS, expand_path
from ..exceptions import UnsupportedProviderError
from .aws import AwsCredentialProvider, CredentialSet

__all__ = ["CredentialSet", "resolve_credentials"]


def resolve_credentials(
    provider: str,
    profile: Optional[str] = None,
    credentials_path: Optional[Path] = None,
    env: Optional[Mapping[str, str]] = None,
) -> CredentialSet:
    """Resolve a complete credential set for ``provider``.

    Args:
        provider: Credentials vendor; only ``"aws"`` is supported
        profile: Section of the credentials file (default ``"default"``)
        credentials_path: Credentials file (default ``~/.aws/credentials``)
        env: Environment mapping overriding file values (default ``os.environ``)

    Raises:
        UnsupportedProviderError: For any provider other than ``"aws"``
        ConfigIOError: If the credentials file cannot be read
        MissingCredentialsError: If a required key is missing after merging
    """
    if provider != "aws":
        raise UnsupportedProviderError(provider, list(SUPPORTED_PROVIDERS))

    return AwsCredentialProvider(
        profile=profile or "default",
        credentials_path=expand_path(credentials_path or DEFAULT_CREDENTIALS_FILE),
        env=os.environ if env is None else env,
    ).resolve()

"""Credential resolution exceptions."""

from typing import List

from .base import WdaptyError


class CredentialsError(WdaptyError):
    """Base class for credential resolution errors."""

    pass


class MissingCredentialsError(CredentialsError):
    """Raised when file and environment together do not supply every key."""

    def __init__(self, provider: str, profile: str, missing: List[str]):
        super().__init__(
            f"Missing {provider} credentials",
            details={"profile": profile, "missing": ", ".join(missing)},
        )
        self.provider = provider
        self.profile = profile
        self.missing = missing


class UnsupportedProviderError(CredentialsError):
    """Raised for a credential provider other than the supported one."""

    def __init__(self, provider: str, supported: List[str]):
        super().__init__(
            f"Unsupported credentials provider: {provider}",
            details={"supported": ", ".join(supported)},
        )
        self.provider = provider

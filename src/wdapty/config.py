"""Configuration loading for wdapty.

Configuration sources are merged in priority order (lowest to highest):
    1. Defaults (defined in Settings)
    2. Explicit TOML config file (``--config``)
    3. Environment variables (WDAPTY_* prefix)
    4. CLI overrides (passed as kwargs)

Example:
    >>> settings = load_config(default_profile="prod")
    >>> settings.default_profile
    'prod'
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Mapping, Optional

from .exceptions import ConfigurationError

DEFAULT_PATTERN_STORE = "~/.wdapty/config.ini"
DEFAULT_CREDENTIALS_FILE = "~/.aws/credentials"
ENV_PREFIX = "WDAPTY_"

SUPPORTED_PROVIDERS = ("aws",)
SUPPORTED_EXECUTION_TYPES = ("parq",)


def expand_path(path: str | Path) -> Path:
    """Expand a leading ``~`` into the user's home directory."""
    return Path(os.path.expanduser(str(path)))


@dataclass(frozen=True)
class Settings:
    """Runtime settings shared by every command.

    Attributes:
        pattern_store_path: Flat ``name=value`` file holding named patterns
        credentials_path: AWS-style credentials file
        provider: Credentials provider used for cloud sources
        default_profile: Profile used when ``--profile`` is not given
        execution_type: Scanner used when ``--execution-type`` is not given
    """

    pattern_store_path: Path = field(default_factory=lambda: expand_path(DEFAULT_PATTERN_STORE))
    credentials_path: Path = field(default_factory=lambda: expand_path(DEFAULT_CREDENTIALS_FILE))
    provider: str = "aws"
    default_profile: str = "default"
    execution_type: str = "parq"

    def __post_init__(self) -> None:
        """Check value types, normalize paths and validate enumerated values."""
        for f in fields(self):
            value = getattr(self, f.name)
            allowed = (str, Path) if f.name.endswith("_path") else (str,)
            if not isinstance(value, allowed):
                raise ConfigurationError(
                    f"Invalid value for {f.name}: expected a string",
                    details={"got": type(value).__name__},
                )

        object.__setattr__(self, "pattern_store_path", expand_path(self.pattern_store_path))
        object.__setattr__(self, "credentials_path", expand_path(self.credentials_path))

        if self.provider not in SUPPORTED_PROVIDERS:
            raise ConfigurationError(
                f"Invalid provider: {self.provider}",
                details={"supported": ", ".join(SUPPORTED_PROVIDERS)},
            )
        if self.execution_type not in SUPPORTED_EXECUTION_TYPES:
            raise ConfigurationError(
                f"Invalid execution type: {self.execution_type}",
                details={"supported": ", ".join(SUPPORTED_EXECUTION_TYPES)},
            )
        if not self.default_profile.strip():
            raise ConfigurationError("default_profile must not be empty")


def load_config(
    config_file: Optional[Path] = None,
    env: Optional[Mapping[str, str]] = None,
    **overrides: Any,
) -> Settings:
    """Load settings, merging file, environment and explicit overrides.

    Args:
        config_file: Optional TOML file with top-level keys named like the
            Settings fields
        env: Environment mapping (defaults to ``os.environ``)
        **overrides: Direct overrides, typically from CLI flags. ``None``
            values are ignored.

    Raises:
        ConfigurationError: If the file is missing or invalid, or a value is
            rejected by Settings validation
    """
    merged: dict[str, Any] = {}

    if config_file is not None:
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        try:
            merged.update(_load_toml_file(config_file))
        except ConfigurationError:
            raise
        except Exception as e:
            raise ConfigurationError(f"Invalid config file '{config_file}': {e}") from e

    merged.update(_load_env_vars(os.environ if env is None else env))
    merged.update({k: v for k, v in overrides.items() if v is not None})

    known = {f.name for f in fields(Settings)}
    unknown = sorted(set(merged) - known)
    if unknown:
        raise ConfigurationError(
            "Invalid configuration", details={"unknown_keys": ", ".join(unknown)}
        )

    return Settings(**merged)


def _load_env_vars(env: Mapping[str, str]) -> dict[str, Any]:
    """Load configuration from WDAPTY_* environment variables.

    Supported environment variables:
        WDAPTY_PATTERN_STORE_PATH
        WDAPTY_CREDENTIALS_PATH
        WDAPTY_PROVIDER
        WDAPTY_DEFAULT_PROFILE
        WDAPTY_EXECUTION_TYPE
    """
    result: dict[str, Any] = {}
    for f in fields(Settings):
        value = env.get(f"{ENV_PREFIX}{f.name.upper()}")
        if value:
            result[f.name] = value
    return result


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict."""
    try:
        import tomllib
    except ModuleNotFoundError:
        try:
            import tomli as tomllib  # type: ignore
        except ImportError:
            raise ConfigurationError(
                "TOML support requires Python 3.11+ or 'tomli' package. "
                "Install with: pip install tomli"
            )

    with open(path, "rb") as f:
        return tomllib.load(f)

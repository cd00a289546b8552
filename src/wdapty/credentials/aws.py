"""AWS credentials from a shared credentials file overlaid by the environment.

The credentials file uses the AWS INI layout::

    [default]
    aws_access_key_id=...
    aws_secret_access_key=...
    aws_session_token=...
    region=...

Values from ``AWS_ACCESS_KEY_ID``, ``AWS_SECRET_ACCESS_KEY``,
``AWS_SESSION_TOKEN`` and ``AWS_REGION`` replace the file values key for key.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, Mapping

from ..exceptions import ConfigIOError, MissingCredentialsError
from ..logging_config import get_logger

logger = get_logger(__name__)

ACCESS_KEY_ID = "aws_access_key_id"
SECRET_ACCESS_KEY = "aws_secret_access_key"
SESSION_TOKEN = "aws_session_token"
REGION = "region"

REQUIRED_KEYS = (ACCESS_KEY_ID, SECRET_ACCESS_KEY, SESSION_TOKEN, REGION)

ENV_KEYS = {
    "AWS_ACCESS_KEY_ID": ACCESS_KEY_ID,
    "AWS_SECRET_ACCESS_KEY": SECRET_ACCESS_KEY,
    "AWS_SESSION_TOKEN": SESSION_TOKEN,
    "AWS_REGION": REGION,
}

_SECTION_HEADER = re.compile(r"^\[.*\]$")


@dataclass(frozen=True)
class CredentialSet:
    """A complete set of AWS credentials. Never partially populated."""

    access_key_id: str
    secret_access_key: str
    session_token: str
    region: str

    def storage_options(self) -> Dict[str, str]:
        """Object-store options understood by polars cloud scans."""
        return {
            "aws_access_key_id": self.access_key_id,
            "aws_secret_access_key": self.secret_access_key,
            "aws_session_token": self.session_token,
            "aws_region": self.region,
        }

    def __repr__(self) -> str:
        return (
            f"CredentialSet(access_key_id={self.access_key_id!r}, "
            f"secret_access_key='***', session_token='***', region={self.region!r})"
        )


def parse_profile_section(lines: Iterable[str], profile: str) -> Dict[str, str]:
    """Collect ``key=value`` pairs that belong to ``[profile]``.

    A line equal to ``[profile]`` opens the section; any other bracketed
    header closes it. Lines without ``=`` and comment lines are ignored.
    """
    header = f"[{profile}]"
    inside = False
    values: Dict[str, str] = {}

    for raw in lines:
        line = raw.strip()
        if line == header:
            inside = True
            continue
        if _SECTION_HEADER.match(line):
            inside = False
            continue
        if not inside or not line or line[0] in "#;":
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        values[key.strip()] = value.strip()

    return values


def credentials_from_env(env: Mapping[str, str]) -> Dict[str, str]:
    """Map the four AWS environment variables onto credentials-file keys."""
    return {prop: env[var] for var, prop in ENV_KEYS.items() if var in env}


def merge_credentials(
    file_values: Mapping[str, str],
    env_values: Mapping[str, str],
    profile: str = "default",
) -> CredentialSet:
    """Overlay environment values on file values and build a CredentialSet.

    Raises:
        MissingCredentialsError: If any required key is absent from both
    """
    merged = {**file_values, **env_values}
    missing = [key for key in REQUIRED_KEYS if key not in merged]
    if missing:
        raise MissingCredentialsError("aws", profile, missing)

    return CredentialSet(
        access_key_id=merged[ACCESS_KEY_ID],
        secret_access_key=merged[SECRET_ACCESS_KEY],
        session_token=merged[SESSION_TOKEN],
        region=merged[REGION],
    )


class AwsCredentialProvider:
    """Resolves AWS credentials for one profile."""

    def __init__(self, profile: str, credentials_path: Path, env: Mapping[str, str]):
        self.profile = profile
        self.credentials_path = credentials_path
        self.env = env

    def read_file(self) -> Dict[str, str]:
        try:
            text = self.credentials_path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigIOError(self.credentials_path, "read credentials file", str(e)) from e
        return parse_profile_section(text.splitlines(), self.profile)

    def resolve(self) -> CredentialSet:
        file_values = self.read_file()
        env_values = credentials_from_env(self.env)
        overridden = sorted(set(file_values) & set(env_values))
        if overridden:
            logger.debug("Environment overrides credentials file for: %s", ", ".join(overridden))
        credentials = merge_credentials(file_values, env_values, self.profile)
        logger.debug("Resolved credentials for profile %s", self.profile)
        return credentials

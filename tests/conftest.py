"""Shared test fixtures for wdapty."""

from datetime import datetime

import polars as pl
import pytest

from wdapty.patterns import PatternStore

CREDENTIALS_FILE = """[default]
aws_access_key_id=defaultid
aws_secret_access_key=defaultsecret
aws_session_token=defaultsession
region=default
[test]
aws_access_key_id=testid
aws_secret_access_key=testsecret
aws_session_token=test-session
region=test
"""


@pytest.fixture
def store(tmp_path):
    """Pattern store in a directory that does not exist yet."""
    return PatternStore(tmp_path / ".wdapty" / "config.ini")


@pytest.fixture
def credentials_file(tmp_path):
    """AWS credentials file with a default and a test profile."""
    path = tmp_path / "credentials"
    path.write_text(CREDENTIALS_FILE)
    return path


@pytest.fixture
def abc_parquet(tmp_path):
    """Three columns A, B, C with three rows."""
    path = tmp_path / "abc.parq"
    pl.DataFrame({"A": [1, 2, 3], "B": [4, 5, 6], "C": [7, 8, 9]}).write_parquet(path)
    return path


@pytest.fixture
def trades_parquet(tmp_path):
    """Timestamped rows, one per minute from 2024-02-01 17:01:00."""
    path = tmp_path / "trades.parq"
    pl.DataFrame(
        {
            "t": [
                datetime(2024, 2, 1, 17, 1, 0),
                datetime(2024, 2, 1, 17, 2, 0),
                datetime(2024, 2, 1, 17, 3, 0),
            ],
            "open": [10.0, 11.0, 12.0],
            "close": [10.5, 11.5, 12.5],
        }
    ).write_parquet(path)
    return path


@pytest.fixture
def credentials_lines():
    return CREDENTIALS_FILE.splitlines()

"""Strict parsing of ``YYYY-MM-DD hh:mm:ss`` literals.

Only the shape is checked. Calendar ranges are not validated, so
``2024-13-01 00:00:00`` parses; the query engine rejects such values later.
"""

from __future__ import annotations

import re
from typing import List, NamedTuple

import polars as pl

from ..exceptions import FailedToParseError, FormatError

WRONG_FORMAT = "Wrong datetime format. Needs to be 'YYYY-MM-DD hh-mm-ss'"

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1

_INTEGER = re.compile(r"[+-]?[0-9]+")

DATE_FIELDS = ("year", "month", "day")
TIME_FIELDS = ("hour", "minute", "second")


class DateParts(NamedTuple):
    year: int
    month: int
    day: int
    hour: int
    minute: int
    second: int

    def to_expr(self) -> pl.Expr:
        """Datetime literal usable in a polars comparison."""
        return pl.datetime(
            self.year, self.month, self.day, self.hour, self.minute, self.second
        )


def _parse_int32(field: str, token: str) -> int:
    if not _INTEGER.fullmatch(token):
        raise FailedToParseError(field, token)
    value = int(token)
    if not INT32_MIN <= value <= INT32_MAX:
        raise FailedToParseError(field, token)
    return value


def _split_exact(segment: str, sep: str, count: int) -> List[str]:
    tokens = segment.split(sep)
    if len(tokens) != count:
        raise FormatError(WRONG_FORMAT, details={"segment": segment})
    return tokens


def parse_datetime(value: str) -> DateParts:
    """Parse ``value`` into its six integer fields.

    Raises:
        FormatError: If the literal does not have a date and a time segment
            of three tokens each
        FailedToParseError: If a token is not a 32-bit signed integer
    """
    segments = value.split(" ")
    if len(segments) != 2:
        raise FormatError(WRONG_FORMAT, details={"value": value})

    date_tokens = _split_exact(segments[0], "-", 3)
    time_tokens = _split_exact(segments[1], ":", 3)

    fields = DATE_FIELDS + TIME_FIELDS
    return DateParts(
        *(_parse_int32(field, token) for field, token in zip(fields, date_tokens + time_tokens))
    )

"""
Query-string pagination.

Two shapes are accepted on `GET /questions`:
- `?limit=N&offset=M`  -> Pagination(limit=N, offset=M)
- `?start=S&end=E`     -> Range(start=S, end=E)

Values are returned exactly as given. Bounds against the collection are the
store's business; an offset past the end simply yields an empty page.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass

from core.errors import MissingParameters, ParseError

_UNSIGNED = re.compile(r"\+?[0-9]+")

U32_MAX = 2**32 - 1
# Postgres binds OFFSET as bigint.
I64_MAX = 2**63 - 1


@dataclass(frozen=True)
class Pagination:
    limit: int | None = None
    offset: int = 0


@dataclass(frozen=True)
class Range:
    start: int
    end: int

    def as_pagination(self) -> Pagination:
        # An inverted range is an empty page.
        return Pagination(limit=max(self.end - self.start, 0), offset=self.start)


def parse_unsigned(raw: str, *, max_value: int) -> int:
    """
    Parse a non-negative integer the strict way: ASCII digits with an optional
    leading '+', no whitespace, no underscores.
    """
    if not _UNSIGNED.fullmatch(raw):
        raise ValueError(f"invalid digit found in string: {raw!r}")
    value = int(raw)
    if value > max_value:
        raise ValueError(f"number too large to fit in target type: {raw!r}")
    return value


def _required_pair(params: Mapping[str, str], first: str, second: str, *, max_value: int) -> tuple[int, int]:
    if first not in params or second not in params:
        raise MissingParameters()
    try:
        return (
            parse_unsigned(params[first], max_value=max_value),
            parse_unsigned(params[second], max_value=max_value),
        )
    except ValueError as exc:
        raise ParseError(exc) from exc


def extract_pagination(params: Mapping[str, str]) -> Pagination:
    """
    Build a Pagination from `limit` and `offset`; both are required.
    """
    limit, offset = _required_pair(params, "limit", "offset", max_value=U32_MAX)
    return Pagination(limit=limit, offset=offset)


def extract_range(params: Mapping[str, str]) -> Range:
    """
    Build a Range from `start` and `end`; both are required.
    """
    start, end = _required_pair(params, "start", "end", max_value=I64_MAX)
    return Range(start=start, end=end)


def pagination_from_query(params: Mapping[str, str]) -> Pagination:
    """
    No parameters at all means "everything". Otherwise `start`/`end` wins if
    either key is present, and `limit`/`offset` is expected.
    """
    if not params:
        return Pagination()
    if "start" in params or "end" in params:
        return extract_range(params).as_pagination()
    return extract_pagination(params)

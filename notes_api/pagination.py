"""
Notes API — Pagination Helper
=============================

What:  Derives page/limit/sort/offset from raw query values and computes the
       page metadata returned with every list.
Why:   List endpoints must never fail on a malformed page or limit; values
       are clamped into range instead:

           page   = max(1, min(parsed_page or 1, MAX_PAGE))
           limit  = max(1, min(parsed_limit or 10, 100))
           offset = (page - 1) * limit

       Parsing takes the leading integer of the raw string ("2abc" → 2); an
       unparsable value or 0 falls back to the default. Feeding the output
       back in yields the same result.
"""

import math
import re
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from notes_api.schemas.common import PaginationMeta

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100
# Highest page whose offset still fits a signed 64-bit database integer.
MAX_PAGE = (2**63 - 1) // MAX_LIMIT

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


@dataclass(frozen=True)
class PaginationParams:
    page: int
    limit: int
    sort_by: Optional[str]
    sort_order: str
    offset: int


def _parse_int(raw: Any) -> Optional[int]:
    """Leading-integer parse; None when no integer can be read."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    match = _LEADING_INT.match(str(raw))
    return int(match.group(1)) if match else None


def get_pagination_params(
    query: Mapping[str, Any],
    default_sort_order: str = "asc",
) -> PaginationParams:
    """
    Build PaginationParams from a mapping of query values.

    Args:
        query: Raw query values keyed by their camelCase names
               (page, limit, sortBy, sortOrder)
        default_sort_order: "asc" for users, "desc" for notes. The other
               direction is used only when sortOrder is exactly that value.
    """
    page = max(1, min(_parse_int(query.get("page")) or DEFAULT_PAGE, MAX_PAGE))
    limit = max(1, min(_parse_int(query.get("limit")) or DEFAULT_LIMIT, MAX_LIMIT))

    other = "desc" if default_sort_order == "asc" else "asc"
    sort_order = other if query.get("sortOrder") == other else default_sort_order

    sort_by = query.get("sortBy")
    if not isinstance(sort_by, str) or not sort_by:
        sort_by = None

    return PaginationParams(
        page=page,
        limit=limit,
        sort_by=sort_by,
        sort_order=sort_order,
        offset=(page - 1) * limit,
    )


def build_pagination_meta(page: int, limit: int, total: int) -> PaginationMeta:
    offset = (page - 1) * limit
    return PaginationMeta(
        page=page,
        limit=limit,
        total=total,
        total_pages=math.ceil(total / limit) if limit else 0,
        has_next=offset + limit < total,
        has_prev=page > 1,
    )

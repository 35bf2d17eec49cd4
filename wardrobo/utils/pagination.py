"""Pagination helpers shared by the catalog endpoints."""

import math
import re
from typing import Any, Optional

DEFAULT_PAGE_SIZE = 12
MAX_PAGE_SIZE = 100

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_positive_int(raw: Optional[str], fallback: int) -> int:
    """Parse a query-string integer; missing, invalid or non-positive values use ``fallback``.

    Only the leading integer is read, so ``"3abc"`` parses as 3.
    """
    if not raw:
        return fallback
    match = _LEADING_INT.match(str(raw))
    if not match:
        return fallback
    value = int(match.group(1))
    return value if value > 0 else fallback


def coerce_page_number(raw: Any, fallback: int) -> int:
    """Accept only positive JSON integers (booleans excluded)."""
    if isinstance(raw, bool) or not isinstance(raw, int):
        return fallback
    return raw if raw > 0 else fallback


def clamp_page_size(per_page: int) -> int:
    return min(per_page, MAX_PAGE_SIZE)


def page_offset(page: int, per_page: int) -> int:
    return (page - 1) * per_page


def total_pages(total: int, per_page: int) -> int:
    """Number of pages for ``total`` rows; never less than one."""
    if per_page <= 0:
        return 1
    return max(1, math.ceil(total / per_page))

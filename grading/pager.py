"""
Offset pagination arithmetic.

The pager only computes windows and page metadata; rows are fetched by the
store with the window's ``skip``/``limit``.
"""
import math
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10

# Largest OFFSET/LIMIT the database accepts (signed 64-bit).
MAX_SQL_INT = 2 ** 63 - 1

# Optional sign, integer part, optional fraction: "2.5" reads as 2.
_NUMBER = re.compile(r"([+-]?\d{1,25})(\.\d*)?")


def _positive_int(value: Any, default: int) -> int:
    if value is None or isinstance(value, bool):
        return default
    match = _NUMBER.fullmatch(str(value).strip())
    if match is None:
        return default
    number = int(match.group(1))
    if number < 1 or number > MAX_SQL_INT:
        return default
    return number


def resolve_page_params(page: Any = None, limit: Any = None) -> Tuple[int, int]:
    """
    Parse raw page/limit input.

    Decimal values are truncated ("2.5" reads as 2). Missing, non-numeric,
    non-positive and out-of-range values fall back to the defaults instead
    of raising.
    """
    return _positive_int(page, DEFAULT_PAGE), _positive_int(limit, DEFAULT_LIMIT)


@dataclass(frozen=True)
class Window:
    page: int
    limit: int

    @property
    def skip(self) -> int:
        # Past the last possible row the page is simply empty.
        return min((self.page - 1) * self.limit, MAX_SQL_INT)


def compute_window(page: Any = None, limit: Any = None) -> Window:
    page, limit = resolve_page_params(page, limit)
    return Window(page=page, limit=limit)


def total_pages(total: int, limit: int) -> int:
    """Number of pages, never less than 1 so an empty set reads as page 1 of 1."""
    return max(1, math.ceil(total / limit))


@dataclass
class Page:
    data: List[Dict[str, Any]]
    page: int
    limit: int
    total: int
    total_pages: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "data": self.data,
            "page": self.page,
            "limit": self.limit,
            "total": self.total,
            "totalPages": self.total_pages,
        }


def build_page(data: List[Dict[str, Any]], window: Window, total: Optional[int]) -> Page:
    total = total or 0
    return Page(
        data=data,
        page=window.page,
        limit=window.limit,
        total=total,
        total_pages=total_pages(total, window.limit),
    )

"""Pagination helpers for list endpoints.

Raw ``page`` / ``limit`` query values are never rejected: anything missing,
non-numeric or out of range degrades to a safe default so a malformed query
string still yields a bounded page.
"""

import math
from typing import Any, Optional

from fastapi import Query
from pydantic import BaseModel

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 20
MAX_LIMIT = 100


def _parse_int(raw: Any) -> int | None:
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    try:
        return int(str(raw).strip())
    except ValueError:
        return None


def normalize_page(raw: Any) -> int:
    """Page number >= 1; anything else falls back to the first page."""
    page = _parse_int(raw)
    if page is None or page < 1:
        return DEFAULT_PAGE
    return page


def normalize_limit(raw: Any, default: int = DEFAULT_LIMIT) -> int:
    """Page size clamped to [1, MAX_LIMIT]; unparseable input uses *default*."""
    limit = _parse_int(raw)
    if limit is None:
        limit = default
    return max(1, min(MAX_LIMIT, limit))


def page_count(total: int, limit: int) -> int:
    return math.ceil(total / limit) if total > 0 else 0


class PaginationParams:
    """FastAPI dependency for `?page=1&limit=20` with lenient normalization."""

    def __init__(
        self,
        page: Optional[str] = Query(default=None, description="Page number (1-based)"),
        limit: Optional[str] = Query(default=None, description=f"Items per page (1-{MAX_LIMIT})"),
    ):
        self.page = normalize_page(page)
        self.limit = normalize_limit(limit)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


class PageMeta(BaseModel):
    page: int
    limit: int
    total: int
    pages: int

    model_config = {"populate_by_name": True}

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "PageMeta":
        return cls(page=page, limit=limit, total=total, pages=page_count(total, limit))

import math
from dataclasses import dataclass

from fastapi import Query

from utils.errors import ValidationFailedError

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100
# OFFSET is a signed 64-bit integer on both SQLite and PostgreSQL
MAX_PAGE = (2 ** 63 - 1) // MAX_PAGE_SIZE
DEFAULT_SUGGESTION_LIMIT = 10


@dataclass(frozen=True)
class PageParams:
    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def clamp_limit(limit: int) -> int:
    if limit < 1:
        raise ValidationFailedError("limit must be a positive integer")
    return min(limit, MAX_PAGE_SIZE)


def page_params(
    page: int = Query(1, description="1-based page number"),
    limit: int = Query(DEFAULT_PAGE_SIZE, description="Page size, capped at 100"),
) -> PageParams:
    if page < 1:
        raise ValidationFailedError("page must be a positive integer")
    if page > MAX_PAGE:
        raise ValidationFailedError(f"page must not exceed {MAX_PAGE}")
    return PageParams(page=page, limit=clamp_limit(limit))


def pagination_meta(params: PageParams, total: int) -> dict:
    total_pages = math.ceil(total / params.limit) if total else 0
    return {
        "page": params.page,
        "limit": params.limit,
        "total": total,
        "total_pages": total_pages,
        "has_next": params.page < total_pages,
        "has_prev": params.page > 1,
    }

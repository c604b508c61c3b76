"""Offset-based pagination metadata and links."""

import math
from typing import Generic, TypeVar
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from pydantic import Field

from src.ems.schemas.base import CamelModel

T = TypeVar("T")

DEFAULT_OFFSET = 0
DEFAULT_LIMIT = 10
MAX_LIMIT = 100


class PaginationLinks(CamelModel):
    previous_page_link: str | None
    current_page_link: str
    next_page_link: str | None
    first_page_link: str
    last_page_link: str


class Pagination(CamelModel):
    offset: int
    limit: int
    total_count: int
    total_pages: int
    current_page: int
    previous_page: int | None
    next_page: int | None
    links: PaginationLinks


class Page(CamelModel, Generic[T]):
    """One page of results.

    `count` is the size of this page; `total_count` counts every matching
    row regardless of offset and limit.
    """

    items: list[T]
    count: int
    total_count: int
    pagination: Pagination | None = Field(default=None)


def with_offset(url: str, offset: int, limit: int) -> str:
    """Return `url` with its offset/limit query parameters replaced."""
    parts = urlsplit(url)
    query = [
        (key, value)
        for key, value in parse_qsl(parts.query, keep_blank_values=True)
        if key not in ("offset", "limit")
    ]
    query += [("offset", str(offset)), ("limit", str(limit))]
    return urlunsplit(parts._replace(query=urlencode(query)))


def build_pagination(offset: int, limit: int, total_count: int, base_url: str) -> Pagination:
    """Derive page numbers and absolute page links for an offset/limit window.

    Examples:
        >>> p = build_pagination(10, 10, 25, "https://app.example.com/departments")
        >>> (p.total_pages, p.current_page, p.previous_page, p.next_page)
        (3, 2, 1, 3)
    """
    total_pages = math.ceil(total_count / limit)
    current_page = offset // limit + 1
    has_next = current_page < total_pages

    previous_link = None
    if offset > 0:
        previous_link = with_offset(base_url, max(offset - limit, 0), limit)

    links = PaginationLinks(
        previous_page_link=previous_link,
        current_page_link=with_offset(base_url, offset, limit),
        next_page_link=with_offset(base_url, current_page * limit, limit) if has_next else None,
        first_page_link=with_offset(base_url, 0, limit),
        last_page_link=with_offset(base_url, max(total_pages - 1, 0) * limit, limit),
    )
    return Pagination(
        offset=offset,
        limit=limit,
        total_count=total_count,
        total_pages=total_pages,
        current_page=current_page,
        previous_page=current_page - 1 if current_page > 1 else None,
        next_page=current_page + 1 if has_next else None,
        links=links,
    )

"""
Listing composition for posts.

`compose_post_listing` turns raw query parameters into everything a page
read needs: filter clauses, the offset, and which references to expand.
Only published posts are ever listed.
"""

from dataclasses import dataclass, field
from typing import cast
from uuid import UUID

from sqlalchemy import or_
from sqlalchemy.sql.expression import ColumnElement
from sqlmodel import col

from app.configs import settings
from app.errors.validation import ValidationError
from app.models import PUBLIC_USER_FIELDS, CategoryDB, PostDB, UserDB
from app.repositories.base import Expansion
from app.schemas.common import Pagination
from app.utils.helpers import page_count

LIKE_ESCAPE = "\\"

AUTHOR = Expansion("author", "author_id", UserDB, "uuid", PUBLIC_USER_FIELDS)
CATEGORY = Expansion("category", "category_id", CategoryDB, "id", ("name", "slug"))
COMMENT_AUTHOR = Expansion("comments.user", "user_id", UserDB, "uuid", PUBLIC_USER_FIELDS)

LIST_EXPANSIONS: tuple[Expansion, ...] = (AUTHOR, CATEGORY)
DETAIL_EXPANSIONS: tuple[Expansion, ...] = (AUTHOR, CATEGORY, COMMENT_AUTHOR)


@dataclass(frozen=True, slots=True)
class PostListParams:
    page: int = 1
    limit: int = field(default_factory=lambda: settings.DEFAULT_PAGE_SIZE)
    category: UUID | None = None
    search: str | None = None


@dataclass(frozen=True, slots=True)
class PostListing:
    """
    A composed page read.

    Attributes:
        filters: Conditions combined with AND.
        page: 1-based page number.
        limit: Page size.
        skip: Rows before the page, ``(page - 1) * limit``.
        expansions: References to populate on every returned post.
    """

    filters: tuple[ColumnElement[bool], ...]
    page: int
    limit: int
    skip: int
    expansions: tuple[Expansion, ...] = LIST_EXPANSIONS


def escape_like(term: str) -> str:
    """
    Escape LIKE wildcards so `term` matches literally.

    Examples:
        >>> escape_like("100%_done")
        '100\\\\%\\\\_done'
    """
    return (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", f"{LIKE_ESCAPE}%")
        .replace("_", f"{LIKE_ESCAPE}_")
    )


def search_clause(term: str) -> ColumnElement[bool]:
    """Case-insensitive substring match on title or content."""
    pattern = f"%{escape_like(term)}%"
    return or_(
        col(PostDB.title).ilike(pattern, escape=LIKE_ESCAPE),
        col(PostDB.content).ilike(pattern, escape=LIKE_ESCAPE),
    )


def validate_page(page: int, limit: int, max_limit: int | None = None) -> None:
    """
    Reject page numbers below 1 and sizes outside ``1..max_limit``.

    Raises:
        ValidationError: With one entry per offending parameter.
    """
    max_limit = max_limit or settings.MAX_PAGE_SIZE
    errors = []
    if page < 1:
        errors.append({"field": "page", "message": "Page must be at least 1", "type": "range"})
    if not 1 <= limit <= max_limit:
        errors.append(
            {
                "field": "limit",
                "message": f"Limit must be between 1 and {max_limit}",
                "type": "range",
            },
        )
    if errors:
        raise ValidationError("Invalid pagination parameters", errors)


def compose_post_listing(params: PostListParams, max_limit: int | None = None) -> PostListing:
    """
    Build the filters, offset and expansions for one page of posts.

    Args:
        params: Requested page, size and optional narrowing.
        max_limit: Upper bound for the page size; defaults to
            ``settings.MAX_PAGE_SIZE``.

    Raises:
        ValidationError: If page or limit are out of range.
    """
    validate_page(params.page, params.limit, max_limit)

    filters: list[ColumnElement[bool]] = [col(PostDB.is_published).is_(True)]
    if params.category is not None:
        filters.append(cast(ColumnElement[bool], PostDB.category_id == params.category))

    term = params.search.strip() if params.search else ""
    if term:
        filters.append(search_clause(term))

    return PostListing(
        filters=tuple(filters),
        page=params.page,
        limit=params.limit,
        skip=(params.page - 1) * params.limit,
    )


def build_pagination(page: int, limit: int, total: int) -> Pagination:
    return Pagination(page=page, limit=limit, total=total, pages=page_count(total, limit))

"""
Post and comment schemas.

Responses embed referenced records ("populated" fields): the author's
public fields, the category's name and slug, and each comment's author.
"""

from datetime import datetime
from typing import Annotated
from uuid import UUID

from pydantic import Field, StringConstraints, field_validator

from app.configs.settings import (
    COMMENT_MAX_LENGTH,
    MAX_TAGS_COUNT,
    POST_CONTENT_MIN_LENGTH,
    POST_EXCERPT_MAX_LENGTH,
    POST_TITLE_MAX_LENGTH,
    POST_TITLE_MIN_LENGTH,
)
from app.schemas.common import CamelModel
from app.schemas.user import AuthorPublic

PostTitle = Annotated[
    str,
    StringConstraints(
        strip_whitespace=True,
        min_length=POST_TITLE_MIN_LENGTH,
        max_length=POST_TITLE_MAX_LENGTH,
    ),
]
PostContent = Annotated[
    str,
    StringConstraints(strip_whitespace=True, min_length=POST_CONTENT_MIN_LENGTH),
]
PostExcerpt = Annotated[
    str,
    StringConstraints(strip_whitespace=True, max_length=POST_EXCERPT_MAX_LENGTH),
]
CommentContent = Annotated[
    str,
    StringConstraints(strip_whitespace=True, min_length=1, max_length=COMMENT_MAX_LENGTH),
]


def _clean_tags(tags: list[str] | None) -> list[str] | None:
    if tags is None:
        return None
    cleaned: list[str] = []
    for raw in tags:
        tag = raw.strip().lower()
        if tag and tag not in cleaned:
            cleaned.append(tag)
    return cleaned


class PostCreate(CamelModel):
    """
    Post creation payload.

    There is no author field: the author is the authenticated identity.
    """

    title: PostTitle = Field(..., examples=["Getting Started with FastAPI"])
    content: PostContent = Field(..., examples=["FastAPI is a modern web framework..."])
    category_id: UUID = Field(..., alias="category", description="Category ID")
    excerpt: PostExcerpt | None = None
    tags: list[str] = Field(default_factory=list, max_length=MAX_TAGS_COUNT)
    is_published: bool = False

    @field_validator("tags")
    @classmethod
    def normalize_tags(cls, v: list[str]) -> list[str]:
        return _clean_tags(v) or []


class PostUpdate(CamelModel):
    """Post update payload. Only provided fields are written."""

    title: PostTitle | None = None
    content: PostContent | None = None
    category_id: UUID | None = Field(default=None, alias="category")
    excerpt: PostExcerpt | None = None
    tags: list[str] | None = Field(default=None, max_length=MAX_TAGS_COUNT)
    is_published: bool | None = None

    @field_validator("tags")
    @classmethod
    def normalize_tags(cls, v: list[str] | None) -> list[str] | None:
        return _clean_tags(v)


class CommentCreate(CamelModel):
    """Comment payload."""

    content: CommentContent = Field(..., examples=["Great write-up, thanks!"])


class CategoryRef(CamelModel):
    """Category fields embedded in a post."""

    id: UUID
    name: str
    slug: str


class CommentResponse(CamelModel):
    """Comment with its author's public fields."""

    id: UUID
    user: AuthorPublic | None = None
    content: str
    created_at: datetime


class PostResponse(CamelModel):
    """Post with author, category and (for single reads) comments populated."""

    id: UUID
    title: str
    slug: str
    content: str
    excerpt: str | None = None
    tags: list[str] = []
    author: AuthorPublic | None = None
    category: CategoryRef | None = None
    is_published: bool
    view_count: int
    comments: list[CommentResponse] | None = None
    created_at: datetime
    updated_at: datetime | None = None

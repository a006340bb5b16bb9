"""Post and comment repository for database operations."""

from collections.abc import Sequence
from datetime import UTC, datetime
from typing import Any, cast
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.sql.expression import ColumnElement
from sqlmodel import col

from app.errors.database import (
    CategoryNotFoundError,
    ConflictError,
    DatabaseError,
    DuplicateEntryError,
)
from app.models.post import CommentDB, PostDB
from app.repositories.base import BaseRepository
from app.schemas.post import PostCreate, PostUpdate
from app.utils.helpers import slugify


class PostRepository(BaseRepository[PostDB]):
    """
    Repository for posts and their comments.

    The category foreign key is the last line of defence for dangling
    references: a violation surfaces as `CategoryNotFoundError`.
    """

    model = PostDB

    def conflict_error(self, error: IntegrityError) -> ConflictError:
        return DuplicateEntryError("A post with this title already exists")

    def reference_error(self, error: IntegrityError) -> DatabaseError:
        return CategoryNotFoundError()

    async def create(self, post: PostCreate, author_id: UUID) -> PostDB:
        """
        Create a post written by `author_id`.

        Raises:
            DuplicateEntryError: If the title's slug is taken
            CategoryNotFoundError: If the category disappeared meanwhile
        """
        db_post = PostDB(
            author_id=author_id,
            category_id=post.category_id,
            title=post.title,
            slug=slugify(post.title),
            content=post.content,
            excerpt=post.excerpt,
            tags=post.tags,
            is_published=post.is_published,
        )
        return await self._add_and_refresh(db_post)

    async def update(self, db_post: PostDB, post: PostUpdate) -> PostDB:
        """Apply the set fields; a new title regenerates the slug."""
        extra: dict[str, Any] = {"updated_at": datetime.now(tz=UTC)}
        if post.title:
            extra["slug"] = slugify(post.title)
        return await self.apply(db_post, post, **extra)

    async def list_page(
        self,
        filters: Sequence[ColumnElement[bool]],
        skip: int,
        limit: int,
    ) -> tuple[list[PostDB], int]:
        """
        One page of posts matching `filters`, newest first, plus the total.

        Args:
            filters: Conditions combined with AND
            skip: Rows to skip
            limit: Maximum rows to return

        Returns:
            tuple[list[PostDB], int]: The page and the total match count
        """
        statement = (
            select(PostDB)
            .where(*filters)
            .order_by(col(PostDB.created_at).desc(), col(PostDB.id).desc())
            .offset(skip)
            .limit(limit)
        )
        result = await self.session.execute(statement)
        total = await self.count_where(*filters)
        return list(result.scalars().all()), total

    async def increment_view_count(self, post_id: UUID) -> PostDB | None:
        """
        Add one view in a single statement and return the updated post.

        Returns:
            PostDB | None: The post, None if it does not exist
        """
        statement = (
            update(PostDB)
            .where(cast(ColumnElement[bool], PostDB.id == post_id))
            .values(view_count=col(PostDB.view_count) + 1)
            .returning(PostDB)
        )
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def count_by_category(self, category_id: UUID) -> int:
        """Number of posts referencing a category, published or not."""
        return await self.count_where(cast(ColumnElement[bool], PostDB.category_id == category_id))

    async def add_comment(self, post_id: UUID, user_id: UUID, content: str) -> CommentDB:
        comment = CommentDB(post_id=post_id, user_id=user_id, content=content)
        self.session.add(comment)
        await self.session.flush()
        await self.session.refresh(comment)
        return comment

    async def comments_for(self, post_id: UUID) -> list[CommentDB]:
        """Comments of a post in the order they were written."""
        result = await self.session.execute(
            select(CommentDB)
            .where(cast(ColumnElement[bool], CommentDB.post_id == post_id))
            .order_by(col(CommentDB.created_at), col(CommentDB.id)),
        )
        return list(result.scalars().all())

"""Post service: listing, population, ownership checks and comments."""

from typing import Any
from uuid import UUID

from app.auth.identity import Identity
from app.auth.policy import Action, Resource, ResourceKind, decide, enforce
from app.errors.database import CategoryNotFoundError, NotFoundError
from app.models.post import PostDB
from app.monitoring import get_logger
from app.repositories import CategoryRepository, PostRepository
from app.schemas.common import Pagination
from app.schemas.post import CommentCreate, PostCreate, PostUpdate
from app.services.query import (
    DETAIL_EXPANSIONS,
    LIST_EXPANSIONS,
    PostListParams,
    build_pagination,
    compose_post_listing,
)

logger = get_logger(__name__)

type PostDocument = dict[str, Any]


class PostService:
    """
    Post CRUD and comments.

    Documents returned here are plain dicts with the author and category
    expanded to their public fields; single-post reads also carry the
    comments, each with its author expanded.
    """

    def __init__(self, posts: PostRepository, categories: CategoryRepository) -> None:
        self.posts = posts
        self.categories = categories

    async def list(self, params: PostListParams) -> tuple[list[PostDocument], Pagination]:
        """
        One page of published posts.

        Raises:
            ValidationError: If page or limit are out of range
        """
        listing = compose_post_listing(params)
        rows, total = await self.posts.list_page(listing.filters, listing.skip, listing.limit)
        documents = [row.model_dump() for row in rows]
        await self.posts.populate(documents, listing.expansions)
        return documents, build_pagination(listing.page, listing.limit, total)

    async def get(self, post_id: UUID) -> PostDocument:
        """
        Read a post and count the view.

        Raises:
            NotFoundError: If the post does not exist
        """
        post = await self.posts.increment_view_count(post_id)
        if post is None:
            raise NotFoundError("Post not found")
        return await self._detail(post)

    async def create(self, identity: Identity, data: PostCreate) -> PostDocument:
        """
        Create a post authored by `identity`.

        Raises:
            CategoryNotFoundError: If the category does not exist
            DuplicateEntryError: If the title's slug is taken
        """
        enforce(decide(identity, Action.CREATE, Resource(ResourceKind.POST)), Action.CREATE)
        await self._require_category(data.category_id)
        post = await self.posts.create(data, author_id=identity.id)
        logger.info("Post created", post_id=str(post.id), author_id=str(identity.id))
        return await self._summary(post)

    async def update(self, identity: Identity, post_id: UUID, data: PostUpdate) -> PostDocument:
        """
        Update a post's provided fields.

        Raises:
            NotFoundError: If the post does not exist
            NotOwnerError: If `identity` is neither the author nor an admin
            CategoryNotFoundError: If a new category does not exist
        """
        post = await self._get_or_404(post_id)
        self._authorize(identity, Action.UPDATE, post)
        if data.category_id is not None:
            await self._require_category(data.category_id)
        post = await self.posts.update(post, data)
        return await self._summary(post)

    async def delete(self, identity: Identity, post_id: UUID) -> None:
        """
        Raises:
            NotFoundError: If the post does not exist
            NotOwnerError: If `identity` is neither the author nor an admin
        """
        post = await self._get_or_404(post_id)
        self._authorize(identity, Action.DELETE, post)
        await self.posts.delete(post)
        logger.info("Post deleted", post_id=str(post_id), by=str(identity.id))

    async def add_comment(
        self,
        identity: Identity,
        post_id: UUID,
        data: CommentCreate,
    ) -> PostDocument:
        """
        Append a comment by `identity` and return the fully populated post.

        Raises:
            NotFoundError: If the post does not exist
        """
        post = await self._get_or_404(post_id)
        enforce(decide(identity, Action.CREATE, Resource(ResourceKind.COMMENT)), Action.CREATE)
        await self.posts.add_comment(post.id, identity.id, data.content)
        return await self._detail(post)

    @staticmethod
    def _authorize(identity: Identity, action: Action, post: PostDB) -> None:
        resource = Resource(ResourceKind.POST, owner_id=post.author_id)
        enforce(decide(identity, action, resource), action)

    async def _get_or_404(self, post_id: UUID) -> PostDB:
        post = await self.posts.get_by_id(post_id)
        if post is None:
            raise NotFoundError("Post not found")
        return post

    async def _require_category(self, category_id: UUID) -> None:
        if not await self.categories.exists(category_id):
            raise CategoryNotFoundError

    async def _summary(self, post: PostDB) -> PostDocument:
        document = post.model_dump()
        await self.posts.populate([document], LIST_EXPANSIONS)
        return document

    async def _detail(self, post: PostDB) -> PostDocument:
        document = post.model_dump()
        comments = await self.posts.comments_for(post.id)
        document["comments"] = [comment.model_dump() for comment in comments]
        await self.posts.populate([document], DETAIL_EXPANSIONS)
        return document

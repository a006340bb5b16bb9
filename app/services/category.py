"""Category service applying the admin-only policy and referential checks."""

from uuid import UUID

from app.auth.identity import Identity
from app.auth.policy import Action, Resource, ResourceKind, decide, enforce
from app.errors.database import NotFoundError
from app.models.category import CategoryDB
from app.monitoring import get_logger
from app.repositories import CategoryRepository, PostRepository
from app.schemas.category import CategoryCreate, CategoryUpdate

logger = get_logger(__name__)

CATEGORY = Resource(ResourceKind.CATEGORY)


class CategoryService:
    """
    Category CRUD.

    Every write is admin-only. The role is checked before the category is
    looked up, since it does not depend on the category itself.
    """

    def __init__(self, categories: CategoryRepository, posts: PostRepository) -> None:
        self.categories = categories
        self.posts = posts

    async def list_active(self) -> list[CategoryDB]:
        return await self.categories.list_active()

    async def get(self, category_id: UUID) -> CategoryDB:
        """
        Raises:
            NotFoundError: If the category does not exist
        """
        category = await self.categories.get_by_id(category_id)
        if category is None:
            raise NotFoundError("Category not found")
        return category

    async def create(self, identity: Identity, data: CategoryCreate) -> CategoryDB:
        """
        Create a category.

        Raises:
            InsufficientRoleError: If `identity` is not an admin
            DuplicateNameError: If the name is taken
        """
        enforce(decide(identity, Action.CREATE, CATEGORY), Action.CREATE)
        category = await self.categories.create(data)
        logger.info("Category created", category_id=str(category.id), name=category.name)
        return category

    async def update(
        self,
        identity: Identity,
        category_id: UUID,
        data: CategoryUpdate,
    ) -> CategoryDB:
        """
        Update a category's provided fields.

        Raises:
            InsufficientRoleError: If `identity` is not an admin
            NotFoundError: If the category does not exist
            DuplicateNameError: If the new name is taken
        """
        enforce(decide(identity, Action.UPDATE, CATEGORY), Action.UPDATE)
        category = await self.get(category_id)
        return await self.categories.update(category, data)

    async def delete(self, identity: Identity, category_id: UUID) -> None:
        """
        Delete a category nothing references.

        The dependents count is read fresh on every call.

        Raises:
            InsufficientRoleError: If `identity` is not an admin
            NotFoundError: If the category does not exist
            DependencyError: If posts still reference the category
        """
        enforce(decide(identity, Action.DELETE, CATEGORY), Action.DELETE)
        category = await self.get(category_id)

        dependents = await self.posts.count_by_category(category.id)
        resource = Resource(ResourceKind.CATEGORY, dependents=dependents)
        enforce(decide(identity, Action.DELETE, resource), Action.DELETE)

        await self.categories.delete(category)
        logger.info("Category deleted", category_id=str(category_id))

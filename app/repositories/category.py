"""Category repository for database operations."""

from datetime import UTC, datetime
from typing import cast

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.sql.expression import ColumnElement

from app.errors.database import (
    ConflictError,
    DatabaseError,
    DependencyError,
    DuplicateNameError,
)
from app.models.category import CategoryDB
from app.repositories.base import BaseRepository
from app.schemas.category import CategoryCreate, CategoryUpdate
from app.utils.helpers import slugify


class CategoryRepository(BaseRepository[CategoryDB]):
    """Repository for categories. Names are unique; slugs may repeat."""

    model = CategoryDB

    def conflict_error(self, error: IntegrityError) -> ConflictError:
        return DuplicateNameError()

    def reference_error(self, error: IntegrityError) -> DatabaseError:
        return DependencyError()

    async def list_active(self) -> list[CategoryDB]:
        """Active categories ordered by name."""
        result = await self.session.execute(
            select(CategoryDB)
            .where(cast(ColumnElement[bool], CategoryDB.is_active))
            .order_by(CategoryDB.name),
        )
        return list(result.scalars().all())

    async def create(self, category: CategoryCreate) -> CategoryDB:
        """
        Create a category with a slug derived from its name.

        Raises:
            DuplicateNameError: If the name is taken
        """
        db_category = CategoryDB(
            name=category.name,
            slug=slugify(category.name),
            description=category.description,
            color=category.color,
        )
        return await self._add_and_refresh(db_category)

    async def update(self, db_category: CategoryDB, category: CategoryUpdate) -> CategoryDB:
        """Apply the set fields; a new name regenerates the slug."""
        extra: dict[str, object] = {"updated_at": datetime.now(tz=UTC)}
        if category.name:
            extra["slug"] = slugify(category.name)
        return await self.apply(db_category, category, **extra)

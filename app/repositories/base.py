"""Base repository for database operations."""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.expression import ColumnElement
from sqlmodel import SQLModel

from app.errors.database import (
    ConflictError,
    DatabaseConnectionError,
    DatabaseError,
    DuplicateEntryError,
)

type FilterValue = str | int | float | bool | UUID | datetime | None
type Document = dict[str, Any]


@dataclass(frozen=True, slots=True)
class Expansion:
    """
    Replace a reference on a document with selected fields of the referenced row.

    Attributes:
        path: Key the expanded record is stored under. A dotted path such as
            ``"comments.user"`` expands every item of a nested list.
        source: Key on the document holding the referenced id.
        model: Referenced table.
        key: Primary-key column of the referenced table.
        fields: Columns copied into the expanded record, besides its id.
    """

    path: str
    source: str
    model: type[SQLModel]
    key: str
    fields: tuple[str, ...]


def is_unique_violation(error: IntegrityError) -> bool:
    message = str(error.orig if error.orig else error).lower()
    return "unique" in message or "duplicate" in message


def is_foreign_key_violation(error: IntegrityError) -> bool:
    message = str(error.orig if error.orig else error).lower()
    return "foreign key" in message


class BaseRepository[ModelT: SQLModel]:
    """
    Base repository implementing common CRUD operations.

    Subclasses set `model` and, where the primary key is not ``id``,
    `id_field`. Integrity errors are mapped to typed errors through
    `conflict_error` and `reference_error`.

    Attributes:
        model: The SQLModel database model type.
        id_field: The name of the primary key field (default: "id").
    """

    model: type[ModelT]
    id_field: str = "id"

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize repository with database session.

        Args:
            session: Async database session
        """
        self.session = session

    @property
    def label(self) -> str:
        return self.model.__name__.removesuffix("DB")

    def conflict_error(self, error: IntegrityError) -> ConflictError:
        """Typed error for a unique violation."""
        return DuplicateEntryError(f"{self.label} already exists")

    def reference_error(self, error: IntegrityError) -> DatabaseError:
        """Typed error for a foreign-key violation."""
        return DatabaseError(f"{self.label} references a missing record")

    def _id_column(self) -> Any:
        return getattr(self.model, self.id_field)

    async def get_by_id(self, record_id: UUID) -> ModelT | None:
        """
        Get a record by its ID.

        Args:
            record_id: Record UUID

        Returns:
            ModelT | None: Record if found, None otherwise
        """
        statement = select(self.model).where(self._id_column() == record_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def get_by_field(self, field_name: str, value: FilterValue) -> ModelT | None:
        """Get a record by a specific field value."""
        field = getattr(self.model, field_name)
        result = await self.session.execute(select(self.model).where(field == value))
        return result.scalar_one_or_none()

    async def exists(self, record_id: UUID) -> bool:
        """
        Check if a record exists without loading it.

        Args:
            record_id: Record UUID

        Returns:
            bool: True if record exists, False otherwise
        """
        statement = select(1).where(self._id_column() == record_id).limit(1)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none() is not None

    async def count_where(self, *conditions: ColumnElement[bool]) -> int:
        """Count records matching all `conditions`."""
        statement = select(func.count()).select_from(self.model).where(*conditions)
        result = await self.session.execute(statement)
        count = result.scalar()
        return count if count is not None else 0

    async def delete(self, record: ModelT) -> None:
        """
        Delete a loaded record.

        Raises:
            DatabaseError: Mapped through `reference_error` when other rows
                still reference the record.
        """
        try:
            await self.session.delete(record)
            await self.session.flush()
        except IntegrityError as e:
            await self.session.rollback()
            if is_foreign_key_violation(e):
                raise self.reference_error(e) from e
            raise DatabaseError(detail=f"Database integrity error: {e.orig}") from e

    async def apply(self, record: ModelT, schema: BaseModel, **extra: Any) -> ModelT:
        """
        Write the fields set on `schema` (plus `extra`) onto `record`.

        Args:
            record: Loaded record to update
            schema: Update schema; unset and None fields are skipped
            **extra: Derived values to write alongside

        Returns:
            ModelT: Refreshed record
        """
        update_data = schema.model_dump(exclude_unset=True, exclude_none=True)
        update_data.update(extra)
        for key, value in update_data.items():
            setattr(record, key, value)
        return await self._add_and_refresh(record)

    async def _add_and_refresh(self, record: ModelT) -> ModelT:
        """
        Add a record and refresh it from the database with error handling.

        Raises:
            ConflictError: If a unique constraint is violated
            DatabaseError: For other database errors
        """
        try:
            self.session.add(record)
            await self.session.flush()
            await self.session.refresh(record)
        except IntegrityError as e:
            await self.session.rollback()
            if is_unique_violation(e):
                raise self.conflict_error(e) from e
            if is_foreign_key_violation(e):
                raise self.reference_error(e) from e
            raise DatabaseError(detail=f"Database integrity error: {e.orig}") from e
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise DatabaseConnectionError(detail=f"Failed to save record: {e}") from e
        return record

    async def populate(
        self,
        documents: Sequence[Document],
        expansions: Iterable[Expansion],
    ) -> Sequence[Document]:
        """
        Expand references on `documents` in place, one query per expansion.

        Args:
            documents: Plain dicts, typically from ``model_dump()``
            expansions: Expansions to apply, in order

        Returns:
            The same documents, expanded
        """
        for expansion in expansions:
            await self._expand(documents, expansion)
        return documents

    async def _expand(self, documents: Sequence[Document], expansion: Expansion) -> None:
        head, _, tail = expansion.path.partition(".")
        if tail:
            nested = [child for doc in documents for child in doc.get(head) or []]
            await self._expand(nested, replace(expansion, path=tail))
            return

        ids = {doc[expansion.source] for doc in documents if doc.get(expansion.source)}
        lookup = await self._lookup(expansion, ids)
        for doc in documents:
            doc[expansion.path] = lookup.get(doc.get(expansion.source))

    async def _lookup(self, expansion: Expansion, ids: set[UUID]) -> dict[UUID, Document]:
        if not ids:
            return {}
        key = getattr(expansion.model, expansion.key)
        columns = [getattr(expansion.model, name) for name in expansion.fields]
        result = await self.session.execute(select(key, *columns).where(key.in_(ids)))
        return {
            row[0]: {"id": row[0], **dict(zip(expansion.fields, row[1:], strict=True))}
            for row in result.all()
        }

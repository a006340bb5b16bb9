"""User repository for database operations."""

from typing import cast
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.sql.expression import ColumnElement

from app.auth.identity import Identity
from app.errors.database import ConflictError, DuplicateEntryError
from app.models.user import Role, UserDB
from app.repositories.base import BaseRepository
from app.schemas.user import UserCreate

# Everything but the password hash
IDENTITY_COLUMNS = (
    UserDB.uuid,
    UserDB.username,
    UserDB.email,
    UserDB.role,
    UserDB.is_active,
    UserDB.first_name,
    UserDB.last_name,
)


class UserRepository(BaseRepository[UserDB]):
    """
    Repository for User database operations.

    `get_identity` is the only read used by the credential verifier and it
    selects columns explicitly, so the password hash is never loaded.
    """

    model = UserDB
    id_field = "uuid"

    def conflict_error(self, error: IntegrityError) -> ConflictError:
        message = str(error.orig if error.orig else error).lower()
        if "username" in message:
            return DuplicateEntryError("Username already exists")
        if "email" in message:
            return DuplicateEntryError("Email already exists")
        return DuplicateEntryError("User already exists")

    async def create(
        self,
        user: UserCreate,
        password_hash: str,
        role: Role = Role.MEMBER,
    ) -> UserDB:
        """
        Create a new user in the database.

        Args:
            user: Registration payload
            password_hash: Hash of the submitted password
            role: Role to assign; registration always uses MEMBER

        Returns:
            UserDB: Created user database model

        Raises:
            DuplicateEntryError: If username or email already exists
            DatabaseError: For other database errors
        """
        db_user = UserDB(
            username=user.username,
            email=str(user.email).lower(),
            password_hash=password_hash,
            first_name=user.first_name,
            last_name=user.last_name,
            role=role,
        )
        return await self._add_and_refresh(db_user)

    async def get_by_email(self, email: str) -> UserDB | None:
        return await self.get_by_field("email", email.lower())

    async def get_identity(self, user_id: UUID) -> Identity | None:
        """
        Load the public and access-control fields of a user.

        Args:
            user_id: User UUID

        Returns:
            Identity | None: Identity if found, None otherwise
        """
        result = await self.session.execute(
            select(*IDENTITY_COLUMNS).where(cast(ColumnElement[bool], UserDB.uuid == user_id)),
        )
        row = result.one_or_none()
        if row is None:
            return None
        return Identity(
            id=row.uuid,
            username=row.username,
            email=row.email,
            role=Role(row.role),
            is_active=row.is_active,
            first_name=row.first_name,
            last_name=row.last_name,
        )

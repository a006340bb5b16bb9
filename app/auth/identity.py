"""The authenticated identity attached to a request."""

from dataclasses import dataclass
from uuid import UUID

from app.models.user import Role, UserDB


@dataclass(frozen=True, slots=True)
class Identity:
    """
    Read-only view of a user for the lifetime of one request.

    Built without the password hash; nothing downstream of the gate can
    reach it.
    """

    id: UUID
    username: str
    email: str
    role: Role
    is_active: bool
    first_name: str | None = None
    last_name: str | None = None

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    @classmethod
    def from_user(cls, user: UserDB) -> "Identity":
        return cls(
            id=user.uuid,
            username=user.username,
            email=user.email,
            role=Role(user.role),
            is_active=user.is_active,
            first_name=user.first_name,
            last_name=user.last_name,
        )

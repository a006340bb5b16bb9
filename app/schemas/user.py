"""User and identity schemas. None of them carries the password hash."""

from datetime import datetime
from typing import Annotated
from uuid import UUID

from pydantic import AliasChoices, EmailStr, Field, SecretStr, StringConstraints

from app.models.user import Role
from app.schemas.common import CamelModel

Username = Annotated[
    str,
    StringConstraints(strip_whitespace=True, min_length=3, max_length=30, pattern=r"^\w+$"),
]
PersonName = Annotated[str, StringConstraints(strip_whitespace=True, max_length=50)]


class UserCreate(CamelModel):
    """Registration payload. The role is never taken from the client."""

    username: Username = Field(..., examples=["johndoe"])
    email: EmailStr = Field(..., examples=["johndoe@example.com"])
    password: SecretStr = Field(..., min_length=6)
    first_name: PersonName | None = None
    last_name: PersonName | None = None


class LoginRequest(CamelModel):
    """Login payload."""

    email: EmailStr
    password: SecretStr = Field(..., min_length=1)


class AuthorPublic(CamelModel):
    """Public fields of a user, embedded in posts and comments."""

    id: UUID = Field(validation_alias=AliasChoices("id", "uuid"))
    username: str
    first_name: str | None = None
    last_name: str | None = None


class UserResponse(CamelModel):
    """Authenticated identity as returned by the API."""

    id: UUID = Field(validation_alias=AliasChoices("id", "uuid"))
    username: str
    email: str
    first_name: str | None = None
    last_name: str | None = None
    role: Role
    is_active: bool
    created_at: datetime | None = None

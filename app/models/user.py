"""User database model using SQLModel."""

from datetime import UTC, datetime
from enum import StrEnum
from typing import cast
from uuid import UUID, uuid4

from pydantic import ConfigDict
from sqlalchemy import DateTime
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, SQLModel, String


class Role(StrEnum):
    """Closed set of identity roles."""

    MEMBER = "member"
    ADMIN = "admin"


# Columns that may be embedded in other resources' responses
PUBLIC_USER_FIELDS: tuple[str, ...] = ("username", "first_name", "last_name")


class UserDB(SQLModel, table=True):
    """
    User database model for PostgreSQL.

    This model represents the users table in the database. The password
    hash never leaves the repository layer.
    """

    __tablename__ = cast("declared_attr[str]", "users")

    # Primary key
    uuid: UUID = Field(
        default_factory=uuid4,
        primary_key=True,
        nullable=False,
        description="User ID",
    )

    # Required fields
    username: str = Field(
        sa_column=Column(String(30), unique=True, nullable=False, index=True),
        description="Username (unique)",
    )
    email: str = Field(
        sa_column=Column(String(255), unique=True, nullable=False, index=True),
        description="Email address (unique)",
    )
    password_hash: str | None = Field(
        default=None,
        sa_column=Column(String(255), nullable=True),
        description="Hashed password",
    )

    # Optional profile fields
    first_name: str | None = Field(
        default=None,
        sa_column=Column(String(50)),
        description="User first name",
    )
    last_name: str | None = Field(
        default=None,
        sa_column=Column(String(50)),
        description="User last name",
    )

    # Role-based access control
    role: Role = Field(
        default=Role.MEMBER,
        sa_column=Column(String(20), nullable=False, server_default=Role.MEMBER.value, index=True),
        description="User role (member, admin)",
    )
    is_active: bool = Field(
        default=True,
        nullable=False,
        description="Deactivated users cannot authenticate",
    )

    # Timestamps (timezone-aware)
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(tz=UTC),
        sa_column=Column(DateTime(timezone=True), nullable=False),
        description="Creation timestamp",
    )
    updated_at: datetime | None = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True)),
        description="Last update timestamp",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "uuid": "123e4567-e89b-12d3-a456-426614174000",
                "username": "johndoe",
                "email": "johndoe@gmail.com",
                "first_name": "John",
                "last_name": "Doe",
                "role": "member",
                "is_active": True,
            },
        },
    )

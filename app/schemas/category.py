"""Category request and response schemas."""

from datetime import datetime
from typing import Annotated
from uuid import UUID

from pydantic import Field, StringConstraints

from app.configs.settings import (
    CATEGORY_DESCRIPTION_MAX_LENGTH,
    CATEGORY_NAME_MAX_LENGTH,
    CATEGORY_NAME_MIN_LENGTH,
)
from app.schemas.common import CamelModel

CategoryName = Annotated[
    str,
    StringConstraints(
        strip_whitespace=True,
        min_length=CATEGORY_NAME_MIN_LENGTH,
        max_length=CATEGORY_NAME_MAX_LENGTH,
    ),
]
CategoryDescription = Annotated[
    str,
    StringConstraints(strip_whitespace=True, max_length=CATEGORY_DESCRIPTION_MAX_LENGTH),
]
HexColor = Annotated[str, StringConstraints(pattern=r"^#[0-9A-Fa-f]{6}$")]


class CategoryCreate(CamelModel):
    """Category creation payload."""

    name: CategoryName = Field(..., examples=["Technology"])
    description: CategoryDescription | None = Field(
        default=None,
        examples=["Posts about software and hardware"],
    )
    color: HexColor | None = Field(default=None, examples=["#3B82F6"])


class CategoryUpdate(CamelModel):
    """Category update payload. Only provided fields are written."""

    name: CategoryName | None = None
    description: CategoryDescription | None = None
    color: HexColor | None = None
    is_active: bool | None = None


class CategoryResponse(CamelModel):
    """Category as returned by the API."""

    id: UUID
    name: str
    slug: str
    description: str | None = None
    color: str | None = None
    is_active: bool
    created_at: datetime
    updated_at: datetime | None = None

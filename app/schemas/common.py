"""Response envelope shared by every endpoint."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema accepting snake_case or camelCase and emitting camelCase."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class Pagination(BaseModel):
    """Pagination metadata for list endpoints."""

    page: int
    limit: int
    total: int
    pages: int


class ApiResponse[DataT](BaseModel):
    """
    Uniform response envelope.

    `errors` carries field-level validation failures, `pagination` is set on
    list endpoints only. Absent keys are omitted from the wire format.
    """

    success: bool = True
    data: DataT | None = None
    message: str | None = None
    error: str | None = None
    errors: list[dict] | None = None
    pagination: Pagination | None = None


MessageEnvelope = ApiResponse[None]

from uuid import UUID

from pydantic import BaseModel

from app.schemas.common import CamelModel
from app.schemas.user import UserResponse


class TokenData(BaseModel):
    """Claims extracted from a verified access token."""

    user_id: UUID
    jti: str
    token_type: str


class AuthPayload(CamelModel):
    """Identity plus the credential issued for it."""

    user: UserResponse
    token: str
    token_type: str = "bearer"

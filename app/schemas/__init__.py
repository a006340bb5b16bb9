from app.schemas.auth import AuthPayload, TokenData
from app.schemas.category import CategoryCreate, CategoryResponse, CategoryUpdate
from app.schemas.common import ApiResponse, CamelModel, MessageEnvelope, Pagination
from app.schemas.post import (
    CategoryRef,
    CommentCreate,
    CommentResponse,
    PostCreate,
    PostResponse,
    PostUpdate,
)
from app.schemas.user import AuthorPublic, LoginRequest, UserCreate, UserResponse

__all__ = [
    "ApiResponse",
    "AuthPayload",
    "AuthorPublic",
    "CamelModel",
    "CategoryCreate",
    "CategoryRef",
    "CategoryResponse",
    "CategoryUpdate",
    "CommentCreate",
    "CommentResponse",
    "LoginRequest",
    "MessageEnvelope",
    "Pagination",
    "PostCreate",
    "PostResponse",
    "PostUpdate",
    "TokenData",
    "UserCreate",
    "UserResponse",
]

"""Repository layer for database operations."""

from app.repositories.base import BaseRepository, Expansion
from app.repositories.category import CategoryRepository
from app.repositories.post import PostRepository
from app.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "CategoryRepository",
    "Expansion",
    "PostRepository",
    "UserRepository",
]

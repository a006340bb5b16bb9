"""Database models for the application."""

from app.models.category import CategoryDB
from app.models.post import CommentDB, PostDB
from app.models.user import PUBLIC_USER_FIELDS, Role, UserDB

__all__ = ["PUBLIC_USER_FIELDS", "CategoryDB", "CommentDB", "PostDB", "Role", "UserDB"]

from app.services.auth import AuthService
from app.services.category import CategoryService
from app.services.post import PostService
from app.services.query import PostListing, PostListParams, compose_post_listing

__all__ = [
    "AuthService",
    "CategoryService",
    "PostListParams",
    "PostListing",
    "PostService",
    "compose_post_listing",
]

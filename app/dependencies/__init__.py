# app/dependencies/__init__.py

from app.dependencies.dependencies import (
    AuthServiceDep,
    CategoryRepoDep,
    CategoryServiceDep,
    CurrentUserDep,
    PostListParamsDep,
    PostRepoDep,
    PostServiceDep,
    SessionDep,
    UserRepoDep,
    get_auth_service,
    get_category_repository,
    get_category_service,
    get_current_user,
    get_post_list_params,
    get_post_repository,
    get_post_service,
    get_user_repository,
)

__all__ = [
    "AuthServiceDep",
    "CategoryRepoDep",
    "CategoryServiceDep",
    "CurrentUserDep",
    "PostListParamsDep",
    "PostRepoDep",
    "PostServiceDep",
    "SessionDep",
    "UserRepoDep",
    "get_auth_service",
    "get_category_repository",
    "get_category_service",
    "get_current_user",
    "get_post_list_params",
    "get_post_repository",
    "get_post_service",
    "get_user_repository",
]

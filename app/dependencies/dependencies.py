# app/dependencies/dependencies.py

"""Application dependencies: sessions, repositories, services and the identity gate."""

from typing import Annotated
from uuid import UUID

from fastapi import Cookie, Depends, Header, Query, Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.credentials import extract_credential, resolve_identity, verify_credential
from app.auth.identity import Identity
from app.configs import settings
from app.db import get_session
from app.errors.base import InternalError
from app.monitoring import get_logger, set_user_id
from app.repositories import CategoryRepository, PostRepository, UserRepository
from app.services import AuthService, CategoryService, PostService
from app.services.query import PostListParams

logger = get_logger(__name__)

SessionDep = Annotated[AsyncSession, Depends(get_session)]


def get_user_repository(session: SessionDep) -> UserRepository:
    """
    Resolve the `UserRepository` dependency.

    Parameters
    ----------
    session : AsyncSession
        Database session.

    Returns
    -------
    UserRepository
        Repository instance bound to the session.
    """
    return UserRepository(session)


def get_category_repository(session: SessionDep) -> CategoryRepository:
    return CategoryRepository(session)


def get_post_repository(session: SessionDep) -> PostRepository:
    return PostRepository(session)


UserRepoDep = Annotated[UserRepository, Depends(get_user_repository)]
CategoryRepoDep = Annotated[CategoryRepository, Depends(get_category_repository)]
PostRepoDep = Annotated[PostRepository, Depends(get_post_repository)]


async def get_current_user(
    request: Request,
    users: UserRepoDep,
    authorization: Annotated[str | None, Header()] = None,
    token: Annotated[str | None, Cookie(alias=settings.TOKEN_COOKIE_NAME)] = None,
) -> Identity:
    """
    Identity gate for protected routes.

    Parameters
    ----------
    request : Request
        Incoming request; the identity is stored on ``request.state``.
    users : UserRepository
        Repository used to resolve the credential's subject.
    authorization : str | None
        ``Authorization`` header, used when it carries a bearer token.
    token : str | None
        Credential cookie, used otherwise.

    Returns
    -------
    Identity
        The authenticated, active identity.

    Raises
    ------
    AuthenticationError
        Missing or invalid credential, or a deactivated account.
    InternalError
        The store could not be queried.
    """
    credential = extract_credential(authorization, token)
    user_id = verify_credential(credential)
    try:
        identity = await resolve_identity(users, user_id)
    except (SQLAlchemyError, OSError) as e:
        logger.exception("Identity lookup failed")
        raise InternalError from e

    request.state.identity = identity
    set_user_id(str(identity.id))
    return identity


CurrentUserDep = Annotated[Identity, Depends(get_current_user)]


def get_auth_service(users: UserRepoDep) -> AuthService:
    return AuthService(users)


def get_category_service(
    categories: CategoryRepoDep,
    posts: PostRepoDep,
) -> CategoryService:
    return CategoryService(categories, posts)


def get_post_service(posts: PostRepoDep, categories: CategoryRepoDep) -> PostService:
    return PostService(posts, categories)


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
CategoryServiceDep = Annotated[CategoryService, Depends(get_category_service)]
PostServiceDep = Annotated[PostService, Depends(get_post_service)]


def get_post_list_params(
    page: Annotated[int, Query(ge=1, description="Page number, starting at 1")] = 1,
    limit: Annotated[
        int,
        Query(
            ge=1,
            le=settings.MAX_PAGE_SIZE,
            description="Maximum number of posts to return",
        ),
    ] = settings.DEFAULT_PAGE_SIZE,
    category: Annotated[UUID | None, Query(description="Optional category ID filter")] = None,
    search: Annotated[
        str | None,
        Query(max_length=100, description="Case-insensitive search in title and content"),
    ] = None,
) -> PostListParams:
    """
    Dependency to construct `PostListParams` from query parameters.

    Returns
    -------
    PostListParams
        Aggregated query parameters object.
    """
    return PostListParams(page=page, limit=limit, category=category, search=search)


PostListParamsDep = Annotated[PostListParams, Depends(get_post_list_params)]

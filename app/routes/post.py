# app/routes/post.py

"""
Post Routes.

Listing with pagination, filtering and search; single-post reads with
comments; authenticated writes with ownership checks.

Summary
-------
Endpoints include:
  - List published posts (page, limit, category, search)
  - Get post by id (counts a view)
  - Create post
  - Update post (author or admin)
  - Delete post (author or admin)
  - Add comment

Rate Limiting
-------------
Tiered limits apply when `X-API-Key` is present, offering higher throughput
for identified clients.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Body, Request
from fastapi.responses import ORJSONResponse
from starlette.responses import Response
from starlette.status import HTTP_201_CREATED

from app.dependencies import CurrentUserDep, PostListParamsDep, PostServiceDep
from app.managers import limiter
from app.schemas import (
    ApiResponse,
    CommentCreate,
    MessageEnvelope,
    PostCreate,
    PostResponse,
    PostUpdate,
)

router = APIRouter(prefix="/posts", tags=["📝 Posts"])

PostEnvelope = ApiResponse[PostResponse]
PostListEnvelope = ApiResponse[list[PostResponse]]

POST_EXAMPLE = {
    "id": "550e8400-e29b-41d4-a716-446655440000",
    "title": "Getting Started with FastAPI",
    "slug": "getting-started-with-fastapi",
    "content": "FastAPI is a modern web framework...",
    "tags": ["python", "web"],
    "author": {
        "id": "123e4567-e89b-12d3-a456-426614174000",
        "username": "johndoe",
        "firstName": "John",
        "lastName": "Doe",
    },
    "category": {
        "id": "0f8fad5b-d9cb-469f-a165-70867728950e",
        "name": "Technology",
        "slug": "technology",
    },
    "isPublished": True,
    "viewCount": 3,
    "createdAt": "2025-01-01T00:00:00Z",
}
NOT_FOUND = {
    "description": "Not found",
    "content": {
        "application/json": {
            "example": {"success": False, "error": "Post not found", "code": "NotFound"},
        },
    },
}
UNAUTHORIZED = {
    "description": "Missing or invalid credential, or not the author",
    "content": {
        "application/json": {
            "example": {
                "success": False,
                "error": "Access denied. No token provided.",
                "code": "MissingCredential",
            },
        },
    },
}
CATEGORY_MISSING = {
    "description": "Validation failure or unknown category",
    "content": {
        "application/json": {
            "example": {
                "success": False,
                "error": "Category not found",
                "code": "CategoryNotFound",
            },
        },
    },
}
SINGLE_OK = {
    "content": {"application/json": {"example": {"success": True, "data": POST_EXAMPLE}}},
}
RATE_LIMITED = {
    "description": "Rate limit exceeded",
    "content": {
        "application/json": {
            "example": {"success": False, "error": "Rate limit exceeded"},
        },
    },
}


@router.get(
    "",
    response_class=ORJSONResponse,
    response_model=PostListEnvelope,
    response_model_exclude_none=True,
    summary="List published posts",
    description=(
        "Published posts, newest first, with author and category populated. "
        "Filter by category ID and search title/content case-insensitively."
    ),
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "success": True,
                        "data": [POST_EXAMPLE],
                        "pagination": {"page": 1, "limit": 10, "total": 1, "pages": 1},
                    },
                },
            },
        },
        429: RATE_LIMITED,
    },
    operation_id="posts_list",
)
@limiter.limit(lambda key: "120/minute" if "apikey" in key else "60/minute")
async def list_posts(
    request: Request,
    response: Response,
    params: PostListParamsDep,
    service: PostServiceDep,
) -> PostListEnvelope:
    """
    List published posts.

    Parameters
    ----------
    request : Request
        Current request context.
    response : Response
        Response object for middleware/decorators.
    params : PostListParams
        Page, limit and optional category and search narrowing.
    service : PostService
        Post service dependency.

    Returns
    -------
    ApiResponse[list[PostResponse]]
        One page of posts with pagination metadata.
    """
    documents, pagination = await service.list(params)
    return PostListEnvelope(
        data=[PostResponse.model_validate(doc) for doc in documents],
        pagination=pagination,
    )


@router.get(
    "/{post_id}",
    response_class=ORJSONResponse,
    response_model=PostEnvelope,
    response_model_exclude_none=True,
    summary="Get post by ID",
    description="Retrieve a post with its comments. Increments the view count.",
    responses={
        200: SINGLE_OK,
        404: NOT_FOUND,
        429: RATE_LIMITED,
    },
    operation_id="posts_get",
)
@limiter.limit(lambda key: "120/minute" if "apikey" in key else "60/minute")
async def get_post(
    request: Request,
    response: Response,
    post_id: UUID,
    service: PostServiceDep,
) -> PostEnvelope:
    """
    Get a post by ID and count the view.

    Raises
    ------
    NotFoundError
        If the post does not exist.
    """
    document = await service.get(post_id)
    return PostEnvelope(data=PostResponse.model_validate(document))


@router.post(
    "",
    response_class=ORJSONResponse,
    response_model=PostEnvelope,
    response_model_exclude_none=True,
    status_code=HTTP_201_CREATED,
    summary="Create a post",
    description="The authenticated identity becomes the author.",
    responses={400: CATEGORY_MISSING, 401: UNAUTHORIZED, 429: RATE_LIMITED},
    operation_id="posts_create",
)
@limiter.limit(lambda key: "30/minute" if "apikey" in key else "10/minute")
async def create_post(
    request: Request,
    response: Response,
    post: Annotated[
        PostCreate,
        Body(
            examples=[
                {
                    "title": "Getting Started with FastAPI",
                    "content": "FastAPI is a modern web framework...",
                    "category": "0f8fad5b-d9cb-469f-a165-70867728950e",
                    "tags": ["python", "web"],
                    "isPublished": True,
                },
            ],
        ),
    ],
    service: PostServiceDep,
    identity: CurrentUserDep,
) -> PostEnvelope:
    """
    Create a post.

    Parameters
    ----------
    request : Request
        Current request context.
    response : Response
        Response object for middleware/decorators.
    post : PostCreate
        Post input payload; carries no author.
    service : PostService
        Post service dependency.
    identity : Identity
        Authenticated identity, stamped as the author.

    Returns
    -------
    ApiResponse[PostResponse]
        The created post, populated.

    Raises
    ------
    CategoryNotFoundError
        If the category does not exist.
    DuplicateEntryError
        If a post with the same title exists.
    """
    document = await service.create(identity, post)
    return PostEnvelope(data=PostResponse.model_validate(document))


@router.put(
    "/{post_id}",
    response_class=ORJSONResponse,
    response_model=PostEnvelope,
    response_model_exclude_none=True,
    summary="Update a post",
    description="Only the author or an admin may update a post.",
    responses={400: CATEGORY_MISSING, 401: UNAUTHORIZED, 404: NOT_FOUND, 429: RATE_LIMITED},
    operation_id="posts_update",
)
@limiter.limit(lambda key: "30/minute" if "apikey" in key else "10/minute")
async def update_post(
    request: Request,
    response: Response,
    post_id: UUID,
    post: PostUpdate,
    service: PostServiceDep,
    identity: CurrentUserDep,
) -> PostEnvelope:
    """Update a post's provided fields."""
    document = await service.update(identity, post_id, post)
    return PostEnvelope(data=PostResponse.model_validate(document))


@router.delete(
    "/{post_id}",
    response_class=ORJSONResponse,
    response_model=MessageEnvelope,
    response_model_exclude_none=True,
    summary="Delete a post",
    description="Only the author or an admin may delete a post.",
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {"success": True, "message": "Post deleted successfully"},
                },
            },
        },
        401: UNAUTHORIZED,
        404: NOT_FOUND,
        429: RATE_LIMITED,
    },
    operation_id="posts_delete",
)
@limiter.limit(lambda key: "30/minute" if "apikey" in key else "10/minute")
async def delete_post(
    request: Request,
    response: Response,
    post_id: UUID,
    service: PostServiceDep,
    identity: CurrentUserDep,
) -> MessageEnvelope:
    await service.delete(identity, post_id)
    return MessageEnvelope(message="Post deleted successfully")


@router.post(
    "/{post_id}/comments",
    response_class=ORJSONResponse,
    response_model=PostEnvelope,
    response_model_exclude_none=True,
    summary="Comment on a post",
    description="Any authenticated identity may comment. Returns the post with all comments.",
    responses={401: UNAUTHORIZED, 404: NOT_FOUND, 429: RATE_LIMITED},
    operation_id="posts_add_comment",
)
@limiter.limit(lambda key: "30/minute" if "apikey" in key else "10/minute")
async def add_comment(
    request: Request,
    response: Response,
    post_id: UUID,
    comment: Annotated[CommentCreate, Body(examples=[{"content": "Great write-up, thanks!"}])],
    service: PostServiceDep,
    identity: CurrentUserDep,
) -> PostEnvelope:
    """
    Add a comment by the authenticated identity.

    Returns
    -------
    ApiResponse[PostResponse]
        The post with author, category and every comment's author populated.
    """
    document = await service.add_comment(identity, post_id, comment)
    return PostEnvelope(data=PostResponse.model_validate(document))

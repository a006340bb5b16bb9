# app/routes/category.py

"""
Category Routes.

Public listing and lookup of categories, plus admin-only writes.

Summary
-------
Endpoints include:
  - List active categories
  - Get category by id
  - Create category (admin)
  - Update category (admin)
  - Delete category (admin, refused while posts reference it)
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Body, Request
from fastapi.responses import ORJSONResponse
from starlette.responses import Response
from starlette.status import HTTP_201_CREATED

from app.dependencies import CategoryServiceDep, CurrentUserDep
from app.managers import limiter
from app.schemas import (
    ApiResponse,
    CategoryCreate,
    CategoryResponse,
    CategoryUpdate,
    MessageEnvelope,
)

router = APIRouter(prefix="/categories", tags=["🗂️ Categories"])

CategoryEnvelope = ApiResponse[CategoryResponse]
CategoryListEnvelope = ApiResponse[list[CategoryResponse]]

CATEGORY_EXAMPLE = {
    "id": "0f8fad5b-d9cb-469f-a165-70867728950e",
    "name": "Technology",
    "slug": "technology",
    "description": "Posts about software and hardware",
    "color": "#3B82F6",
    "isActive": True,
    "createdAt": "2025-01-01T00:00:00Z",
}
FORBIDDEN = {
    "description": "Admin privileges required",
    "content": {
        "application/json": {
            "example": {
                "success": False,
                "error": "Access denied. Admin privileges required.",
                "code": "InsufficientRole",
            },
        },
    },
}
NOT_FOUND = {
    "description": "Not found",
    "content": {
        "application/json": {
            "example": {"success": False, "error": "Category not found", "code": "NotFound"},
        },
    },
}
LIST_OK = {
    "content": {"application/json": {"example": {"success": True, "data": [CATEGORY_EXAMPLE]}}},
}
SINGLE_OK = {
    "content": {"application/json": {"example": {"success": True, "data": CATEGORY_EXAMPLE}}},
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
    response_model=CategoryListEnvelope,
    response_model_exclude_none=True,
    summary="List categories",
    description="Active categories ordered by name.",
    responses={
        200: LIST_OK,
        429: RATE_LIMITED,
    },
    operation_id="categories_list",
)
@limiter.limit(lambda key: "120/minute" if "apikey" in key else "60/minute")
async def list_categories(
    request: Request,
    response: Response,
    service: CategoryServiceDep,
) -> CategoryListEnvelope:
    """
    List active categories.

    Parameters
    ----------
    request : Request
        Current request context.
    response : Response
        Response object for middleware/decorators.
    service : CategoryService
        Category service dependency.

    Returns
    -------
    CategoryListEnvelope
        Active categories, ordered by name.
    """
    categories = await service.list_active()
    return CategoryListEnvelope(data=[CategoryResponse.model_validate(c) for c in categories])


@router.get(
    "/{category_id}",
    response_class=ORJSONResponse,
    response_model=CategoryEnvelope,
    response_model_exclude_none=True,
    summary="Get category by ID",
    responses={
        200: SINGLE_OK,
        404: NOT_FOUND,
        429: RATE_LIMITED,
    },
    operation_id="categories_get",
)
@limiter.limit(lambda key: "120/minute" if "apikey" in key else "60/minute")
async def get_category(
    request: Request,
    response: Response,
    category_id: UUID,
    service: CategoryServiceDep,
) -> CategoryEnvelope:
    """
    Get a category by ID.

    Raises
    ------
    NotFoundError
        If the category does not exist.
    """
    category = await service.get(category_id)
    return CategoryEnvelope(data=CategoryResponse.model_validate(category))


@router.post(
    "",
    response_class=ORJSONResponse,
    response_model=CategoryEnvelope,
    response_model_exclude_none=True,
    status_code=HTTP_201_CREATED,
    summary="Create a category",
    description="Admin only. Names are unique.",
    responses={
        201: SINGLE_OK,
        400: {
            "description": "Duplicate name",
            "content": {
                "application/json": {
                    "example": {
                        "success": False,
                        "error": "A category with this name already exists",
                        "code": "DuplicateName",
                    },
                },
            },
        },
        403: FORBIDDEN,
        429: RATE_LIMITED,
    },
    operation_id="categories_create",
)
@limiter.limit(lambda key: "30/minute" if "apikey" in key else "10/minute")
async def create_category(
    request: Request,
    response: Response,
    category: Annotated[
        CategoryCreate,
        Body(
            examples=[
                {
                    "name": "Technology",
                    "description": "Posts about software and hardware",
                    "color": "#3B82F6",
                },
            ],
        ),
    ],
    service: CategoryServiceDep,
    identity: CurrentUserDep,
) -> CategoryEnvelope:
    """
    Create a category.

    Parameters
    ----------
    request : Request
        Current request context.
    response : Response
        Response object for middleware/decorators.
    category : CategoryCreate
        Category input payload.
    service : CategoryService
        Category service dependency.
    identity : Identity
        Authenticated identity; must be an admin.

    Returns
    -------
    CategoryEnvelope
        The created category.
    """
    created = await service.create(identity, category)
    return CategoryEnvelope(data=CategoryResponse.model_validate(created))


@router.put(
    "/{category_id}",
    response_class=ORJSONResponse,
    response_model=CategoryEnvelope,
    response_model_exclude_none=True,
    summary="Update a category",
    description="Admin only. Only provided fields are changed.",
    responses={403: FORBIDDEN, 404: NOT_FOUND, 429: RATE_LIMITED},
    operation_id="categories_update",
)
@limiter.limit(lambda key: "30/minute" if "apikey" in key else "10/minute")
async def update_category(
    request: Request,
    response: Response,
    category_id: UUID,
    category: CategoryUpdate,
    service: CategoryServiceDep,
    identity: CurrentUserDep,
) -> CategoryEnvelope:
    """Update a category's provided fields."""
    updated = await service.update(identity, category_id, category)
    return CategoryEnvelope(data=CategoryResponse.model_validate(updated))


@router.delete(
    "/{category_id}",
    response_class=ORJSONResponse,
    response_model=MessageEnvelope,
    response_model_exclude_none=True,
    summary="Delete a category",
    description="Admin only. Refused while any post references the category.",
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {"success": True, "message": "Category deleted successfully"},
                },
            },
        },
        400: {
            "description": "Category has posts",
            "content": {
                "application/json": {
                    "example": {
                        "success": False,
                        "error": (
                            "Cannot delete category that has posts. "
                            "Please reassign or delete the posts first."
                        ),
                        "code": "HasDependents",
                    },
                },
            },
        },
        403: FORBIDDEN,
        404: NOT_FOUND,
        429: RATE_LIMITED,
    },
    operation_id="categories_delete",
)
@limiter.limit(lambda key: "30/minute" if "apikey" in key else "10/minute")
async def delete_category(
    request: Request,
    response: Response,
    category_id: UUID,
    service: CategoryServiceDep,
    identity: CurrentUserDep,
) -> MessageEnvelope:
    """
    Delete a category.

    Raises
    ------
    DependencyError
        If posts still reference the category.
    """
    await service.delete(identity, category_id)
    return MessageEnvelope(message="Category deleted successfully")

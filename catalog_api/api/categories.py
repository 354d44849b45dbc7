"""Category API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_api.api.schemas import CategoryRequest, CategoryResponse, ErrorResponse
from catalog_api.application.category_service import (
    CATEGORY_NOT_FOUND,
    CategoryResult,
    CategoryService,
    get_category_service,
)
from catalog_api.infrastructure.database import get_session

router = APIRouter(prefix="/categories", tags=["Categories"])


def get_service(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> CategoryService:
    """Get category service for the request's session."""
    return get_category_service(session)


def raise_for_failure(result: CategoryResult) -> None:
    """Raise the HTTP error matching a failed service result."""
    status_code = (
        status.HTTP_404_NOT_FOUND
        if result.error_code == CATEGORY_NOT_FOUND
        else status.HTTP_400_BAD_REQUEST
    )
    raise HTTPException(
        status_code=status_code,
        detail={
            "error_code": result.error_code,
            "message": result.error,
            "errors": result.errors or None,
        },
    )


def not_found(category_id: int) -> HTTPException:
    """Build the 404 error for a missing category."""
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail={
            "error_code": CATEGORY_NOT_FOUND,
            "message": f"Category not found: {category_id}",
        },
    )


# ============================================================================
# Endpoints
# ============================================================================


@router.get(
    "",
    response_model=list[CategoryResponse],
    summary="List categories",
    description="Get all categories sorted by name.",
)
async def list_categories(
    service: Annotated[CategoryService, Depends(get_service)],
) -> list[CategoryResponse]:
    """List all categories."""
    categories = await service.get_all()
    return [CategoryResponse(id=c.id, name=c.name) for c in categories]


@router.get(
    "/{category_id}",
    response_model=CategoryResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get category",
)
async def get_category(
    category_id: int,
    service: Annotated[CategoryService, Depends(get_service)],
) -> CategoryResponse:
    """Get a category by ID."""
    category = await service.get_by_id(category_id)
    if category is None:
        raise not_found(category_id)
    return CategoryResponse(id=category.id, name=category.name)


@router.post(
    "",
    response_model=CategoryResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
    summary="Create category",
)
async def create_category(
    body: CategoryRequest,
    service: Annotated[CategoryService, Depends(get_service)],
) -> CategoryResponse:
    """Create a category."""
    result = await service.create(body.name)
    if not result.success or result.category is None:
        raise_for_failure(result)
    return CategoryResponse(id=result.category.id, name=result.category.name)


@router.put(
    "/{category_id}",
    response_model=CategoryResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
    summary="Rename category",
)
async def update_category(
    category_id: int,
    body: CategoryRequest,
    service: Annotated[CategoryService, Depends(get_service)],
) -> CategoryResponse:
    """Rename a category."""
    result = await service.update(category_id, body.name)
    if not result.success or result.category is None:
        raise_for_failure(result)
    return CategoryResponse(id=result.category.id, name=result.category.name)


@router.delete(
    "/{category_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={404: {"model": ErrorResponse}},
    summary="Delete category",
    description="Delete a category. Products stay; only their link to it is removed.",
)
async def delete_category(
    category_id: int,
    service: Annotated[CategoryService, Depends(get_service)],
) -> Response:
    """Delete a category."""
    if not await service.delete(category_id):
        raise not_found(category_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

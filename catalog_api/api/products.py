"""Product API endpoints.

Provides endpoints for product management:
- GET /products - list products (paginated, name search)
- GET /products/{id} - product details
- POST /products - create a product
- PUT /products/{id} - replace a product
- DELETE /products/{id} - delete a product
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_api.api.schemas import (
    CategoryResponse,
    ErrorResponse,
    ProductRequest,
    ProductResponse,
    ProductsPageResponse,
)
from catalog_api.application.product_service import (
    PRODUCT_NOT_FOUND,
    ProductResult,
    ProductService,
    get_product_service,
)
from catalog_api.domain.dto import ProductData, ProductDTO
from catalog_api.infrastructure.database import get_session

router = APIRouter(prefix="/products", tags=["Products"])

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


# ============================================================================
# Dependencies
# ============================================================================


def get_service(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> ProductService:
    """Get product service for the request's session."""
    return get_product_service(session)


# ============================================================================
# Converters
# ============================================================================


def product_to_response(product: ProductDTO) -> ProductResponse:
    """Convert ProductDTO to ProductResponse."""
    return ProductResponse(
        id=product.id,
        name=product.name,
        description=product.description,
        price=product.price,
        stock_quantity=product.stock_quantity,
        categories=[CategoryResponse(id=c.id, name=c.name) for c in product.categories],
        created_at=product.created_at,
        updated_at=product.updated_at,
    )


def request_to_data(request: ProductRequest) -> ProductData:
    """Convert ProductRequest to ProductData."""
    return ProductData(
        name=request.name,
        description=request.description,
        price=request.price,
        stock_quantity=request.stock_quantity,
        category_ids=list(request.category_ids),
    )


def raise_for_failure(result: ProductResult) -> None:
    """Raise the HTTP error matching a failed service result."""
    status_code = (
        status.HTTP_404_NOT_FOUND
        if result.error_code == PRODUCT_NOT_FOUND
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


def not_found(product_id: int) -> HTTPException:
    """Build the 404 error for a missing product."""
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail={
            "error_code": PRODUCT_NOT_FOUND,
            "message": f"Product not found: {product_id}",
        },
    )


# ============================================================================
# Endpoints
# ============================================================================


@router.get(
    "",
    response_model=ProductsPageResponse,
    summary="List products",
    description="Get a paginated list of products, optionally filtered by name.",
)
async def list_products(
    service: Annotated[ProductService, Depends(get_service)],
    page: int = Query(default=1, description="Page number (1-based)"),
    page_size: int = Query(
        default=DEFAULT_PAGE_SIZE,
        alias="pageSize",
        description=f"Items per page (1-{MAX_PAGE_SIZE})",
    ),
    search: str | None = Query(
        default=None,
        description="Case-insensitive text to look for in product names",
    ),
) -> ProductsPageResponse:
    """List products with pagination and name search.

    Out-of-range paging values are clamped rather than rejected.

    Args:
        service: Product service.
        page: Page number (1-based).
        page_size: Items per page.
        search: Name filter.

    Returns:
        Paginated list of products.
    """
    page = max(1, page)
    page_size = min(max(1, page_size), MAX_PAGE_SIZE)

    result = await service.get_paged(page, page_size, search)

    return ProductsPageResponse(
        items=[product_to_response(p) for p in result.items],
        total_count=result.total_count,
        page=result.page,
        page_size=result.page_size,
        total_pages=result.total_pages,
        has_next=result.has_next,
        has_previous=result.has_previous,
    )


@router.get(
    "/{product_id}",
    response_model=ProductResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get product",
)
async def get_product(
    product_id: int,
    service: Annotated[ProductService, Depends(get_service)],
) -> ProductResponse:
    """Get a product by ID.

    Raises:
        HTTPException: If product not found.
    """
    product = await service.get_by_id(product_id)
    if product is None:
        raise not_found(product_id)
    return product_to_response(product)


@router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
    summary="Create product",
    description="Create a product and link it to existing categories.",
)
async def create_product(
    body: ProductRequest,
    request: Request,
    response: Response,
    service: Annotated[ProductService, Depends(get_service)],
) -> ProductResponse:
    """Create a product.

    Args:
        body: Product fields and category IDs.
        request: Incoming request, used to build the Location header.
        response: Outgoing response.
        service: Product service.

    Returns:
        The created product with its categories.

    Raises:
        HTTPException: If fields or category IDs are invalid.
    """
    result = await service.create(request_to_data(body))
    if not result.success or result.product is None:
        raise_for_failure(result)

    response.headers["Location"] = str(
        request.url_for("get_product", product_id=result.product.id)
    )
    return product_to_response(result.product)


@router.put(
    "/{product_id}",
    response_model=ProductResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
    summary="Replace product",
    description="Overwrite all product fields and the full category set.",
)
async def update_product(
    product_id: int,
    body: ProductRequest,
    service: Annotated[ProductService, Depends(get_service)],
) -> ProductResponse:
    """Replace a product.

    Raises:
        HTTPException: If the product is missing (404) or input is invalid (400).
    """
    result = await service.update(product_id, request_to_data(body))
    if not result.success or result.product is None:
        raise_for_failure(result)
    return product_to_response(result.product)


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={404: {"model": ErrorResponse}},
    summary="Delete product",
)
async def delete_product(
    product_id: int,
    service: Annotated[ProductService, Depends(get_service)],
) -> Response:
    """Delete a product and its category links.

    Raises:
        HTTPException: If product not found.
    """
    if not await service.delete(product_id):
        raise not_found(product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

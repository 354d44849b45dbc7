"""API schemas for the Catalog API.

Pydantic models for request/response validation and serialization.
JSON field names are camelCase; snake_case is accepted on input too.
"""

from datetime import datetime
from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, StringConstraints
from pydantic.alias_generators import to_camel

# Prices travel as JSON numbers, not strings
Price = Annotated[
    Decimal,
    PlainSerializer(lambda v: float(v), return_type=float, when_used="json"),
]


class CamelModel(BaseModel):
    """Base model with camelCase aliases."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


# ============================================================================
# Common Schemas
# ============================================================================


class ErrorResponse(CamelModel):
    """Standard error response.

    All API errors follow this format for consistency.
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    errors: dict[str, list[str]] | None = Field(
        default=None, description="Field name to validation messages"
    )
    request_id: str | None = Field(
        default=None, description="Request ID for correlation"
    )


class PaginatedResponse(CamelModel):
    """Base paginated response."""

    total_count: int = Field(..., description="Total number of matching items")
    page: int = Field(..., description="Current page number (1-based)")
    page_size: int = Field(..., description="Items per page")
    total_pages: int = Field(..., description="Number of pages")
    has_next: bool = Field(..., description="Whether a next page exists")
    has_previous: bool = Field(..., description="Whether a previous page exists")


# ============================================================================
# Category Schemas
# ============================================================================


class CategoryRequest(CamelModel):
    """Request to create or rename a category."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Category name",
    )


class CategoryResponse(CamelModel):
    """A category."""

    id: int = Field(..., description="Category identifier")
    name: str = Field(..., description="Category name")


# ============================================================================
# Product Schemas
# ============================================================================


class ProductRequest(CamelModel):
    """Request to create a product or replace one in full.

    On update every field is overwritten, including the category set.
    """

    # Only the name is trimmed; the description is stored as sent
    name: Annotated[
        str,
        StringConstraints(strip_whitespace=True, min_length=1, max_length=200),
    ] = Field(..., description="Product name")
    description: str | None = Field(default=None, description="Product description")
    price: Decimal = Field(
        ...,
        gt=0,
        max_digits=18,
        decimal_places=2,
        description="Unit price",
    )
    stock_quantity: int = Field(..., ge=0, description="Units in stock")
    category_ids: list[int] = Field(
        default_factory=list,
        description="IDs of the categories this product belongs to",
    )


class ProductResponse(CamelModel):
    """A product with its resolved categories."""

    id: int = Field(..., description="Product identifier")
    name: str = Field(..., description="Product name")
    description: str | None = Field(default=None, description="Product description")
    price: Price = Field(..., description="Unit price")
    stock_quantity: int = Field(..., description="Units in stock")
    categories: list[CategoryResponse] = Field(
        default_factory=list, description="Associated categories"
    )
    created_at: datetime | None = Field(default=None, description="When the product was created")
    updated_at: datetime | None = Field(default=None, description="When the product was last updated")


class ProductsPageResponse(PaginatedResponse):
    """Paginated list of products."""

    items: list[ProductResponse] = Field(..., description="Products on this page")

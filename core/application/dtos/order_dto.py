"""Application DTOs for Order operations.

Field names are snake_case in Python and camelCase on the wire
(`productId`, `totalAmount`, ...). Monetary values are Decimal internally
and serialize to JSON numbers.
"""

from datetime import datetime
from decimal import Decimal
from typing import Annotated, List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel

from core.domain.enums import OrderStatus


Amount = Annotated[
    Decimal,
    PlainSerializer(float, return_type=float, when_used="json"),
]


class CamelModel(BaseModel):
    """Base model accepting both snake_case and camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


# =============================================================================
# REQUESTS
# =============================================================================

class CreateOrderItemRequest(CamelModel):
    """Requested line item."""

    product_id: int = Field(..., description="Catalog product id")
    quantity: int = Field(..., gt=0, description="Quantity ordered")
    price: Optional[Amount] = Field(
        None,
        ge=0,
        description="Client-side price; accepted but never used for totals",
    )


class CreateOrderRequest(CamelModel):
    """Request DTO for creating an order."""

    items: List[CreateOrderItemRequest] = Field(..., min_length=1, description="Order items")


class OrderPaginationRequest(CamelModel):
    """Request DTO for listing orders."""

    page: int = Field(default=1, ge=1, le=1_000_000, description="1-based page number")
    limit: int = Field(default=10, ge=1, le=100, description="Page size")
    status: Optional[OrderStatus] = Field(None, description="Status filter")


class FindOneOrderRequest(CamelModel):
    """Request DTO for a single order lookup."""

    id: UUID = Field(..., description="Order id")


class ChangeOrderStatusRequest(CamelModel):
    """Request DTO for a status transition."""

    id: UUID = Field(..., description="Order id")
    status: OrderStatus = Field(..., description="Target status")


# =============================================================================
# CATALOG
# =============================================================================

class ProductDTO(CamelModel):
    """Catalog record returned by the product service. Extra fields are ignored."""

    id: int
    name: str
    price: Amount


# =============================================================================
# RESPONSES
# =============================================================================

class OrderItemDTO(CamelModel):
    """Persisted line item, optionally enriched with the product name."""

    product_id: int
    quantity: int
    price: Amount
    name: Optional[str] = Field(None, description="Current catalog name")


class OrderSummaryDTO(CamelModel):
    """Order header without items."""

    id: UUID
    status: OrderStatus
    total_amount: Amount
    total_items: int
    created_at: datetime
    updated_at: datetime


class OrderDTO(OrderSummaryDTO):
    """Order header with its items."""

    items: List[OrderItemDTO] = Field(default_factory=list)


class PaginationMetaDTO(CamelModel):
    """Pagination metadata."""

    total: int = Field(..., ge=0)
    page: int = Field(..., ge=1)
    total_pages: int = Field(..., ge=0)


class PaginatedOrdersDTO(CamelModel):
    """One page of orders plus metadata."""

    data: List[OrderSummaryDTO] = Field(default_factory=list)
    meta: PaginationMetaDTO

"""Application DTOs."""

from .order_dto import (
    ChangeOrderStatusRequest,
    CreateOrderItemRequest,
    CreateOrderRequest,
    FindOneOrderRequest,
    OrderDTO,
    OrderItemDTO,
    OrderPaginationRequest,
    OrderSummaryDTO,
    PaginatedOrdersDTO,
    PaginationMetaDTO,
    ProductDTO,
)

__all__ = [
    "ChangeOrderStatusRequest",
    "CreateOrderItemRequest",
    "CreateOrderRequest",
    "FindOneOrderRequest",
    "OrderDTO",
    "OrderItemDTO",
    "OrderPaginationRequest",
    "OrderSummaryDTO",
    "PaginatedOrdersDTO",
    "PaginationMetaDTO",
    "ProductDTO",
]

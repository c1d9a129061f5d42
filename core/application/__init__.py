"""Application layer - services, interfaces, and DTOs."""

from .dtos import (
    ChangeOrderStatusRequest,
    CreateOrderRequest,
    OrderDTO,
    OrderItemDTO,
    OrderPaginationRequest,
    OrderSummaryDTO,
    PaginatedOrdersDTO,
    ProductDTO,
)
from .interfaces import IProductClient
from .services import OrderApplicationService

__all__ = [
    # DTOs
    "ChangeOrderStatusRequest",
    "CreateOrderRequest",
    "OrderDTO",
    "OrderItemDTO",
    "OrderPaginationRequest",
    "OrderSummaryDTO",
    "PaginatedOrdersDTO",
    "ProductDTO",
    # Services
    "OrderApplicationService",
    # Interfaces
    "IProductClient",
]

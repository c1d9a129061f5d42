"""Domain layer - pure domain models and interfaces."""

from .entities import Order, OrderItem
from .enums import OrderStatus
from .exceptions import (
    DependencyFailure,
    NotFound,
    OrderCreationFailed,
    OrderServiceError,
    PersistenceFailure,
    ValidationFailure,
)
from .repositories import OrderRepository
from .value_objects import ExecutionID

__all__ = [
    "DependencyFailure",
    "ExecutionID",
    "NotFound",
    "Order",
    "OrderCreationFailed",
    "OrderItem",
    "OrderRepository",
    "OrderServiceError",
    "OrderStatus",
    "PersistenceFailure",
    "ValidationFailure",
]

"""Domain enums."""
from .order_status import DEFAULT_ORDER_STATUS, OrderStatus

__all__ = ["DEFAULT_ORDER_STATUS", "OrderStatus"]

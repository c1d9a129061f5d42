"""
Order Status Enum.

Lifecycle states of a persisted order.
"""
from enum import Enum


class OrderStatus(str, Enum):
    """Order status values."""

    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


DEFAULT_ORDER_STATUS = OrderStatus.PENDING

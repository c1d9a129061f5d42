"""
Order aggregate root.

CRITICAL: This file must contain ZERO imports from:
- sqlalchemy
- pydantic
- fastapi
"""
from dataclasses import dataclass, field
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional
from uuid import UUID

from ..enums import DEFAULT_ORDER_STATUS, OrderStatus

# Scale of stored money columns
MONEY_QUANTUM = Decimal("0.01")


def to_money(value) -> Decimal:
    """Round an amount to the stored money scale (half up)."""
    return Decimal(str(value)).quantize(MONEY_QUANTUM, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class OrderItem:
    """
    Line item within an order.

    `price` is the unit price captured from the catalog when the order was
    placed, not a live reference.
    """
    product_id: int
    quantity: int
    price: Decimal

    def __post_init__(self):
        if not isinstance(self.price, Decimal):
            object.__setattr__(self, "price", Decimal(str(self.price)))

    @property
    def subtotal(self) -> Decimal:
        """Quantity times the captured unit price."""
        return self.price * self.quantity


@dataclass
class Order:
    """
    Order aggregate root.

    Totals are derived once, when the order is placed, and are never
    recomputed afterwards even if catalog prices change.
    """
    total_amount: Decimal
    total_items: int
    items: List[OrderItem] = field(default_factory=list)
    status: OrderStatus = DEFAULT_ORDER_STATUS

    # Assigned by the store
    id: Optional[UUID] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def place(cls, items: List[OrderItem]) -> "Order":
        """
        Factory method for a new, not yet persisted order.

        Args:
            items: Line items carrying catalog prices

        Returns:
            Order with totals computed from the items

        Raises:
            ValueError: If there are no items or a quantity is not positive
        """
        if not items:
            raise ValueError("Order must contain at least one item")

        for item in items:
            if item.quantity <= 0:
                raise ValueError(
                    f"Quantity must be positive for product {item.product_id}, got: {item.quantity}"
                )

        total_amount = sum((item.subtotal for item in items), Decimal("0"))
        total_items = sum(item.quantity for item in items)

        return cls(
            total_amount=total_amount,
            total_items=total_items,
            items=list(items),
        )

    @property
    def product_ids(self) -> List[int]:
        """Distinct product ids of the items, in first-seen order."""
        return list(dict.fromkeys(item.product_id for item in self.items))

    @property
    def is_persisted(self) -> bool:
        return self.id is not None

"""
In-memory Order Repository Implementation.

Dictionary-backed store for tests and local runs without a database.
"""
import logging
from dataclasses import replace
from datetime import datetime, timezone
from typing import Dict, List, Optional
from uuid import UUID, uuid4

from core.domain.entities.order import Order
from core.domain.enums import OrderStatus
from core.domain.repositories.order_repository import OrderRepository


logger = logging.getLogger(__name__)


class InMemoryOrderRepository(OrderRepository):
    """
    In-memory implementation of OrderRepository.

    Stores copies of orders keyed by id, so callers never share state with
    the store. Listing keeps insertion order for equal timestamps.
    """

    def __init__(self):
        """Initialize empty storage."""
        self._storage: Dict[UUID, Order] = {}
        self.connected = False

    async def connect(self) -> None:
        self.connected = True
        logger.info("InMemoryOrderRepository connected (in-memory storage)")

    async def disconnect(self) -> None:
        self.connected = False

    async def ping(self) -> bool:
        return self.connected

    async def create(self, order: Order) -> Order:
        now = datetime.now(timezone.utc)
        saved = replace(
            order,
            id=uuid4(),
            items=list(order.items),
            created_at=now,
            updated_at=now,
        )
        self._storage[saved.id] = saved
        logger.info(f"✅ Order saved to in-memory repository: {saved.id}")
        return replace(saved, items=list(saved.items))

    async def find_by_id(self, order_id: UUID) -> Optional[Order]:
        order = self._storage.get(order_id)
        if order is None:
            logger.info(f"Order not found in in-memory repository: {order_id}")
            return None
        return replace(order, items=list(order.items))

    async def count(self, status: Optional[OrderStatus] = None) -> int:
        return len(self._filter(status))

    async def find_many(
        self,
        status: Optional[OrderStatus] = None,
        offset: int = 0,
        limit: int = 10,
    ) -> List[Order]:
        orders = sorted(self._filter(status), key=lambda o: o.created_at)
        return [replace(order, items=[]) for order in orders[offset:offset + limit]]

    async def update_status(self, order_id: UUID, status: OrderStatus) -> Optional[Order]:
        order = self._storage.get(order_id)
        if order is None:
            return None

        updated = replace(order, status=status, updated_at=datetime.now(timezone.utc))
        self._storage[order_id] = updated
        return replace(updated, items=[])

    def _filter(self, status: Optional[OrderStatus]) -> List[Order]:
        if status is None:
            return list(self._storage.values())
        return [order for order in self._storage.values() if order.status == status]

    def clear(self) -> None:
        """Clear all orders (for testing)."""
        self._storage.clear()

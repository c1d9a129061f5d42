"""Repository interfaces for Order aggregate."""

from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from ..entities.order import Order
from ..enums import OrderStatus


class OrderRepository(ABC):
    """
    Abstract store for Order aggregate persistence.

    Implementations own their connection lifecycle: callers must await
    `connect()` before use and `disconnect()` on shutdown.
    """

    @abstractmethod
    async def connect(self) -> None:
        """Open the underlying connection pool."""
        pass

    @abstractmethod
    async def disconnect(self) -> None:
        """Release the underlying connection pool."""
        pass

    @abstractmethod
    async def ping(self) -> bool:
        """Return True when the store answers a trivial query."""
        pass

    @abstractmethod
    async def create(self, order: Order) -> Order:
        """Persist an order header and all its items in one transaction.

        Either the order and every item are stored, or nothing is.

        Args:
            order: Unsaved Order aggregate

        Returns:
            Persisted Order with id, status and timestamps assigned
        """
        pass

    @abstractmethod
    async def find_by_id(self, order_id: UUID) -> Optional[Order]:
        """Retrieve an order with its items.

        Args:
            order_id: Order UUID

        Returns:
            Order if found, None otherwise
        """
        pass

    @abstractmethod
    async def count(self, status: Optional[OrderStatus] = None) -> int:
        """Count orders, optionally filtered by status."""
        pass

    @abstractmethod
    async def find_many(
        self,
        status: Optional[OrderStatus] = None,
        offset: int = 0,
        limit: int = 10,
    ) -> List[Order]:
        """List order headers (without items) for one page.

        Args:
            status: Optional status filter
            offset: Number of orders to skip
            limit: Maximum number of orders to return

        Returns:
            Orders ordered by creation time
        """
        pass

    @abstractmethod
    async def update_status(self, order_id: UUID, status: OrderStatus) -> Optional[Order]:
        """Set the status of one order.

        Args:
            order_id: Order UUID
            status: New status

        Returns:
            Updated order header, or None when no row matched (nothing written)
        """
        pass

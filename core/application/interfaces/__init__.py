"""Application layer interfaces."""
from abc import ABC, abstractmethod
from typing import Iterable, List

from core.application.dtos import ProductDTO


class IProductClient(ABC):
    """
    Interface for the product catalog service.

    The catalog is authoritative for current names and prices; nothing
    returned here is cached.
    """

    @abstractmethod
    async def validate_products(self, product_ids: Iterable[int]) -> List[ProductDTO]:
        """
        Resolve product ids to their current catalog records.

        Only existing products are returned, so a result shorter than the
        request means some products are missing.

        Args:
            product_ids: Product ids to resolve (duplicates allowed)

        Returns:
            Matching catalog records

        Raises:
            DependencyFailure: If the catalog cannot be reached or answers
                with an error or an unreadable reply
        """
        pass

    async def connect(self) -> None:
        """Open transport resources. No-op by default."""
        pass

    async def disconnect(self) -> None:
        """Release transport resources. No-op by default."""
        pass


__all__ = ["IProductClient"]

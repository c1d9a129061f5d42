"""Application service for Order operations."""

import logging
import math
from typing import Dict, List, Optional
from uuid import UUID

from core.application.dtos.order_dto import (
    ChangeOrderStatusRequest,
    CreateOrderRequest,
    OrderDTO,
    OrderItemDTO,
    OrderPaginationRequest,
    OrderSummaryDTO,
    PaginatedOrdersDTO,
    PaginationMetaDTO,
    ProductDTO,
)
from core.application.interfaces import IProductClient
from core.domain.entities.order import Order, OrderItem, to_money
from core.domain.exceptions import DependencyFailure, NotFound, OrderCreationFailed
from core.domain.repositories import OrderRepository
from core.domain.value_objects import ExecutionID


logger = logging.getLogger(__name__)


class OrderApplicationService:
    """
    Application service for orchestrating order operations.

    Responsibilities:
    - Validate line items against the product catalog
    - Derive order totals from catalog prices
    - Persist orders through the injected store
    - Enrich items with current product names on the way out
    """

    def __init__(self, repository: OrderRepository, product_client: IProductClient) -> None:
        """Initialize order application service.

        Args:
            repository: Order store (already connected by the caller)
            product_client: Catalog client used for validation and enrichment
        """
        self._repository = repository
        self._product_client = product_client

    async def create_order(
        self,
        request: CreateOrderRequest,
        execution_id: Optional[ExecutionID] = None,
    ) -> OrderDTO:
        """Create a new order priced from the live catalog.

        Args:
            request: CreateOrderRequest DTO
            execution_id: Optional tracing id for log correlation

        Returns:
            OrderDTO with items enriched with product names

        Raises:
            OrderCreationFailed: On any catalog, validation or store failure.
                Nothing is persisted in that case.
        """
        execution_id = execution_id or ExecutionID.generate()

        try:
            # 1. Validate against the catalog (single call for all items)
            product_ids = list(dict.fromkeys(item.product_id for item in request.items))
            products = await self._product_client.validate_products(product_ids)
            catalog = self._index_products(products)

            # 2. Price every item from the catalog, at the stored scale
            items: List[OrderItem] = []
            for requested in request.items:
                product = catalog.get(requested.product_id)
                if product is None:
                    raise DependencyFailure(f"Product with id {requested.product_id} not found")
                items.append(
                    OrderItem(
                        product_id=requested.product_id,
                        quantity=requested.quantity,
                        price=to_money(product.price),
                    )
                )

            # 3. Apply business rules (derive totals)
            order = Order.place(items)

            # 4. Persist header and items atomically
            saved = await self._repository.create(order)

        except Exception as e:
            logger.error(
                f"[{execution_id.short}] ❌ Order creation failed: {e}",
                exc_info=True,
            )
            raise OrderCreationFailed() from e

        logger.info(
            f"[{execution_id.short}] ✅ Order created: {saved.id} "
            f"(items={saved.total_items}, total={saved.total_amount})"
        )

        # 5. Enrich with names from the same catalog response
        return self._order_to_dto(saved, catalog)

    async def find_one(self, order_id: UUID, execution_id: Optional[ExecutionID] = None) -> OrderDTO:
        """Get an order by id, enriched with current product names.

        Items whose product is no longer returned by the catalog are
        returned without a name.

        Args:
            order_id: Order UUID
            execution_id: Optional tracing id for log correlation

        Returns:
            OrderDTO

        Raises:
            NotFound: If no order has this id (the catalog is not called)
            DependencyFailure: If the catalog cannot be reached
        """
        execution_id = execution_id or ExecutionID.generate()

        order = await self._repository.find_by_id(order_id)
        if order is None:
            raise NotFound(f"Order with id {order_id} not found")

        catalog: Dict[int, ProductDTO] = {}
        if order.items:
            products = await self._product_client.validate_products(order.product_ids)
            catalog = self._index_products(products)

            missing = [pid for pid in order.product_ids if pid not in catalog]
            if missing:
                logger.warning(
                    f"[{execution_id.short}] Products no longer in catalog for order "
                    f"{order_id}: {missing}"
                )

        return self._order_to_dto(order, catalog)

    async def find_all(self, request: OrderPaginationRequest) -> PaginatedOrdersDTO:
        """List one page of orders, optionally filtered by status.

        Args:
            request: Pagination parameters

        Returns:
            PaginatedOrdersDTO with order headers and page metadata
        """
        offset = (request.page - 1) * request.limit

        total = await self._repository.count(status=request.status)
        orders = await self._repository.find_many(
            status=request.status,
            offset=offset,
            limit=request.limit,
        )

        return PaginatedOrdersDTO(
            data=[self._order_to_summary(order) for order in orders],
            meta=PaginationMetaDTO(
                total=total,
                page=request.page,
                total_pages=math.ceil(total / request.limit),
            ),
        )

    async def change_order_status(
        self,
        request: ChangeOrderStatusRequest,
        execution_id: Optional[ExecutionID] = None,
    ) -> OrderSummaryDTO:
        """Set the status of an order.

        Transition legality is not checked; any status may follow any other.

        Args:
            request: Target order id and status

        Returns:
            Updated order header

        Raises:
            NotFound: If no order has this id
        """
        execution_id = execution_id or ExecutionID.generate()

        order = await self._repository.update_status(request.id, request.status)
        if order is None:
            raise NotFound(f"Order with id {request.id} not found")

        logger.info(f"[{execution_id.short}] Order {request.id} status -> {request.status.value}")
        return self._order_to_summary(order)

    @staticmethod
    def _index_products(products: List[ProductDTO]) -> Dict[int, ProductDTO]:
        return {product.id: product for product in products}

    def _order_to_summary(self, order: Order) -> OrderSummaryDTO:
        """Transform Order domain entity to OrderSummaryDTO."""
        return OrderSummaryDTO(
            id=order.id,
            status=order.status,
            total_amount=order.total_amount,
            total_items=order.total_items,
            created_at=order.created_at,
            updated_at=order.updated_at,
        )

    def _order_to_dto(self, order: Order, catalog: Dict[int, ProductDTO]) -> OrderDTO:
        """Transform Order domain entity to OrderDTO.

        Args:
            order: Persisted Order
            catalog: Products by id, used only for names

        Returns:
            OrderDTO instance
        """
        items = []
        for item in order.items:
            product = catalog.get(item.product_id)
            items.append(
                OrderItemDTO(
                    product_id=item.product_id,
                    quantity=item.quantity,
                    price=item.price,
                    name=product.name if product else None,
                )
            )

        return OrderDTO(
            id=order.id,
            status=order.status,
            total_amount=order.total_amount,
            total_items=order.total_items,
            created_at=order.created_at,
            updated_at=order.updated_at,
            items=items,
        )

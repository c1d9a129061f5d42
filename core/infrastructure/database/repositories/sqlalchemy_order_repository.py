"""
SQLAlchemy Order Repository Implementation.

Implements OrderRepository interface using async SQLAlchemy (PostgreSQL in
production, SQLite in tests).
"""
import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy import func, select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import selectinload

from core.domain.entities import Order, OrderItem
from core.domain.enums import OrderStatus
from core.domain.exceptions import PersistenceFailure
from core.domain.repositories import OrderRepository
from core.infrastructure.database.config import create_engine, create_session_factory
from core.infrastructure.database.models import Base, OrderItemModel, OrderModel, utcnow


logger = logging.getLogger(__name__)


class SQLAlchemyOrderRepository(OrderRepository):
    """
    SQLAlchemy implementation of OrderRepository.

    Owns its engine: `connect()` builds the pool (and optionally the schema),
    `disconnect()` disposes it. Every public method opens a short-lived
    session; driver errors are raised as PersistenceFailure.
    """

    def __init__(
        self,
        database_url: str,
        echo_sql: bool = False,
        pool_size: int = 10,
        max_overflow: int = 20,
        create_schema: bool = False,
    ):
        """
        Initialize repository.

        Args:
            database_url: SQLAlchemy async URL
            echo_sql: Echo SQL statements
            pool_size: Connection pool size
            max_overflow: Extra connections beyond pool_size
            create_schema: Create missing tables on connect
        """
        self.database_url = database_url
        self.echo_sql = echo_sql
        self.pool_size = pool_size
        self.max_overflow = max_overflow
        self.create_schema = create_schema
        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker[AsyncSession]] = None

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    async def connect(self) -> None:
        if self._engine is not None:
            return

        self._engine = create_engine(
            self.database_url,
            echo=self.echo_sql,
            pool_size=self.pool_size,
            max_overflow=self.max_overflow,
        )
        self._session_factory = create_session_factory(self._engine)

        if self.create_schema:
            try:
                async with self._engine.begin() as conn:
                    await conn.run_sync(Base.metadata.create_all)
            except SQLAlchemyError as e:
                raise PersistenceFailure(f"Failed to create schema: {e}") from e
            logger.info("✅ Database schema ready")

        logger.info("✅ Order store connected")

    async def disconnect(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None
            logger.info("✅ Order store disconnected")

    async def ping(self) -> bool:
        if self._engine is None:
            return False
        try:
            async with self._engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError as e:
            logger.warning(f"Database ping failed: {e}")
            return False

    # =========================================================================
    # WRITES
    # =========================================================================

    async def create(self, order: Order) -> Order:
        """
        Insert order header and items in a single transaction.

        Args:
            order: Unsaved Order aggregate

        Returns:
            Persisted Order
        """
        model = OrderModel(
            status=order.status.value,
            total_amount=order.total_amount,
            total_items=order.total_items,
            items=[
                OrderItemModel(
                    product_id=item.product_id,
                    quantity=item.quantity,
                    price=item.price,
                )
                for item in order.items
            ],
        )

        try:
            async with self._sessions() as session:
                async with session.begin():
                    session.add(model)
        except SQLAlchemyError as e:
            logger.error(f"Failed to create order: {e}")
            raise PersistenceFailure(f"Failed to create order: {e}") from e

        logger.info(f"✅ Created order: {model.id}")
        return self._to_domain_entity(model, with_items=True)

    async def update_status(self, order_id: UUID, status: OrderStatus) -> Optional[Order]:
        try:
            async with self._sessions() as session:
                async with session.begin():
                    model = await session.get(OrderModel, order_id)
                    if model is None:
                        return None
                    model.status = status.value
                    model.updated_at = utcnow()
        except SQLAlchemyError as e:
            raise PersistenceFailure(f"Failed to update order {order_id}: {e}") from e

        return self._to_domain_entity(model, with_items=False)

    # =========================================================================
    # READS
    # =========================================================================

    async def find_by_id(self, order_id: UUID) -> Optional[Order]:
        try:
            async with self._sessions() as session:
                result = await session.execute(
                    select(OrderModel)
                    .options(selectinload(OrderModel.items))
                    .where(OrderModel.id == order_id)
                )
                model = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            raise PersistenceFailure(f"Failed to load order {order_id}: {e}") from e

        if model is None:
            logger.info(f"Order not found: {order_id}")
            return None

        return self._to_domain_entity(model, with_items=True)

    async def count(self, status: Optional[OrderStatus] = None) -> int:
        query = select(func.count()).select_from(OrderModel)
        if status is not None:
            query = query.where(OrderModel.status == status.value)

        try:
            async with self._sessions() as session:
                result = await session.execute(query)
                return int(result.scalar_one())
        except SQLAlchemyError as e:
            raise PersistenceFailure(f"Failed to count orders: {e}") from e

    async def find_many(
        self,
        status: Optional[OrderStatus] = None,
        offset: int = 0,
        limit: int = 10,
    ) -> List[Order]:
        query = select(OrderModel).order_by(OrderModel.created_at, OrderModel.id)
        if status is not None:
            query = query.where(OrderModel.status == status.value)
        query = query.offset(offset).limit(limit)

        try:
            async with self._sessions() as session:
                result = await session.execute(query)
                models = result.scalars().all()
        except SQLAlchemyError as e:
            raise PersistenceFailure(f"Failed to list orders: {e}") from e

        return [self._to_domain_entity(model, with_items=False) for model in models]

    # =========================================================================
    # HELPERS
    # =========================================================================

    def _sessions(self) -> AsyncSession:
        if self._session_factory is None:
            raise PersistenceFailure("Order store is not connected")
        return self._session_factory()

    def _to_domain_entity(self, model: OrderModel, with_items: bool) -> Order:
        """
        Convert database model to domain entity.

        Args:
            model: OrderModel from database
            with_items: Whether the items relationship was loaded

        Returns:
            Order domain entity
        """
        items = []
        if with_items:
            items = [
                OrderItem(
                    product_id=item.product_id,
                    quantity=item.quantity,
                    price=item.price,
                )
                for item in model.items
            ]

        return Order(
            id=model.id,
            status=OrderStatus(model.status),
            total_amount=model.total_amount,
            total_items=model.total_items,
            items=items,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )

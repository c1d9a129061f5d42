"""
FastAPI Dependencies.

Builds the service graph once from settings and hands out singletons.
"""
from __future__ import annotations

import asyncio
import contextlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load environment variables ONCE before any settings objects are created
_PROJECT_ROOT = Path(__file__).resolve().parents[1]
load_dotenv(dotenv_path=_PROJECT_ROOT / ".env")

from api.commands import OrderCommandDispatcher
from core.application.interfaces import IProductClient
from core.application.services import OrderApplicationService
from core.domain.repositories import OrderRepository
from core.infrastructure.adapters.products import RedisProductClient
from core.infrastructure.bus import RedisRpcClient, RedisRpcServer
from core.infrastructure.database.repositories import SQLAlchemyOrderRepository
from core.settings import get_app_settings

logger = logging.getLogger(__name__)


# =============================================================================
# SINGLETON INSTANCES
# =============================================================================

_order_repository: Optional[OrderRepository] = None
_product_client: Optional[IProductClient] = None
_order_service: Optional[OrderApplicationService] = None
_command_dispatcher: Optional[OrderCommandDispatcher] = None
_command_server: Optional[RedisRpcServer] = None
_server_task: Optional[asyncio.Task] = None


# =============================================================================
# DEPENDENCIES
# =============================================================================

def get_order_repository() -> OrderRepository:
    global _order_repository
    if _order_repository is None:
        db = get_app_settings().database
        _order_repository = SQLAlchemyOrderRepository(
            database_url=db.database_url,
            echo_sql=db.echo_sql,
            pool_size=db.pool_size,
            max_overflow=db.max_overflow,
            create_schema=db.create_schema,
        )
        logger.info("Created SQLAlchemyOrderRepository instance")
    return _order_repository


def get_product_client() -> IProductClient:
    global _product_client
    if _product_client is None:
        settings = get_app_settings()
        _product_client = RedisProductClient(
            RedisRpcClient(
                redis_url=settings.transport.redis_url,
                stream_name=settings.products.command_stream,
                timeout_seconds=settings.products.timeout_seconds,
            )
        )
        logger.info(f"Created RedisProductClient (stream={settings.products.command_stream})")
    return _product_client


def get_order_service() -> OrderApplicationService:
    global _order_service
    if _order_service is None:
        _order_service = OrderApplicationService(
            repository=get_order_repository(),
            product_client=get_product_client(),
        )
    return _order_service


def get_command_dispatcher() -> OrderCommandDispatcher:
    global _command_dispatcher
    if _command_dispatcher is None:
        _command_dispatcher = OrderCommandDispatcher(get_order_service())
    return _command_dispatcher


def get_command_server() -> RedisRpcServer:
    global _command_server
    if _command_server is None:
        transport = get_app_settings().transport
        _command_server = RedisRpcServer(
            handler=get_command_dispatcher().handle,
            redis_url=transport.redis_url,
            stream_name=transport.command_stream,
            consumer_group=transport.consumer_group,
            consumer_name=transport.consumer_name,
            batch_size=transport.batch_size,
            block_ms=transport.block_ms,
            reply_ttl_seconds=transport.reply_ttl_seconds,
        )
    return _command_server


# =============================================================================
# LIFECYCLE
# =============================================================================

async def startup() -> None:
    """Connect the store and the product client, then start serving commands."""
    global _server_task

    await get_order_repository().connect()
    await get_product_client().connect()

    server = get_command_server()
    await server.connect()
    _server_task = asyncio.create_task(server.serve_forever(), name="orders-command-server")


async def shutdown() -> None:
    """Stop serving commands and release every connection."""
    global _server_task

    if _command_server is not None:
        _command_server.stop()

    if _server_task is not None:
        _server_task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await _server_task
        _server_task = None

    if _command_server is not None:
        await _command_server.disconnect()
    if _product_client is not None:
        await _product_client.disconnect()
    if _order_repository is not None:
        await _order_repository.disconnect()


# =============================================================================
# RESET (for testing)
# =============================================================================

def reset_dependencies():
    global _order_repository, _product_client, _order_service
    global _command_dispatcher, _command_server, _server_task

    _order_repository = None
    _product_client = None
    _order_service = None
    _command_dispatcher = None
    _command_server = None
    _server_task = None

    logger.info("Dependencies reset")

"""Pytest configuration and fixtures for integration tests."""

import pytest_asyncio

from core.application.services import OrderApplicationService
from core.infrastructure.database.repositories import SQLAlchemyOrderRepository


# Use in-memory SQLite for testing
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture(scope="function")
async def sql_repository():
    """SQLAlchemy store on a fresh in-memory database."""
    repository = SQLAlchemyOrderRepository(TEST_DATABASE_URL, create_schema=True)
    await repository.connect()

    yield repository

    await repository.disconnect()


@pytest_asyncio.fixture
async def sql_order_service(sql_repository, product_client):
    return OrderApplicationService(repository=sql_repository, product_client=product_client)

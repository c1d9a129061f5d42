"""Shared fixtures: fake product catalog and in-memory order store."""

from decimal import Decimal
from typing import Dict, Iterable, List, Optional

import pytest
import pytest_asyncio
from redis.exceptions import ResponseError

from core.application.dtos import ProductDTO
from core.application.interfaces import IProductClient
from core.application.services import OrderApplicationService
from core.infrastructure.adapters.persistence import InMemoryOrderRepository


class FakeProductClient(IProductClient):
    """Catalog double that records every lookup."""

    def __init__(self, products: Optional[Dict[int, ProductDTO]] = None):
        self.products: Dict[int, ProductDTO] = dict(products or {})
        self.calls: List[List[int]] = []
        self.error: Optional[Exception] = None

    def add(self, product_id: int, name: str, price: str) -> None:
        self.products[product_id] = ProductDTO(id=product_id, name=name, price=Decimal(price))

    async def validate_products(self, product_ids: Iterable[int]) -> List[ProductDTO]:
        ids = list(product_ids)
        self.calls.append(ids)
        if self.error is not None:
            raise self.error
        return [self.products[pid] for pid in dict.fromkeys(ids) if pid in self.products]


@pytest.fixture
def product_client() -> FakeProductClient:
    client = FakeProductClient()
    client.add(1, "Keyboard", "5")
    client.add(2, "Mouse", "7")
    client.add(3, "Monitor", "149.99")
    return client


@pytest_asyncio.fixture
async def order_repository():
    repository = InMemoryOrderRepository()
    await repository.connect()
    yield repository
    await repository.disconnect()


@pytest.fixture
def order_service(order_repository, product_client) -> OrderApplicationService:
    return OrderApplicationService(repository=order_repository, product_client=product_client)


class FakeRedis:
    """
    In-process stand-in for the redis.asyncio commands the bus uses.

    `on_xadd` (if set) is awaited after every XADD, which lets a test answer
    a request before the caller reaches BLPOP.
    """

    def __init__(self):
        self.streams: Dict[str, list] = {}
        self.lists: Dict[str, list] = {}
        self.expiry: Dict[str, int] = {}
        self.groups: Dict[tuple, int] = {}
        self.acked: List[str] = []
        self.on_xadd = None

    async def ping(self):
        return True

    async def aclose(self):
        pass

    async def xadd(self, name, fields, **kwargs):
        stream = self.streams.setdefault(name, [])
        msg_id = f"{len(stream) + 1}-0"
        stream.append((msg_id, dict(fields)))
        if self.on_xadd is not None:
            await self.on_xadd(name, dict(fields))
        return msg_id

    async def blpop(self, keys, timeout=0):
        for key in keys:
            if self.lists.get(key):
                return key, self.lists[key].pop(0)
        return None

    async def rpush(self, key, *values):
        self.lists.setdefault(key, []).extend(values)
        return len(self.lists[key])

    async def expire(self, key, seconds):
        self.expiry[key] = seconds
        return True

    async def xgroup_create(self, name, groupname, id="0", mkstream=False):
        if (name, groupname) in self.groups:
            raise ResponseError("BUSYGROUP Consumer Group name already exists")
        self.streams.setdefault(name, [])
        self.groups[(name, groupname)] = 0
        return True

    async def xreadgroup(self, groupname, consumername, streams, count=None, block=None):
        result = []
        for name in streams:
            start = self.groups[(name, groupname)]
            batch = self.streams.get(name, [])[start:start + (count or 10)]
            self.groups[(name, groupname)] = start + len(batch)
            if batch:
                result.append([name, batch])
        return result

    async def xack(self, name, groupname, *ids):
        self.acked.extend(ids)
        return len(ids)


@pytest.fixture
def fake_redis() -> FakeRedis:
    return FakeRedis()

"""
Product catalog client over Redis request/reply.

Implements IProductClient against the products service command stream.
"""
import logging
from typing import Iterable, List

from pydantic import TypeAdapter, ValidationError

from core.application.dtos import ProductDTO
from core.application.interfaces import IProductClient
from core.domain.exceptions import DependencyFailure
from core.infrastructure.bus import RedisRpcClient, RpcError, RpcRemoteError, RpcTimeoutError


logger = logging.getLogger(__name__)

_products_adapter = TypeAdapter(List[ProductDTO])


class RedisProductClient(IProductClient):
    """
    Resolves product ids with the products service `validate_products`
    command. No caching: every call goes to the catalog.
    """

    COMMAND = "validate_products"

    def __init__(self, rpc_client: RedisRpcClient):
        self._rpc = rpc_client

    async def connect(self) -> None:
        try:
            await self._rpc.connect()
        except RpcError as e:
            raise DependencyFailure(f"Product service unreachable: {e}") from e

    async def disconnect(self) -> None:
        await self._rpc.disconnect()

    async def validate_products(self, product_ids: Iterable[int]) -> List[ProductDTO]:
        ids = list(product_ids)

        try:
            raw = await self._rpc.send(self.COMMAND, ids)
        except RpcTimeoutError as e:
            raise DependencyFailure(f"Product service did not answer: {e}") from e
        except RpcRemoteError as e:
            raise DependencyFailure(f"Product service error: {e.message}") from e
        except RpcError as e:
            raise DependencyFailure(f"Product service unreachable: {e}") from e

        try:
            products = _products_adapter.validate_python(raw)
        except ValidationError as e:
            logger.error(f"Unreadable reply from product service: {e}")
            raise DependencyFailure("Product service returned an unreadable reply") from e

        logger.debug(f"Resolved {len(products)}/{len(ids)} product(s)")
        return products

from __future__ import annotations

from pydantic import Field

from core.settings.base import OrdersBaseSettings


class ProductsSettings(OrdersBaseSettings):
    """
    Settings for the products service client.
    The Redis connection is shared with the command server (REDIS_URL).
    """

    command_stream: str = Field("products:commands", alias="PRODUCTS_COMMAND_STREAM")
    timeout_seconds: float = Field(5.0, gt=0, alias="PRODUCTS_RPC_TIMEOUT_SECONDS")

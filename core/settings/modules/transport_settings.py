from __future__ import annotations

from pydantic import Field

from core.settings.base import OrdersBaseSettings


class TransportSettings(OrdersBaseSettings):
    """
    Settings for the Redis Streams command server.
    """

    redis_url: str = Field("redis://localhost:6379/0", alias="REDIS_URL")
    command_stream: str = Field("orders:commands", alias="ORDERS_COMMAND_STREAM")
    consumer_group: str = Field("orders-service", alias="ORDERS_CONSUMER_GROUP")
    consumer_name: str = Field("orders-service-1", alias="ORDERS_CONSUMER_NAME")
    block_ms: int = Field(1000, alias="RPC_BLOCK_MS")
    batch_size: int = Field(10, alias="RPC_BATCH_SIZE")
    reply_ttl_seconds: int = Field(60, alias="RPC_REPLY_TTL_SECONDS")

"""
Redis Streams request/reply client.

Sends a command to a service's stream and waits on a private reply list.
"""
import json
import logging
from typing import Any, Optional
from uuid import uuid4

import redis.asyncio as aioredis
from redis.exceptions import RedisError

from .envelope import RpcTimeoutError, RpcTransportError, decode_reply


logger = logging.getLogger(__name__)


class RedisRpcClient:
    """
    Request/reply over Redis Streams.

    Request:  XADD <stream> {cmd, payload, reply_to, correlation_id}
    Reply:    BLPOP <reply_to> <timeout>

    Every call is bounded by `timeout_seconds`; nothing is retried.
    """

    def __init__(
        self,
        redis_url: str = "redis://localhost:6379/0",
        stream_name: str = "products:commands",
        timeout_seconds: float = 5.0,
        reply_prefix: str = "rpc:reply",
        redis_client: Optional[aioredis.Redis] = None,
    ):
        """
        Initialize client.

        Args:
            redis_url: Redis connection URL
            stream_name: Command stream of the remote service
            timeout_seconds: Reply deadline
            reply_prefix: Prefix for per-request reply keys
            redis_client: Pre-built client (tests)
        """
        self.redis_url = redis_url
        self.stream_name = stream_name
        self.timeout_seconds = timeout_seconds
        self.reply_prefix = reply_prefix
        self._redis_client = redis_client
        self._owns_client = redis_client is None

    async def connect(self) -> None:
        """Establish Redis connection."""
        if self._redis_client is None:
            try:
                self._redis_client = aioredis.from_url(
                    self.redis_url,
                    encoding="utf-8",
                    decode_responses=True,
                )
                await self._redis_client.ping()
                logger.info(f"✅ RPC client connected to Redis (stream={self.stream_name})")
            except RedisError as e:
                self._redis_client = None
                raise RpcTransportError(f"Failed to connect to Redis: {e}") from e

    async def disconnect(self) -> None:
        """Close Redis connection."""
        if self._redis_client is not None and self._owns_client:
            await self._redis_client.aclose()
        if self._owns_client:
            self._redis_client = None

    async def send(self, cmd: str, payload: Any) -> Any:
        """
        Send one command and wait for its reply.

        Args:
            cmd: Command name understood by the remote service
            payload: JSON-serializable payload

        Returns:
            The `data` member of the reply envelope

        Raises:
            RpcTimeoutError: No reply within the deadline
            RpcTransportError: Redis failure or malformed reply
            RpcRemoteError: Remote service answered with an error
        """
        if self._redis_client is None:
            await self.connect()

        correlation_id = uuid4().hex
        reply_to = f"{self.reply_prefix}:{correlation_id}"

        try:
            await self._redis_client.xadd(
                self.stream_name,
                {
                    "cmd": cmd,
                    "payload": json.dumps(payload),
                    "reply_to": reply_to,
                    "correlation_id": correlation_id,
                },
            )
            result = await self._redis_client.blpop([reply_to], timeout=self.timeout_seconds)
        except RedisError as e:
            logger.error(f"RPC '{cmd}' to {self.stream_name} failed: {e}")
            raise RpcTransportError(f"Redis error: {e}") from e

        if result is None:
            logger.warning(
                f"RPC '{cmd}' to {self.stream_name} timed out after {self.timeout_seconds}s "
                f"(correlation_id={correlation_id})"
            )
            raise RpcTimeoutError(f"No reply for '{cmd}' within {self.timeout_seconds}s")

        _, raw = result
        return decode_reply(raw)

    async def __aenter__(self):
        """Async context manager entry."""
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.disconnect()

"""
Redis Streams command server.

Reads commands from a stream through a consumer group, hands each one to a
handler, pushes the reply envelope to the requester's reply list, and ACKs.
"""
import asyncio
import json
import logging
from http import HTTPStatus
from typing import Any, Awaitable, Callable, Dict, List, Optional

import redis.asyncio as aioredis
from redis.exceptions import RedisError, ResponseError

from .envelope import encode, failure


logger = logging.getLogger(__name__)


# (cmd, payload) -> reply envelope
CommandHandler = Callable[[str, Any], Awaitable[Dict[str, Any]]]


class RedisRpcServer:
    """
    Serves commands from a Redis Stream.

    Features:
    - Consumer groups for load balancing
    - Messages of one batch are handled concurrently
    - Reply keys expire after `reply_ttl_seconds`
    - Message acknowledgment (ACK) after the reply is pushed
    """

    def __init__(
        self,
        handler: CommandHandler,
        redis_url: str = "redis://localhost:6379/0",
        stream_name: str = "orders:commands",
        consumer_group: str = "orders-service",
        consumer_name: str = "orders-service-1",
        batch_size: int = 10,
        block_ms: int = 1000,
        reply_ttl_seconds: int = 60,
        redis_client: Optional[aioredis.Redis] = None,
    ):
        """
        Initialize command server.

        Args:
            handler: Coroutine turning (cmd, payload) into a reply envelope
            redis_url: Redis connection URL
            stream_name: Command stream to serve
            consumer_group: Consumer group name
            consumer_name: Unique consumer name (for load balancing)
            batch_size: Maximum messages per read
            block_ms: Blocking time of each read in milliseconds
            reply_ttl_seconds: Expiry of reply lists
            redis_client: Pre-built client (tests)
        """
        self.handler = handler
        self.redis_url = redis_url
        self.stream_name = stream_name
        self.consumer_group = consumer_group
        self.consumer_name = consumer_name
        self.batch_size = batch_size
        self.block_ms = block_ms
        self.reply_ttl_seconds = reply_ttl_seconds
        self._redis_client = redis_client
        self._owns_client = redis_client is None
        self._running = False

    async def connect(self) -> None:
        """Establish Redis connection and create consumer group."""
        if self._redis_client is None:
            self._redis_client = aioredis.from_url(
                self.redis_url,
                encoding="utf-8",
                decode_responses=True,
            )
            await self._redis_client.ping()
            logger.info(f"✅ Connected to Redis: {self.stream_name}")

        try:
            await self._redis_client.xgroup_create(
                name=self.stream_name,
                groupname=self.consumer_group,
                id="0",
                mkstream=True,
            )
            logger.info(f"✅ Created consumer group: {self.consumer_group}")
        except ResponseError as e:
            if "BUSYGROUP" in str(e):
                logger.info(f"Consumer group {self.consumer_group} already exists")
            else:
                raise

    async def disconnect(self) -> None:
        """Close Redis connection."""
        self._running = False
        if self._redis_client is not None and self._owns_client:
            await self._redis_client.aclose()
            self._redis_client = None
            logger.info("✅ Disconnected from Redis")

    def stop(self) -> None:
        self._running = False

    async def read_batch(self) -> List[Dict[str, Any]]:
        """
        Read new messages for this consumer.

        Returns:
            List of message dictionaries with 'id' and 'data' keys
        """
        messages = await self._redis_client.xreadgroup(
            groupname=self.consumer_group,
            consumername=self.consumer_name,
            streams={self.stream_name: ">"},
            count=self.batch_size,
            block=self.block_ms,
        )

        result = []
        for _stream, stream_messages in messages or []:
            for msg_id, msg_data in stream_messages:
                result.append({"id": msg_id, "data": msg_data})
        return result

    async def process_message(self, message: Dict[str, Any]) -> None:
        """
        Handle one command message and reply to its sender.

        A message whose payload is not valid JSON is answered with a 400
        envelope. Handler crashes are answered with a 500 envelope. The
        message is ACKed in every case, so nothing is redelivered.
        """
        message_id = message["id"]
        fields = message["data"]
        cmd = fields.get("cmd", "")
        reply_to = fields.get("reply_to")

        try:
            payload = json.loads(fields.get("payload") or "null")
        except ValueError:
            envelope = failure(HTTPStatus.BAD_REQUEST, "Payload is not valid JSON")
        else:
            try:
                envelope = await self.handler(cmd, payload)
            except Exception as e:
                logger.error(f"Handler crashed for '{cmd}' (msg_id={message_id}): {e}", exc_info=True)
                envelope = failure(HTTPStatus.INTERNAL_SERVER_ERROR, "Internal server error")

        if reply_to:
            await self._redis_client.rpush(reply_to, encode(envelope))
            await self._redis_client.expire(reply_to, self.reply_ttl_seconds)
        else:
            logger.warning(f"Command '{cmd}' (msg_id={message_id}) has no reply_to; reply dropped")

        await self._redis_client.xack(self.stream_name, self.consumer_group, message_id)
        logger.debug(f"✅ Acknowledged message: {message_id}")

    async def process_batch(self, messages: List[Dict[str, Any]]) -> None:
        results = await asyncio.gather(
            *(self.process_message(message) for message in messages),
            return_exceptions=True,
        )
        for message, result in zip(messages, results):
            if isinstance(result, Exception):
                logger.error(
                    f"Failed to reply to message {message['id']}: {result}",
                    exc_info=result,
                )

    async def serve_forever(self, poll_interval: float = 1.0) -> None:
        """
        Serve commands until stopped or cancelled.

        Args:
            poll_interval: Back-off after a Redis error (seconds)
        """
        await self.connect()
        self._running = True

        logger.info("🚀 Starting command server...")
        logger.info(f"   Stream: {self.stream_name}")
        logger.info(f"   Consumer Group: {self.consumer_group}")
        logger.info(f"   Consumer Name: {self.consumer_name}")

        try:
            while self._running:
                try:
                    messages = await self.read_batch()
                except RedisError as e:
                    logger.error(f"Failed to read from Redis Stream: {e}", exc_info=True)
                    await asyncio.sleep(poll_interval)
                    continue

                if not messages:
                    continue

                logger.info(f"📨 Received {len(messages)} message(s) from Redis Stream")
                await self.process_batch(messages)
        finally:
            logger.info("✅ Command server stopped")

    async def __aenter__(self):
        """Async context manager entry."""
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.disconnect()

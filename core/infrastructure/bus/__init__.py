"""Message bus infrastructure - Redis Streams request/reply."""
from .envelope import (
    RpcError,
    RpcRemoteError,
    RpcTimeoutError,
    RpcTransportError,
    decode_reply,
    encode,
    failure,
    success,
)
from .redis_rpc_client import RedisRpcClient
from .redis_rpc_server import CommandHandler, RedisRpcServer

__all__ = [
    "RpcError",
    "RpcRemoteError",
    "RpcTimeoutError",
    "RpcTransportError",
    "decode_reply",
    "encode",
    "failure",
    "success",
    "RedisRpcClient",
    "CommandHandler",
    "RedisRpcServer",
]

"""
Reply envelopes for Redis request/reply.

Success: {"ok": true, "data": ...}
Failure: {"ok": false, "error": {"status": int, "message": str}}
"""
import json
from http import HTTPStatus
from typing import Any, Dict


class RpcError(Exception):
    """Base class for request/reply failures seen by a caller."""


class RpcTimeoutError(RpcError):
    """No reply arrived before the deadline."""


class RpcTransportError(RpcError):
    """Redis unreachable or the reply could not be decoded."""


class RpcRemoteError(RpcError):
    """The remote handler answered with an error envelope."""

    def __init__(self, status: int, message: str):
        super().__init__(f"{status}: {message}")
        self.status = status
        self.message = message


def success(data: Any) -> Dict[str, Any]:
    return {"ok": True, "data": data}


def failure(status: int, message: str) -> Dict[str, Any]:
    return {"ok": False, "error": {"status": int(status), "message": message}}


def encode(envelope: Dict[str, Any]) -> str:
    return json.dumps(envelope)


def decode_reply(raw: str) -> Any:
    """
    Unwrap a reply envelope.

    Returns:
        The `data` member of a success envelope

    Raises:
        RpcRemoteError: For a failure envelope
        RpcTransportError: For anything that is not a valid envelope
    """
    try:
        envelope = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise RpcTransportError(f"Malformed reply: {e}") from e

    if not isinstance(envelope, dict) or "ok" not in envelope:
        raise RpcTransportError("Malformed reply: missing 'ok' member")

    if envelope["ok"]:
        return envelope.get("data")

    error = envelope.get("error") or {}
    raise RpcRemoteError(
        status=error.get("status", int(HTTPStatus.INTERNAL_SERVER_ERROR)),
        message=error.get("message", "Unknown error"),
    )

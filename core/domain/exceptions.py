"""
Domain exceptions.

Every error raised across the service carries an HTTP-like status code so the
command surface can turn it into an RPC error payload without inspecting
causes.
"""
from http import HTTPStatus
from typing import Any, Dict, Optional


class OrderServiceError(Exception):
    """Base class for all classified failures."""

    status: HTTPStatus = HTTPStatus.INTERNAL_SERVER_ERROR

    def __init__(self, message: str, status: Optional[HTTPStatus] = None):
        super().__init__(message)
        self.message = message
        if status is not None:
            self.status = status

    def to_payload(self) -> Dict[str, Any]:
        """Error body sent back to the caller."""
        return {"status": int(self.status), "message": self.message}


class ValidationFailure(OrderServiceError):
    """Malformed identifiers, unknown status values, bad payload shapes."""

    status = HTTPStatus.BAD_REQUEST


class NotFound(OrderServiceError):
    """No row matches the requested identifier."""

    status = HTTPStatus.NOT_FOUND


class DependencyFailure(OrderServiceError):
    """Product service unreachable, erroring, or missing requested products."""

    status = HTTPStatus.SERVICE_UNAVAILABLE


class PersistenceFailure(OrderServiceError):
    """Order store read or write error."""

    status = HTTPStatus.INTERNAL_SERVER_ERROR


class OrderCreationFailed(OrderServiceError):
    """Any failure during order creation, reported uniformly to the caller."""

    status = HTTPStatus.BAD_REQUEST

    def __init__(self, message: str = "Error validating products"):
        super().__init__(message)

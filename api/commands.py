"""
Order command surface.

Maps named inbound commands to OrderApplicationService operations and turns
every outcome into a reply envelope.
"""
from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Dict, Type, TypeVar

from pydantic import BaseModel, ValidationError

from core.application.dtos import (
    ChangeOrderStatusRequest,
    CreateOrderRequest,
    FindOneOrderRequest,
    OrderPaginationRequest,
)
from core.application.services import OrderApplicationService
from core.domain.exceptions import OrderServiceError, ValidationFailure
from core.domain.value_objects import ExecutionID
from core.infrastructure.bus import failure, success

logger = logging.getLogger(__name__)

RequestT = TypeVar("RequestT", bound=BaseModel)
Handler = Callable[[Any, ExecutionID], Awaitable[Any]]


def parse_request(model: Type[RequestT], payload: Any) -> RequestT:
    """
    Validate a raw payload into a request DTO.

    Raises:
        ValidationFailure: With a readable summary of every field error
    """
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        details = "; ".join(
            f"{'.'.join(str(part) for part in error['loc']) or 'payload'}: {error['msg']}"
            for error in e.errors()
        )
        raise ValidationFailure(details) from e


def to_wire(dto: BaseModel) -> Dict[str, Any]:
    """camelCase JSON-ready dict; unset optional fields are omitted."""
    return dto.model_dump(mode="json", by_alias=True, exclude_none=True)


class OrderCommandDispatcher:
    """
    Dispatches order commands.

    Commands:
    - create_order
    - find_all_orders
    - find_one_order
    - change_order_status
    """

    def __init__(self, service: OrderApplicationService):
        self._service = service
        self._handlers: Dict[str, Handler] = {
            "create_order": self._create_order,
            "find_all_orders": self._find_all_orders,
            "find_one_order": self._find_one_order,
            "change_order_status": self._change_order_status,
        }

    @property
    def commands(self) -> list[str]:
        return list(self._handlers)

    async def handle(self, cmd: str, payload: Any) -> Dict[str, Any]:
        """
        Run one command and build its reply envelope.

        Classified failures keep their status and message; anything else is
        logged and answered with status 500.
        """
        execution_id = ExecutionID.generate()
        logger.info(f"[{execution_id.short}] ▶ {cmd}")

        handler = self._handlers.get(cmd)
        try:
            if handler is None:
                raise ValidationFailure(f"Unknown command: {cmd}")
            data = await handler(payload, execution_id)
        except OrderServiceError as e:
            logger.warning(f"[{execution_id.short}] {cmd} failed ({int(e.status)}): {e.message}")
            return failure(e.status, e.message)
        except Exception as e:
            logger.error(f"[{execution_id.short}] {cmd} crashed: {e}", exc_info=True)
            return failure(500, "Internal server error")

        return success(data)

    # =========================================================================
    # HANDLERS
    # =========================================================================

    async def _create_order(self, payload: Any, execution_id: ExecutionID) -> Dict[str, Any]:
        request = parse_request(CreateOrderRequest, payload)
        order = await self._service.create_order(request, execution_id=execution_id)
        return to_wire(order)

    async def _find_all_orders(self, payload: Any, execution_id: ExecutionID) -> Dict[str, Any]:
        request = parse_request(OrderPaginationRequest, payload if payload is not None else {})
        page = await self._service.find_all(request)
        return to_wire(page)

    async def _find_one_order(self, payload: Any, execution_id: ExecutionID) -> Dict[str, Any]:
        # Accept both {"id": "..."} and a bare id string
        if isinstance(payload, str):
            payload = {"id": payload}
        request = parse_request(FindOneOrderRequest, payload)
        order = await self._service.find_one(request.id, execution_id=execution_id)
        return to_wire(order)

    async def _change_order_status(self, payload: Any, execution_id: ExecutionID) -> Dict[str, Any]:
        request = parse_request(ChangeOrderStatusRequest, payload)
        order = await self._service.change_order_status(request, execution_id=execution_id)
        return to_wire(order)

"""Tests for the order command surface."""

from uuid import uuid4

import pytest

from api.commands import OrderCommandDispatcher
from core.domain.exceptions import DependencyFailure


@pytest.fixture
def dispatcher(order_service) -> OrderCommandDispatcher:
    return OrderCommandDispatcher(order_service)


async def _create(dispatcher, items=None):
    reply = await dispatcher.handle(
        "create_order",
        {"items": items or [{"productId": 1, "quantity": 2}, {"productId": 2, "quantity": 1}]},
    )
    assert reply["ok"] is True, reply
    return reply["data"]


@pytest.mark.asyncio
async def test_create_order_reply_shape(dispatcher):
    data = await _create(dispatcher)

    assert data["totalAmount"] == 17
    assert data["totalItems"] == 3
    assert data["status"] == "PENDING"
    assert {"id", "createdAt", "updatedAt"} <= data.keys()
    assert data["items"] == [
        {"productId": 1, "quantity": 2, "price": 5.0, "name": "Keyboard"},
        {"productId": 2, "quantity": 1, "price": 7.0, "name": "Mouse"},
    ]


@pytest.mark.asyncio
async def test_create_order_missing_product_is_400(dispatcher):
    reply = await dispatcher.handle("create_order", {"items": [{"productId": 42, "quantity": 1}]})

    assert reply == {"ok": False, "error": {"status": 400, "message": "Error validating products"}}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        {"items": []},
        {"items": [{"productId": 1, "quantity": 0}]},
        {"items": [{"productId": "one", "quantity": 1}]},
        None,
    ],
)
async def test_create_order_bad_payload_is_400(dispatcher, product_client, payload):
    reply = await dispatcher.handle("create_order", payload)

    assert reply["ok"] is False
    assert reply["error"]["status"] == 400
    assert product_client.calls == []


@pytest.mark.asyncio
async def test_find_one_order_accepts_object_or_bare_id(dispatcher):
    created = await _create(dispatcher)

    by_object = await dispatcher.handle("find_one_order", {"id": created["id"]})
    by_string = await dispatcher.handle("find_one_order", created["id"])

    assert by_object["ok"] and by_string["ok"]
    assert by_object["data"] == by_string["data"]
    assert by_object["data"]["items"][0]["name"] == "Keyboard"


@pytest.mark.asyncio
async def test_find_one_order_omits_missing_name(dispatcher, product_client):
    created = await _create(dispatcher)
    del product_client.products[2]

    reply = await dispatcher.handle("find_one_order", {"id": created["id"]})

    assert "name" not in reply["data"]["items"][1]


@pytest.mark.asyncio
async def test_find_one_order_errors(dispatcher, product_client):
    malformed = await dispatcher.handle("find_one_order", {"id": "not-a-uuid"})
    missing_id = uuid4()
    missing = await dispatcher.handle("find_one_order", {"id": str(missing_id)})

    assert malformed["error"]["status"] == 400
    assert missing["error"] == {"status": 404, "message": f"Order with id {missing_id} not found"}
    assert product_client.calls == []


@pytest.mark.asyncio
async def test_find_one_order_catalog_outage_is_503(dispatcher, product_client):
    created = await _create(dispatcher)
    product_client.error = DependencyFailure("Product service unreachable")

    reply = await dispatcher.handle("find_one_order", {"id": created["id"]})

    assert reply["error"]["status"] == 503


@pytest.mark.asyncio
async def test_find_all_orders_defaults_and_meta(dispatcher):
    for _ in range(3):
        await _create(dispatcher)

    reply = await dispatcher.handle("find_all_orders", None)

    assert reply["ok"] is True
    assert len(reply["data"]["data"]) == 3
    assert "items" not in reply["data"]["data"][0]
    assert reply["data"]["meta"] == {"total": 3, "page": 1, "totalPages": 1}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        {"page": 0},
        {"limit": 0},
        {"limit": 101},
        {"page": 10**12, "limit": 10**9},
        {"status": "SHIPPED"},
    ],
)
async def test_find_all_orders_invalid_params(dispatcher, payload):
    reply = await dispatcher.handle("find_all_orders", payload)

    assert reply["error"]["status"] == 400


@pytest.mark.asyncio
async def test_change_order_status(dispatcher):
    created = await _create(dispatcher)

    reply = await dispatcher.handle("change_order_status", {"id": created["id"], "status": "CONFIRMED"})

    assert reply["ok"] is True
    assert reply["data"]["status"] == "CONFIRMED"
    assert reply["data"]["totalAmount"] == created["totalAmount"]
    assert "items" not in reply["data"]


@pytest.mark.asyncio
async def test_change_order_status_errors(dispatcher):
    created = await _create(dispatcher)

    bad_status = await dispatcher.handle("change_order_status", {"id": created["id"], "status": "LOST"})
    unknown = await dispatcher.handle("change_order_status", {"id": str(uuid4()), "status": "CONFIRMED"})

    assert bad_status["error"]["status"] == 400
    assert unknown["error"]["status"] == 404


@pytest.mark.asyncio
async def test_unknown_command_is_400(dispatcher):
    reply = await dispatcher.handle("delete_order", {"id": str(uuid4())})

    assert reply == {"ok": False, "error": {"status": 400, "message": "Unknown command: delete_order"}}


@pytest.mark.asyncio
async def test_unexpected_error_is_500(dispatcher, order_repository):
    async def broken(*args, **kwargs):
        raise RuntimeError("disk on fire")

    order_repository.count = broken

    reply = await dispatcher.handle("find_all_orders", {})

    assert reply == {"ok": False, "error": {"status": 500, "message": "Internal server error"}}

"""Tests for the Order aggregate."""

from decimal import Decimal

import pytest

from core.domain.entities import Order, OrderItem
from core.domain.entities.order import to_money
from core.domain.enums import OrderStatus


class TestOrderPlace:
    """Order.place derives totals from the items."""

    def test_totals_from_items(self):
        order = Order.place([
            OrderItem(product_id=1, quantity=2, price=Decimal("5")),
            OrderItem(product_id=2, quantity=1, price=Decimal("7")),
        ])

        assert order.total_amount == Decimal("17")
        assert order.total_items == 3
        assert order.status == OrderStatus.PENDING
        assert not order.is_persisted

    def test_price_is_coerced_to_decimal(self):
        item = OrderItem(product_id=1, quantity=3, price=0.1)

        assert isinstance(item.price, Decimal)
        assert item.subtotal == Decimal("0.3")

    def test_rejects_empty_items(self):
        with pytest.raises(ValueError):
            Order.place([])

    def test_rejects_non_positive_quantity(self):
        with pytest.raises(ValueError, match="product 4"):
            Order.place([OrderItem(product_id=4, quantity=0, price=Decimal("1"))])

    def test_product_ids_are_distinct_in_first_seen_order(self):
        order = Order.place([
            OrderItem(product_id=3, quantity=1, price=Decimal("1")),
            OrderItem(product_id=1, quantity=1, price=Decimal("1")),
            OrderItem(product_id=3, quantity=2, price=Decimal("1")),
        ])

        assert order.product_ids == [3, 1]


class TestToMoney:
    """Amounts are rounded half up to cents."""

    @pytest.mark.parametrize(
        "value, expected",
        [("0.333", "0.33"), ("0.335", "0.34"), ("5", "5.00"), (Decimal("149.994"), "149.99")],
    )
    def test_rounds_to_cents(self, value, expected):
        assert to_money(value) == Decimal(expected)

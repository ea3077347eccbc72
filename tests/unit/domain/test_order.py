"""Tests for the Order entity and merchant order numbers."""

import re
from datetime import datetime, timezone

import pytest

from core.domain.entities.order import Order
from core.domain.enums import OrderStatus
from core.domain.value_objects import OrderNumber


def test_create_order_defaults():
    """A new order is unpaid, timestamped, and carries a generated number."""
    order = Order.create(description="Test Product", amount=100)

    assert order.status == OrderStatus.NOT_PAID
    assert order.description == "Test Product"
    assert order.amount == 100
    assert order.id
    assert order.out_trade_no.startswith("N")
    assert order.create_time.tzinfo is not None
    assert order.pay_time is None
    assert order.transaction_id is None
    assert order.refund_no is None


def test_order_numbers_are_unique():
    numbers = {Order.create(description="x", amount=1).out_trade_no for _ in range(50)}
    assert len(numbers) == 50


def test_order_number_format():
    order_number = OrderNumber.generate()
    assert re.fullmatch(r"N\d{14}[0-9a-f]{8}", order_number.value)

    refund_number = OrderNumber.generate_refund()
    assert re.fullmatch(r"R\d{14}[0-9a-f]{8}", refund_number.value)
    assert str(refund_number) == refund_number.value


def test_order_number_rejects_empty_and_too_long():
    with pytest.raises(ValueError):
        OrderNumber(value="")
    with pytest.raises(ValueError):
        OrderNumber(value="N" * 33)


def test_change_status_stamps_times():
    order = Order.create(description="x", amount=1)
    paid_at = datetime(2025, 1, 13, 10, 30, tzinfo=timezone.utc)

    order.change_status(OrderStatus.SUCCESS, at=paid_at)
    assert order.status == OrderStatus.SUCCESS
    assert order.pay_time == paid_at
    assert order.refund_time is None

    refunded_at = datetime(2025, 1, 14, 9, 0, tzinfo=timezone.utc)
    order.change_status(OrderStatus.REFUNDED, at=refunded_at)
    assert order.status == OrderStatus.REFUNDED
    assert order.refund_time == refunded_at
    assert order.pay_time == paid_at


def test_change_status_to_closed_stamps_nothing():
    order = Order.create(description="x", amount=1)
    order.change_status(OrderStatus.CLOSED)

    assert order.status == OrderStatus.CLOSED
    assert order.pay_time is None
    assert order.refund_time is None


def test_mark_paid_and_start_refund():
    order = Order.create(description="x", amount=500)

    order.mark_paid("4200000001")
    assert order.status == OrderStatus.SUCCESS
    assert order.transaction_id == "4200000001"
    assert order.pay_time is not None

    order.start_refund("R1", 200)
    assert order.status == OrderStatus.REFUNDING
    assert order.refund_no == "R1"
    assert order.refund_amount == 200


@pytest.mark.parametrize(
    "status, can_pay, can_close, can_refund",
    [
        (OrderStatus.NOT_PAID, True, True, False),
        (OrderStatus.SUCCESS, False, False, True),
        (OrderStatus.CLOSED, False, False, False),
        (OrderStatus.REFUNDING, False, False, False),
        (OrderStatus.REFUNDED, False, False, False),
    ],
)
def test_status_guards(status, can_pay, can_close, can_refund):
    order = Order.create(description="x", amount=1)
    order.status = status

    assert order.can_pay is can_pay
    assert order.can_close is can_close
    assert order.can_refund is can_refund


def test_not_paid_wire_value():
    """NOT_PAID uses the provider's trade-state label on the wire."""
    assert OrderStatus.NOT_PAID.value == "NOTPAY"

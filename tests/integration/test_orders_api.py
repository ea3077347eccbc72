"""Integration tests for Orders API endpoints."""

from datetime import datetime, timedelta, timezone

from core.domain.entities.order import Order
from core.domain.enums import OrderStatus


def test_create_order_success(test_client, payment_gateway):
    """POST /api/order creates an unpaid order retrievable by its number."""
    response = test_client.post(
        "/api/order", json={"product_name": "Test Product", "amount": 100}
    )

    assert response.status_code == 200, response.text
    body = response.json()
    assert body["order_id"].startswith("N")
    assert body["code_url"].startswith("weixin://wxpay/bizpayurl")
    assert body["amount"] == 100
    assert body["product_name"] == "Test Product"

    get_response = test_client.get(f"/api/order/{body['order_id']}")
    assert get_response.status_code == 200
    order = get_response.json()
    assert order["out_trade_no"] == body["order_id"]
    assert order["description"] == "Test Product"
    assert order["amount"] == 100
    assert order["status"] == "NOTPAY"
    assert "create_time" in order
    # Unset optional fields are omitted
    assert "pay_time" not in order
    assert "transaction_id" not in order
    assert "refund_no" not in order


def test_create_order_invalid_amount(test_client):
    response = test_client.post("/api/order", json={"product_name": "x", "amount": 0})

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid request"


def test_create_order_missing_product_name(test_client):
    response = test_client.post("/api/order", json={"amount": 100})

    assert response.status_code == 400


def test_create_order_malformed_json(test_client):
    response = test_client.post(
        "/api/order",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400


def test_create_order_upstream_failure(test_client, payment_gateway):
    payment_gateway.fail_operations.add("create order")

    response = test_client.post("/api/order", json={"product_name": "x", "amount": 100})

    assert response.status_code == 500
    assert "create order failed" in response.json()["error"]


def test_repay_existing_order(test_client, create_order):
    created = create_order("Original", 300)

    response = test_client.post(
        "/api/order",
        json={"product_name": "Other", "amount": 1, "out_trade_no": created["order_id"]},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["order_id"] == created["order_id"]
    assert body["product_name"] == "Original"
    assert body["amount"] == 300


def test_repay_unknown_order(test_client):
    response = test_client.post(
        "/api/order",
        json={"product_name": "x", "amount": 1, "out_trade_no": "N-unknown"},
    )

    assert response.status_code == 404


def test_repay_paid_order_rejected(test_client, create_order, order_repository):
    created = create_order()
    order_repository.update_pay_info(created["order_id"], "4200000001")

    response = test_client.post(
        "/api/order",
        json={"product_name": "x", "amount": 1, "out_trade_no": created["order_id"]},
    )

    assert response.status_code == 400
    assert response.json()["status"] == "SUCCESS"


def test_list_orders_newest_first(test_client, order_repository):
    base = datetime(2025, 1, 13, 10, 0, tzinfo=timezone.utc)
    for i, minutes in enumerate([5, 0, 10]):
        order_repository.save(
            Order(
                id=f"id-{i}",
                out_trade_no=f"N-{minutes}",
                description=f"Product {i}",
                amount=100,
                create_time=base + timedelta(minutes=minutes),
            )
        )

    response = test_client.get("/api/orders")

    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 3
    assert [o["out_trade_no"] for o in body["orders"]] == ["N-10", "N-5", "N-0"]


def test_list_orders_empty(test_client):
    response = test_client.get("/api/orders")

    assert response.status_code == 200
    assert response.json() == {"orders": [], "total": 0}


def test_get_order_not_found(test_client):
    response = test_client.get("/api/order/N-unknown")

    assert response.status_code == 404
    assert response.json()["order_id"] == "N-unknown"


def test_get_order_refreshes_from_upstream(test_client, create_order, payment_gateway):
    created = create_order()
    payment_gateway.trade_states[created["order_id"]] = "SUCCESS"
    payment_gateway.transaction_ids[created["order_id"]] = "4200000009"

    response = test_client.get(f"/api/order/{created['order_id']}")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "SUCCESS"
    assert body["transaction_id"] == "4200000009"
    assert "pay_time" in body


def test_close_order(test_client, create_order, order_repository):
    created = create_order()

    response = test_client.post(f"/api/order/{created['order_id']}/close")

    assert response.status_code == 200
    assert response.json()["order_id"] == created["order_id"]
    assert order_repository.get(created["order_id"]).status == OrderStatus.CLOSED


def test_close_paid_order_rejected(test_client, create_order, order_repository):
    created = create_order()
    order_repository.update_pay_info(created["order_id"], "4200000001")

    response = test_client.post(f"/api/order/{created['order_id']}/close")

    assert response.status_code == 400
    assert response.json()["status"] == "SUCCESS"


def test_close_unknown_order(test_client):
    response = test_client.post("/api/order/N-unknown/close")

    assert response.status_code == 404


def test_close_upstream_failure(test_client, create_order, payment_gateway, order_repository):
    created = create_order()
    payment_gateway.fail_operations.add("close order")

    response = test_client.post(f"/api/order/{created['order_id']}/close")

    assert response.status_code == 500
    assert order_repository.get(created["order_id"]).status == OrderStatus.NOT_PAID


def test_refund_paid_order_without_body(test_client, create_order, order_repository):
    created = create_order(amount=500)
    order_repository.update_pay_info(created["order_id"], "4200000001")

    response = test_client.post(f"/api/order/{created['order_id']}/refund")

    assert response.status_code == 200, response.text
    body = response.json()
    assert body["order_id"] == created["order_id"]
    assert body["refund_fee"] == 500
    assert body["refund_no"].startswith("R")
    assert body["refund_status"] == "PROCESSING"

    stored = order_repository.get(created["order_id"])
    assert stored.status == OrderStatus.REFUNDING
    assert stored.refund_amount == 500


def test_refund_partial(test_client, create_order, order_repository, payment_gateway):
    created = create_order(amount=500)
    order_repository.update_pay_info(created["order_id"], "4200000001")

    response = test_client.post(
        f"/api/order/{created['order_id']}/refund",
        json={"refund_fee": 200, "reason": "Damaged"},
    )

    assert response.status_code == 200
    assert response.json()["refund_fee"] == 200
    [call] = payment_gateway.calls_for("apply refund")
    assert call["reason"] == "Damaged"


def test_refund_unpaid_order_rejected(test_client, create_order):
    created = create_order()

    response = test_client.post(f"/api/order/{created['order_id']}/refund")

    assert response.status_code == 400
    assert response.json()["status"] == "NOTPAY"


def test_refund_unknown_order(test_client):
    response = test_client.post("/api/order/N-unknown/refund")

    assert response.status_code == 404


def test_delete_order(test_client, create_order, order_repository):
    created = create_order()

    response = test_client.delete(f"/api/order/{created['order_id']}")

    assert response.status_code == 200
    assert order_repository.get(created["order_id"]) is None

    again = test_client.delete(f"/api/order/{created['order_id']}")
    assert again.status_code == 404


def test_health_endpoints(test_client):
    response = test_client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"

    ready = test_client.get("/health/ready")
    assert ready.status_code == 200
    body = ready.json()
    assert body["status"] == "ready"
    assert body["checks"]["payment_gateway"] == "mock"


def test_root(test_client):
    response = test_client.get("/")

    assert response.status_code == 200
    assert response.json()["health"] == "/health"

"""Pytest configuration and fixtures for API tests."""

import pytest
from fastapi.testclient import TestClient

from api.main import create_app
from core.infrastructure.adapters.payments.mock_payment_gateway import MockPaymentGateway
from core.infrastructure.adapters.persistence.in_memory_order_repository import InMemoryOrderRepository
from core.settings import AppSettings, ServerSettings, WeChatPaySettings


@pytest.fixture
def order_repository() -> InMemoryOrderRepository:
    return InMemoryOrderRepository()


@pytest.fixture
def payment_gateway() -> MockPaymentGateway:
    return MockPaymentGateway()


@pytest.fixture
def test_client(order_repository, payment_gateway) -> TestClient:
    """FastAPI test client wired to an in-memory registry and mock gateway."""
    settings = AppSettings(
        wechatpay=WeChatPaySettings(notify_url="https://example.com/api/notify"),
        server=ServerSettings(),
    )
    app = create_app(
        settings=settings,
        order_repository=order_repository,
        payment_gateway=payment_gateway,
    )
    return TestClient(app)


@pytest.fixture
def create_order(test_client):
    """Create an order through the API and return the response body."""
    def _create(product_name: str = "Test Product", amount: int = 100) -> dict:
        response = test_client.post(
            "/api/order", json={"product_name": product_name, "amount": amount}
        )
        assert response.status_code == 200, response.text
        return response.json()

    return _create

"""
FastAPI Dependencies.

Provides dependency injection for the registry, the payment gateway and
the application services. The registry and gateway are owned by the app
instance (`app.state`) built in `api.main.create_app`.
"""
from __future__ import annotations

import logging
from pathlib import Path

from dotenv import load_dotenv
from fastapi import Depends, Request

# Load environment variables ONCE before any settings objects are created
_PROJECT_ROOT = Path(__file__).resolve().parents[1]
load_dotenv(dotenv_path=_PROJECT_ROOT / ".env")

from core.application.interfaces import IPaymentGateway
from core.application.services.notification_service import PaymentNotificationService
from core.application.services.order_service import OrderApplicationService
from core.domain.repositories.order_repository import OrderRepository
from core.settings import AppSettings

logger = logging.getLogger(__name__)


# =============================================================================
# FACTORIES
# =============================================================================

def build_payment_gateway(settings: AppSettings) -> IPaymentGateway:
    """
    Create the payment gateway selected by settings.

    Raises:
        PaymentConfigurationError: If merchant settings or key files are unusable
    """
    if settings.server.use_mock_gateway:
        from core.infrastructure.adapters.payments.mock_payment_gateway import MockPaymentGateway
        logger.warning("Using MockPaymentGateway (NATIVEPAY_USE_MOCK_GATEWAY=true)")
        return MockPaymentGateway()

    from core.infrastructure.adapters.payments.wechatpay_gateway import WeChatPayGateway
    gateway = WeChatPayGateway(settings.wechatpay)
    logger.info("Using REAL WeChat Pay gateway")
    return gateway


# =============================================================================
# DEPENDENCIES
# =============================================================================

def get_order_repository(request: Request) -> OrderRepository:
    return request.app.state.order_repository


def get_payment_gateway(request: Request) -> IPaymentGateway:
    return request.app.state.payment_gateway


def get_order_service(
    repository: OrderRepository = Depends(get_order_repository),
    gateway: IPaymentGateway = Depends(get_payment_gateway),
) -> OrderApplicationService:
    return OrderApplicationService(order_repository=repository, payment_gateway=gateway)


def get_notification_service(
    repository: OrderRepository = Depends(get_order_repository),
) -> PaymentNotificationService:
    return PaymentNotificationService(order_repository=repository)

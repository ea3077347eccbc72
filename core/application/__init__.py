"""Application layer - services, interfaces, and DTOs."""

from .dtos import CreateOrderRequest, OrderDTO, OrderListDTO, RefundRequest
from .exceptions import (
    InvalidNotificationError,
    NotificationVerificationError,
    PaymentConfigurationError,
    PaymentGatewayError,
)
from .interfaces import IPaymentGateway
from .services import OrderApplicationService, PaymentNotificationService

__all__ = [
    # DTOs
    "CreateOrderRequest",
    "OrderDTO",
    "OrderListDTO",
    "RefundRequest",
    # Errors
    "InvalidNotificationError",
    "NotificationVerificationError",
    "PaymentConfigurationError",
    "PaymentGatewayError",
    # Services
    "OrderApplicationService",
    "PaymentNotificationService",
    # Interfaces
    "IPaymentGateway",
]

"""Application services."""
from .notification_service import NotificationOutcome, NotificationResult, PaymentNotificationService
from .order_service import OrderApplicationService

__all__ = ["NotificationOutcome", "NotificationResult", "OrderApplicationService", "PaymentNotificationService"]

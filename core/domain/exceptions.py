"""Domain exceptions raised by order state rules."""
from typing import Optional

from .enums import OrderStatus


class OrderError(Exception):
    """Base class for order domain errors."""


class OrderNotFoundError(OrderError):
    def __init__(self, order_id: str):
        self.order_id = order_id
        super().__init__(f"Order not found: {order_id}")


class InvalidOrderStateError(OrderError):
    """The requested action is not allowed from the order's current status."""

    def __init__(self, order_id: str, status: OrderStatus, action: str, message: Optional[str] = None):
        self.order_id = order_id
        self.status = status
        self.action = action
        super().__init__(message or f"Order status {status.value} does not allow {action}")

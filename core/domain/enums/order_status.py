"""
Order Status Enum.

Lifecycle labels for a native-payment order.
"""
from enum import Enum


class OrderStatus(str, Enum):
    """Order status values (wire values follow the provider's trade states)."""

    NOT_PAID = "NOTPAY"
    SUCCESS = "SUCCESS"
    CLOSED = "CLOSED"
    REFUNDING = "REFUNDING"
    REFUNDED = "REFUNDED"

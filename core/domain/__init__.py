"""Domain layer - pure domain models and interfaces."""

from .entities import Order
from .enums import OrderStatus
from .exceptions import InvalidOrderStateError, OrderError, OrderNotFoundError
from .repositories import OrderRepository
from .value_objects import OrderNumber

__all__ = [
    "InvalidOrderStateError",
    "Order",
    "OrderError",
    "OrderNotFoundError",
    "OrderNumber",
    "OrderRepository",
    "OrderStatus",
]

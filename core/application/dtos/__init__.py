"""Application DTOs."""

from .notify_dto import RefundResource, TransactionResource
from .order_dto import (
    CloseOrderResponse,
    CreateOrderRequest,
    CreateOrderResponse,
    OrderDTO,
    OrderListDTO,
    RefundRequest,
    RefundResponse,
)

__all__ = [
    "CloseOrderResponse",
    "CreateOrderRequest",
    "CreateOrderResponse",
    "OrderDTO",
    "OrderListDTO",
    "RefundRequest",
    "RefundResource",
    "RefundResponse",
    "TransactionResource",
]

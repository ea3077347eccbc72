"""Application DTOs for Order operations."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from core.domain.entities.order import Order
from core.domain.enums import OrderStatus

DEFAULT_REFUND_REASON = "Customer requested refund"


class CreateOrderRequest(BaseModel):
    """Request DTO for creating (or re-paying) an order."""

    product_name: str = Field(..., min_length=1, description="Goods description")
    amount: int = Field(..., ge=1, description="Amount in fen")
    out_trade_no: Optional[str] = Field(
        None, description="Existing unpaid order to pay again instead of creating one"
    )

    model_config = {"frozen": True}


class CreateOrderResponse(BaseModel):
    """Response DTO carrying the QR code URL to pay with."""

    order_id: str = Field(..., description="Merchant order number")
    code_url: str = Field(..., description="Native payment QR code URL")
    amount: int = Field(..., description="Amount in fen")
    product_name: str = Field(..., description="Goods description")


class OrderDTO(BaseModel):
    """Response DTO for order details."""

    id: str = Field(..., description="Internal identifier")
    out_trade_no: str = Field(..., description="Merchant order number")
    description: str
    amount: int = Field(..., description="Amount in fen")
    status: OrderStatus
    create_time: datetime
    pay_time: Optional[datetime] = None
    transaction_id: Optional[str] = None
    refund_no: Optional[str] = None
    refund_amount: Optional[int] = None
    refund_time: Optional[datetime] = None

    model_config = {"frozen": True}

    @classmethod
    def from_entity(cls, order: Order) -> "OrderDTO":
        return cls(
            id=order.id,
            out_trade_no=order.out_trade_no,
            description=order.description,
            amount=order.amount,
            status=order.status,
            create_time=order.create_time,
            pay_time=order.pay_time,
            transaction_id=order.transaction_id,
            refund_no=order.refund_no,
            refund_amount=order.refund_amount,
            refund_time=order.refund_time,
        )


class OrderListDTO(BaseModel):
    """DTO for listing orders."""

    orders: List[OrderDTO] = Field(default_factory=list, description="Orders, newest first")
    total: int = Field(..., ge=0, description="Total count")


class CloseOrderResponse(BaseModel):
    message: str
    order_id: str


class RefundRequest(BaseModel):
    """Request DTO for a refund; an empty body means full refund."""

    refund_fee: int = Field(0, ge=0, description="Refund amount in fen, 0 for full refund")
    reason: str = Field(DEFAULT_REFUND_REASON, description="Refund reason")


class RefundResponse(BaseModel):
    message: str
    order_id: str
    refund_no: str
    refund_fee: int
    refund_status: Optional[str] = None

"""
Order entity.

CRITICAL: This file must contain ZERO imports from:
- pydantic
- fastapi
- wechatpayv3
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4

from ..enums import OrderStatus
from ..value_objects import OrderNumber


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Order:
    """
    Native-payment order.

    Keyed everywhere by `out_trade_no` (the merchant order number), which
    never changes after creation. Amounts are integers in fen.
    """
    id: str
    out_trade_no: str
    description: str
    amount: int
    status: OrderStatus = OrderStatus.NOT_PAID
    create_time: datetime = field(default_factory=utc_now)
    pay_time: Optional[datetime] = None
    transaction_id: Optional[str] = None
    refund_no: Optional[str] = None
    refund_amount: Optional[int] = None
    refund_time: Optional[datetime] = None

    @classmethod
    def create(cls, description: str, amount: int) -> "Order":
        """Build a fresh unpaid order with a generated merchant order number."""
        return cls(
            id=str(uuid4()),
            out_trade_no=OrderNumber.generate().value,
            description=description,
            amount=amount,
        )

    def change_status(self, status: OrderStatus, at: Optional[datetime] = None) -> None:
        """Set status; SUCCESS stamps pay time and REFUNDED stamps refund time."""
        at = at or utc_now()
        self.status = status
        if status == OrderStatus.SUCCESS:
            self.pay_time = at
        elif status == OrderStatus.REFUNDED:
            self.refund_time = at

    def mark_paid(self, transaction_id: str, at: Optional[datetime] = None) -> None:
        self.transaction_id = transaction_id
        self.status = OrderStatus.SUCCESS
        self.pay_time = at or utc_now()

    def start_refund(self, refund_no: str, refund_amount: int) -> None:
        self.refund_no = refund_no
        self.refund_amount = refund_amount
        self.status = OrderStatus.REFUNDING

    @property
    def can_pay(self) -> bool:
        return self.status == OrderStatus.NOT_PAID

    @property
    def can_close(self) -> bool:
        return self.status == OrderStatus.NOT_PAID

    @property
    def can_refund(self) -> bool:
        return self.status == OrderStatus.SUCCESS

"""Merchant order number value object."""
from dataclasses import dataclass
from datetime import datetime
from uuid import uuid4


@dataclass(frozen=True)
class OrderNumber:
    """
    Merchant-assigned order identifier (`out_trade_no` / `out_refund_no`).

    Format: <prefix><YYYYMMDDhhmmss><8 hex chars>
    Examples:
    - N20250113103000a1b2c3d4  (order)
    - R20250114091500e5f6a7b8  (refund)
    """
    value: str

    ORDER_PREFIX = "N"
    REFUND_PREFIX = "R"

    def __post_init__(self):
        if not self.value:
            raise ValueError("Order number cannot be empty")
        # Provider limit for out_trade_no / out_refund_no
        if len(self.value) > 32:
            raise ValueError(f"Order number longer than 32 characters: {self.value}")

    @classmethod
    def generate(cls, prefix: str = ORDER_PREFIX) -> "OrderNumber":
        stamp = datetime.now().strftime("%Y%m%d%H%M%S")
        return cls(value=f"{prefix}{stamp}{uuid4().hex[:8]}")

    @classmethod
    def generate_refund(cls) -> "OrderNumber":
        return cls.generate(prefix=cls.REFUND_PREFIX)

    def __str__(self) -> str:
        return self.value

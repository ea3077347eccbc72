"""DTOs for decrypted payment-provider callback resources."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class TransactionAmount(BaseModel):
    model_config = ConfigDict(extra="ignore")

    total: int = 0
    payer_total: Optional[int] = None
    currency: Optional[str] = None


class TransactionResource(BaseModel):
    """Decrypted resource of a TRANSACTION.* callback."""

    model_config = ConfigDict(extra="ignore")

    appid: Optional[str] = None
    mchid: Optional[str] = None
    out_trade_no: str = Field(..., min_length=1)
    transaction_id: str = Field(..., min_length=1)
    trade_state: Optional[str] = None
    success_time: Optional[str] = None
    amount: TransactionAmount = Field(default_factory=TransactionAmount)


class RefundAmount(BaseModel):
    model_config = ConfigDict(extra="ignore")

    refund: int = 0
    total: Optional[int] = None


class RefundResource(BaseModel):
    """Decrypted resource of a REFUND.* callback."""

    model_config = ConfigDict(extra="ignore")

    out_trade_no: str = Field(..., min_length=1)
    out_refund_no: Optional[str] = None
    refund_id: Optional[str] = None
    refund_status: str = Field(..., min_length=1)
    success_time: Optional[str] = None
    amount: RefundAmount = Field(default_factory=RefundAmount)

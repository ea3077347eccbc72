"""
Mock Payment Gateway Implementation.

This simulates the provider for local demos and tests.
"""
from typing import Any, Dict, List, Mapping, Optional
import json
import logging

from core.application.exceptions import NotificationVerificationError, PaymentGatewayError
from core.application.interfaces import IPaymentGateway


logger = logging.getLogger(__name__)


class MockPaymentGateway(IPaymentGateway):
    """
    In-process stand-in for the payment provider.

    Records every call; `trade_states` drives what `query_order` reports and
    `fail_operations` makes the named operations raise PaymentGatewayError.
    Callbacks are accepted as plaintext JSON envelopes.
    """

    def __init__(self):
        self.calls: List[Dict[str, Any]] = []
        self.trade_states: Dict[str, str] = {}
        self.transaction_ids: Dict[str, str] = {}
        self.fail_operations: set = set()
        self.refund_status = "PROCESSING"
        logger.info("MockPaymentGateway initialized (no upstream calls)")

    def _record(self, operation: str, **kwargs) -> None:
        self.calls.append({"operation": operation, **kwargs})
        if operation in self.fail_operations:
            raise PaymentGatewayError(operation, code=500, message="mock failure")

    def calls_for(self, operation: str) -> List[Dict[str, Any]]:
        return [call for call in self.calls if call["operation"] == operation]

    async def create_native_order(self, out_trade_no: str, description: str, total: int) -> str:
        self._record("create order", out_trade_no=out_trade_no, description=description, total=total)
        self.trade_states.setdefault(out_trade_no, "NOTPAY")
        return f"weixin://wxpay/bizpayurl?pr={out_trade_no}"

    async def query_order(self, out_trade_no: str) -> Dict[str, Any]:
        self._record("query order", out_trade_no=out_trade_no)
        result: Dict[str, Any] = {
            "out_trade_no": out_trade_no,
            "trade_state": self.trade_states.get(out_trade_no, "NOTPAY"),
        }
        if out_trade_no in self.transaction_ids:
            result["transaction_id"] = self.transaction_ids[out_trade_no]
        return result

    async def close_order(self, out_trade_no: str) -> None:
        self._record("close order", out_trade_no=out_trade_no)
        self.trade_states[out_trade_no] = "CLOSED"

    async def apply_refund(
        self,
        out_trade_no: str,
        out_refund_no: str,
        refund: int,
        total: int,
        reason: str,
    ) -> Dict[str, Any]:
        self._record(
            "apply refund",
            out_trade_no=out_trade_no,
            out_refund_no=out_refund_no,
            refund=refund,
            total=total,
            reason=reason,
        )
        return {
            "out_trade_no": out_trade_no,
            "out_refund_no": out_refund_no,
            "status": self.refund_status,
            "amount": {"refund": refund, "total": total, "currency": "CNY"},
        }

    async def parse_notification(self, headers: Mapping[str, str], body: bytes) -> Dict[str, Any]:
        self._record("parse notification")
        try:
            envelope = json.loads(body)
        except ValueError as e:
            raise NotificationVerificationError(f"Callback is not valid JSON: {e}") from e
        if not isinstance(envelope, dict) or not isinstance(envelope.get("resource"), dict):
            raise NotificationVerificationError("Callback resource missing")
        return envelope

"""
Payment notification service.

Applies verified provider callbacks (payment and refund outcomes) to the
order registry.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Union

from pydantic import ValidationError

from core.application.dtos.notify_dto import RefundResource, TransactionResource
from core.application.exceptions import InvalidNotificationError
from core.domain.enums import OrderStatus
from core.domain.repositories.order_repository import OrderRepository

logger = logging.getLogger(__name__)

TRANSACTION_SUCCESS = "TRANSACTION.SUCCESS"
REFUND_EVENTS = ("REFUND.SUCCESS", "REFUND.ABNORMAL", "REFUND.CLOSED")


class NotificationOutcome(str, Enum):
    PAYMENT_APPLIED = "payment_applied"
    REFUND_APPLIED = "refund_applied"
    IGNORED = "ignored"


@dataclass(frozen=True)
class NotificationResult:
    outcome: NotificationOutcome
    resource: Optional[Union[TransactionResource, RefundResource]] = None


class PaymentNotificationService:
    """Branches on callback event type and updates the registry."""

    def __init__(self, order_repository: OrderRepository) -> None:
        self._orders = order_repository

    def handle(self, event: Dict[str, Any]) -> NotificationResult:
        """
        Apply one decrypted callback.

        Args:
            event: Callback envelope whose `resource` is already decrypted

        Returns:
            What was done with the event and the parsed resource

        Raises:
            InvalidNotificationError: If the resource does not match the event type
        """
        event_type = event.get("event_type")
        logger.info(f"[Notify] Received event: {event_type} (id: {event.get('id')})")

        if event_type == TRANSACTION_SUCCESS:
            transaction = self.parse_transaction(event)
            self.handle_payment(transaction)
            return NotificationResult(NotificationOutcome.PAYMENT_APPLIED, transaction)
        if event_type in REFUND_EVENTS:
            refund = self.parse_refund(event)
            self.handle_refund(refund)
            return NotificationResult(NotificationOutcome.REFUND_APPLIED, refund)

        logger.warning(f"[Notify] Unknown event type: {event_type}")
        return NotificationResult(NotificationOutcome.IGNORED)

    @staticmethod
    def parse_transaction(event: Dict[str, Any]) -> TransactionResource:
        try:
            return TransactionResource.model_validate(event.get("resource") or {})
        except ValidationError as e:
            raise InvalidNotificationError(f"Malformed transaction resource: {e}") from e

    @staticmethod
    def parse_refund(event: Dict[str, Any]) -> RefundResource:
        try:
            return RefundResource.model_validate(event.get("resource") or {})
        except ValidationError as e:
            raise InvalidNotificationError(f"Malformed refund resource: {e}") from e

    def handle_payment(self, transaction: TransactionResource) -> None:
        logger.info(f"[Notify] Payment succeeded: {transaction.out_trade_no}")
        if not self._orders.update_pay_info(transaction.out_trade_no, transaction.transaction_id):
            logger.warning(f"[Notify] Payment for unknown order: {transaction.out_trade_no}")

    def handle_refund(self, refund: RefundResource) -> None:
        logger.info(
            f"[Notify] Refund status={refund.refund_status}, "
            f"order={refund.out_trade_no}, refund_no={refund.out_refund_no}"
        )
        if refund.refund_status == "SUCCESS":
            target = OrderStatus.REFUNDED
        elif refund.refund_status == "CLOSED":
            # Refund closed: the order goes back to paid
            target = OrderStatus.SUCCESS
        else:
            logger.warning(f"[Notify] Refund {refund.out_refund_no} needs manual handling: {refund.refund_status}")
            return

        if not self._orders.update_status(refund.out_trade_no, target):
            logger.warning(f"[Notify] Refund for unknown order: {refund.out_trade_no}")

    async def process_payment_success(self, transaction: TransactionResource) -> None:
        """Post-payment hook, run after the callback has been acknowledged."""
        logger.info(
            f"[Process] Payment completed: {transaction.out_trade_no}, "
            f"amount: {transaction.amount.total} fen"
        )

"""Application service for native-payment order operations."""

import logging
from typing import Optional

from core.application.dtos.order_dto import (
    DEFAULT_REFUND_REASON,
    CloseOrderResponse,
    CreateOrderRequest,
    CreateOrderResponse,
    OrderDTO,
    OrderListDTO,
    RefundRequest,
    RefundResponse,
)
from core.application.exceptions import PaymentGatewayError
from core.application.interfaces import IPaymentGateway
from core.domain.entities.order import Order
from core.domain.enums import OrderStatus
from core.domain.exceptions import InvalidOrderStateError, OrderNotFoundError
from core.domain.repositories.order_repository import OrderRepository
from core.domain.value_objects import OrderNumber

logger = logging.getLogger(__name__)


class OrderApplicationService:
    """
    Application service for orchestrating order operations.

    Responsibilities:
    - Enforce the status checks (close from NOT_PAID, refund from SUCCESS)
    - Call the payment gateway, then update the registry
    - Transform domain entities into response DTOs

    There is no transaction spanning the upstream call and the local
    update; notifications and queries reconcile later.
    """

    def __init__(self, order_repository: OrderRepository, payment_gateway: IPaymentGateway) -> None:
        """Initialize order application service.

        Args:
            order_repository: Order registry
            payment_gateway: Payment provider adapter
        """
        self._orders = order_repository
        self._gateway = payment_gateway

    def _require(self, out_trade_no: str) -> Order:
        order = self._orders.get(out_trade_no)
        if order is None:
            raise OrderNotFoundError(out_trade_no)
        return order

    async def create_order(self, request: CreateOrderRequest) -> CreateOrderResponse:
        """Create a new order, or place an existing unpaid order upstream again.

        Args:
            request: CreateOrderRequest DTO

        Returns:
            CreateOrderResponse with the QR code URL
        """
        if request.out_trade_no:
            existing = self._require(request.out_trade_no)
            if not existing.can_pay:
                raise InvalidOrderStateError(
                    existing.out_trade_no,
                    existing.status,
                    "repay",
                    message="Order status does not allow paying again",
                )
            out_trade_no = existing.out_trade_no
            description = existing.description
            amount = existing.amount
            logger.info(f"Re-placing unpaid order {out_trade_no}")
        else:
            order = Order.create(description=request.product_name, amount=request.amount)
            self._orders.save(order)
            out_trade_no = order.out_trade_no
            description = order.description
            amount = order.amount
            logger.info(f"Created order {out_trade_no} ({amount} fen, '{description}')")

        code_url = await self._gateway.create_native_order(out_trade_no, description, amount)

        return CreateOrderResponse(
            order_id=out_trade_no,
            code_url=code_url,
            amount=amount,
            product_name=description,
        )

    def list_orders(self) -> OrderListDTO:
        orders = self._orders.get_all()
        return OrderListDTO(
            orders=[OrderDTO.from_entity(order) for order in orders],
            total=len(orders),
        )

    async def get_order(self, out_trade_no: str) -> OrderDTO:
        """Get an order; unpaid orders are first reconciled with the provider.

        Upstream failures during reconciliation are logged and the local
        view is returned unchanged.
        """
        order = self._require(out_trade_no)

        if order.status == OrderStatus.NOT_PAID:
            try:
                transaction = await self._gateway.query_order(out_trade_no)
            except PaymentGatewayError as e:
                logger.warning(f"Live status refresh failed for {out_trade_no}: {e}")
            else:
                self._apply_trade_state(out_trade_no, transaction)
                order = self._require(out_trade_no)

        return OrderDTO.from_entity(order)

    def _apply_trade_state(self, out_trade_no: str, transaction: dict) -> None:
        trade_state = transaction.get("trade_state")
        if trade_state == "SUCCESS":
            self._orders.update_pay_info(out_trade_no, transaction.get("transaction_id") or "")
        elif trade_state == "CLOSED":
            self._orders.update_status(out_trade_no, OrderStatus.CLOSED)
        elif trade_state:
            logger.debug(f"Upstream trade state for {out_trade_no}: {trade_state}")

    async def close_order(self, out_trade_no: str) -> CloseOrderResponse:
        order = self._require(out_trade_no)
        if not order.can_close:
            raise InvalidOrderStateError(
                out_trade_no, order.status, "close", message="Order status does not allow closing"
            )

        await self._gateway.close_order(out_trade_no)
        self._orders.update_status(out_trade_no, OrderStatus.CLOSED)

        return CloseOrderResponse(message="Order closed", order_id=out_trade_no)

    async def refund_order(self, out_trade_no: str, request: Optional[RefundRequest] = None) -> RefundResponse:
        """Request a refund for a paid order.

        A refund fee of 0, or one larger than the order amount, refunds the
        whole order.
        """
        request = request or RefundRequest()

        order = self._require(out_trade_no)
        if not order.can_refund:
            raise InvalidOrderStateError(
                out_trade_no, order.status, "refund", message="Order status does not allow refund"
            )

        refund_fee = request.refund_fee
        if refund_fee == 0 or refund_fee > order.amount:
            refund_fee = order.amount

        out_refund_no = OrderNumber.generate_refund().value
        reason = request.reason or DEFAULT_REFUND_REASON

        refund = await self._gateway.apply_refund(
            out_trade_no=out_trade_no,
            out_refund_no=out_refund_no,
            refund=refund_fee,
            total=order.amount,
            reason=reason,
        )
        self._orders.update_refund_info(out_trade_no, out_refund_no, refund_fee)

        return RefundResponse(
            message="Refund submitted",
            order_id=out_trade_no,
            refund_no=out_refund_no,
            refund_fee=refund_fee,
            refund_status=refund.get("status"),
        )

    def purge_order(self, out_trade_no: str) -> None:
        """Remove an order from the registry without touching the provider."""
        if not self._orders.delete(out_trade_no):
            raise OrderNotFoundError(out_trade_no)

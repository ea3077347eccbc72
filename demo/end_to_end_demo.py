"""
End-to-End Demo: Native Payment Lifecycle

This demonstrates the complete workflow:
1. Create an order and get its QR code URL
2. Receive the payment-success callback
3. Request a partial refund
4. Receive the refund-success callback
5. Create a second order and close it unpaid

Uses the mock payment gateway (no merchant keys or network needed).
"""
import asyncio
import logging

from core.application.dtos.order_dto import CreateOrderRequest, RefundRequest
from core.application.services.notification_service import PaymentNotificationService
from core.application.services.order_service import OrderApplicationService
from core.domain.enums import OrderStatus
from core.infrastructure.adapters.payments.mock_payment_gateway import MockPaymentGateway
from core.infrastructure.adapters.persistence.in_memory_order_repository import InMemoryOrderRepository
from core.infrastructure.logging import configure_logging

logger = logging.getLogger(__name__)


async def run_demo() -> InMemoryOrderRepository:
    """Run the lifecycle and return the registry for inspection."""
    repository = InMemoryOrderRepository()
    gateway = MockPaymentGateway()
    orders = OrderApplicationService(order_repository=repository, payment_gateway=gateway)
    notifications = PaymentNotificationService(order_repository=repository)

    print("\n" + "=" * 80)
    print("DEMO: Native payment lifecycle")
    print("=" * 80 + "\n")

    created = await orders.create_order(CreateOrderRequest(product_name="Demo Coffee", amount=1200))
    print(f"[1/5] Order {created.order_id} created, scan: {created.code_url}")

    notifications.handle({
        "event_type": "TRANSACTION.SUCCESS",
        "resource": {
            "out_trade_no": created.order_id,
            "transaction_id": "4200000000000000001",
            "trade_state": "SUCCESS",
            "amount": {"total": 1200},
        },
    })
    print(f"[2/5] Paid: {repository.get(created.order_id).status.value}")

    refund = await orders.refund_order(created.order_id, RefundRequest(refund_fee=200, reason="Demo refund"))
    print(f"[3/5] Refund {refund.refund_no} submitted for {refund.refund_fee} fen")

    notifications.handle({
        "event_type": "REFUND.SUCCESS",
        "resource": {
            "out_trade_no": created.order_id,
            "out_refund_no": refund.refund_no,
            "refund_status": "SUCCESS",
            "amount": {"refund": refund.refund_fee},
        },
    })
    print(f"[4/5] Refunded: {repository.get(created.order_id).status.value}")

    unpaid = await orders.create_order(CreateOrderRequest(product_name="Demo Tea", amount=800))
    await orders.close_order(unpaid.order_id)
    print(f"[5/5] Order {unpaid.order_id} closed")

    listing = orders.list_orders()
    print(f"\n{listing.total} order(s):")
    for order in listing.orders:
        print(f"  {order.out_trade_no}  {order.status.value:<9}  {order.amount:>6} fen  {order.description}")

    assert repository.get(created.order_id).status == OrderStatus.REFUNDED
    assert repository.get(unpaid.order_id).status == OrderStatus.CLOSED
    return repository


if __name__ == "__main__":
    configure_logging("INFO")
    asyncio.run(run_demo())

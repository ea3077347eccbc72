"""
In-Memory Order Repository Implementation.

The order registry: a dict keyed by merchant order number behind one lock.
State is lost when the process exits.
"""
from dataclasses import replace
from typing import Dict, List, Optional
import logging
import threading

from core.domain.entities.order import Order
from core.domain.enums import OrderStatus
from core.domain.repositories.order_repository import OrderRepository


logger = logging.getLogger(__name__)


class InMemoryOrderRepository(OrderRepository):
    """
    Lock-guarded in-memory implementation of OrderRepository.

    Every operation holds the lock for its whole duration, so readers
    always observe a consistent order. Lookups hand out copies; mutate
    orders only through the update methods.
    """

    def __init__(self):
        """Initialize empty storage."""
        self._storage: Dict[str, Order] = {}
        self._lock = threading.Lock()
        logger.info("InMemoryOrderRepository initialized (in-memory storage)")

    def save(self, order: Order) -> None:
        with self._lock:
            self._storage[order.out_trade_no] = replace(order)
        logger.info(f"Order saved: {order.out_trade_no} (status: {order.status.value})")

    def get(self, out_trade_no: str) -> Optional[Order]:
        with self._lock:
            order = self._storage.get(out_trade_no)
            return replace(order) if order else None

    def get_all(self) -> List[Order]:
        with self._lock:
            orders = [replace(order) for order in self._storage.values()]
        orders.sort(key=lambda order: order.create_time, reverse=True)
        return orders

    def update_status(self, out_trade_no: str, status: OrderStatus) -> bool:
        with self._lock:
            order = self._storage.get(out_trade_no)
            if order is None:
                return False
            previous = order.status
            order.change_status(status)
        logger.info(f"Order {out_trade_no} status: {previous.value} -> {status.value}")
        return True

    def update_pay_info(self, out_trade_no: str, transaction_id: str) -> bool:
        with self._lock:
            order = self._storage.get(out_trade_no)
            if order is None:
                return False
            order.mark_paid(transaction_id)
        logger.info(f"Order {out_trade_no} paid (transaction_id: {transaction_id})")
        return True

    def update_refund_info(self, out_trade_no: str, refund_no: str, refund_amount: int) -> bool:
        with self._lock:
            order = self._storage.get(out_trade_no)
            if order is None:
                return False
            order.start_refund(refund_no, refund_amount)
        logger.info(f"Order {out_trade_no} refunding (refund_no: {refund_no}, amount: {refund_amount})")
        return True

    def delete(self, out_trade_no: str) -> bool:
        with self._lock:
            existed = self._storage.pop(out_trade_no, None) is not None
        if existed:
            logger.info(f"Order deleted: {out_trade_no}")
        else:
            logger.warning(f"Order not found for deletion: {out_trade_no}")
        return existed

    def clear(self) -> None:
        """Clear all orders (for demo/testing)."""
        with self._lock:
            self._storage.clear()
        logger.info("Order repository cleared")

    def __len__(self) -> int:
        with self._lock:
            return len(self._storage)

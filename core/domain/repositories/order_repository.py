"""Repository interface for the order registry."""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..entities.order import Order
from ..enums import OrderStatus


class OrderRepository(ABC):
    """Abstract registry of orders keyed by merchant order number."""

    @abstractmethod
    def save(self, order: Order) -> None:
        """Insert or overwrite by `order.out_trade_no`."""

    @abstractmethod
    def get(self, out_trade_no: str) -> Optional[Order]:
        """Point lookup.

        Returns:
            A snapshot of the order if found, None otherwise
        """

    @abstractmethod
    def get_all(self) -> List[Order]:
        """All orders, newest `create_time` first."""

    @abstractmethod
    def update_status(self, out_trade_no: str, status: OrderStatus) -> bool:
        """Set status (stamping pay/refund time where relevant).

        Returns:
            True if the order existed
        """

    @abstractmethod
    def update_pay_info(self, out_trade_no: str, transaction_id: str) -> bool:
        """Record the provider transaction id and mark the order paid."""

    @abstractmethod
    def update_refund_info(self, out_trade_no: str, refund_no: str, refund_amount: int) -> bool:
        """Record refund number/amount and mark the order refunding."""

    @abstractmethod
    def delete(self, out_trade_no: str) -> bool:
        """Remove an order (manual purge).

        Returns:
            True if the order existed
        """

"""Application layer interfaces."""
from abc import ABC, abstractmethod
from typing import Any, Dict, Mapping


class IPaymentGateway(ABC):
    """
    Interface for the payment provider's native (QR-code) flow.

    Implementations delegate request signing, response verification and
    callback decryption to the provider SDK. Every failing call raises
    `PaymentGatewayError`.
    """

    @abstractmethod
    async def create_native_order(self, out_trade_no: str, description: str, total: int) -> str:
        """
        Place a native order upstream.

        Args:
            out_trade_no: Merchant order number
            description: Goods description shown to the payer
            total: Amount in fen

        Returns:
            The `code_url` to render as a QR code
        """
        pass

    @abstractmethod
    async def query_order(self, out_trade_no: str) -> Dict[str, Any]:
        """
        Query an order by merchant order number.

        Returns:
            Provider transaction object (`trade_state`, `transaction_id`, ...)
        """
        pass

    @abstractmethod
    async def close_order(self, out_trade_no: str) -> None:
        """Close an unpaid order upstream."""
        pass

    @abstractmethod
    async def apply_refund(
        self,
        out_trade_no: str,
        out_refund_no: str,
        refund: int,
        total: int,
        reason: str,
    ) -> Dict[str, Any]:
        """
        Request a refund.

        Args:
            out_trade_no: Merchant order number being refunded
            out_refund_no: Merchant refund number
            refund: Refund amount in fen
            total: Original order amount in fen
            reason: Refund reason shown to the payer

        Returns:
            Provider refund object (includes `status`)
        """
        pass

    @abstractmethod
    async def parse_notification(self, headers: Mapping[str, str], body: bytes) -> Dict[str, Any]:
        """
        Verify and decrypt a provider callback.

        Returns:
            The callback envelope with `resource` replaced by its decrypted dict

        Raises:
            NotificationVerificationError: If the signature or ciphertext is invalid
        """
        pass

"""Errors raised at the payment-provider boundary."""
from typing import Any, Optional


class PaymentGatewayError(Exception):
    """
    An SDK call failed or the provider answered with a non-2xx code.

    The provider's own code and message are kept verbatim.
    """

    def __init__(self, operation: str, code: Optional[int] = None, message: Any = None):
        self.operation = operation
        self.code = code
        self.provider_message = message
        super().__init__(f"{operation} failed: code={code}, message={message}")


class PaymentConfigurationError(Exception):
    """Merchant settings or key material are missing or unreadable."""


class NotificationVerificationError(Exception):
    """A provider callback failed signature verification or decryption."""


class InvalidNotificationError(ValueError):
    """A verified callback carried a resource of unexpected shape."""

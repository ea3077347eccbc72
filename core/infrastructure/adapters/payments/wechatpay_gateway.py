"""
WeChat Pay native gateway.

Thin adapter over the `wechatpayv3` SDK. Signing, response verification,
callback verification and AES-GCM decryption all happen inside the SDK.
"""
from __future__ import annotations

import asyncio
import json
import logging
from functools import partial
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

from wechatpayv3 import WeChatPay, WeChatPayType

from core.application.exceptions import (
    NotificationVerificationError,
    PaymentConfigurationError,
    PaymentGatewayError,
)
from core.application.interfaces import IPaymentGateway
from core.infrastructure.logging import get_logger
from core.settings.modules.wechatpay_settings import WeChatPaySettings

logger = logging.getLogger(__name__)

CURRENCY = "CNY"

# Headers the SDK reads to verify a callback signature
CALLBACK_HEADERS = (
    "Wechatpay-Signature",
    "Wechatpay-Timestamp",
    "Wechatpay-Nonce",
    "Wechatpay-Serial",
    "Wechatpay-Signature-Type",
)


def load_key_file(path: str, label: str) -> str:
    """Read PEM key material, raising PaymentConfigurationError on failure."""
    if not path:
        raise PaymentConfigurationError(f"{label} path is not configured")
    try:
        return Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise PaymentConfigurationError(f"Failed to load {label} from {path}: {e}") from e


def _decode(message: Any) -> Dict[str, Any]:
    if not message:
        return {}
    if isinstance(message, dict):
        return message
    try:
        return json.loads(message)
    except (TypeError, ValueError):
        return {"raw": message}


class WeChatPayGateway(IPaymentGateway):
    """
    WeChat Pay API v3 native-payment adapter (public-key verification mode).

    The SDK is synchronous (requests-based), so every call runs in the
    event loop's default executor.
    """

    def __init__(self, settings: WeChatPaySettings, client: Optional[WeChatPay] = None) -> None:
        self.settings = settings
        self._client = client if client is not None else self._build_client(settings)
        logger.info(f"WeChatPayGateway initialized (mchid: {settings.mch_id})")

    @staticmethod
    def _build_client(settings: WeChatPaySettings) -> WeChatPay:
        missing = settings.missing_required()
        if missing:
            raise PaymentConfigurationError(f"Missing WeChat Pay settings: {', '.join(missing)}")

        private_key = load_key_file(settings.private_key_path, "merchant private key")
        public_key = load_key_file(settings.public_key_path, "WeChat Pay public key")

        try:
            return WeChatPay(
                wechatpay_type=WeChatPayType.NATIVE,
                mchid=settings.mch_id,
                private_key=private_key,
                cert_serial_no=settings.cert_serial_no,
                apiv3_key=settings.apiv3_key,
                appid=settings.app_id,
                notify_url=settings.notify_url,
                logger=get_logger("wechatpayv3"),
                public_key=public_key,
                public_key_id=settings.public_key_id,
            )
        except Exception as e:
            raise PaymentConfigurationError(f"Failed to create WeChat Pay client: {e}") from e

    async def _call(self, operation: str, func, **kwargs) -> Tuple[int, Dict[str, Any]]:
        loop = asyncio.get_running_loop()
        try:
            code, message = await loop.run_in_executor(None, partial(func, **kwargs))
        except Exception as e:
            logger.error(f"{operation} raised: {e}", exc_info=True)
            raise PaymentGatewayError(operation, message=str(e)) from e

        if not 200 <= code < 300:
            logger.warning(f"{operation} rejected: code={code}, message={message}")
            raise PaymentGatewayError(operation, code=code, message=message)
        return code, _decode(message)

    async def create_native_order(self, out_trade_no: str, description: str, total: int) -> str:
        _, result = await self._call(
            "create order",
            self._client.pay,
            description=description,
            out_trade_no=out_trade_no,
            amount={"total": total},
            pay_type=WeChatPayType.NATIVE,
        )
        code_url = result.get("code_url")
        if not code_url:
            raise PaymentGatewayError("create order", message=f"no code_url in response: {result}")
        logger.info(f"Native order created upstream: {out_trade_no}")
        return code_url

    async def query_order(self, out_trade_no: str) -> Dict[str, Any]:
        _, result = await self._call(
            "query order",
            self._client.query,
            out_trade_no=out_trade_no,
        )
        return result

    async def close_order(self, out_trade_no: str) -> None:
        await self._call("close order", self._client.close, out_trade_no=out_trade_no)
        logger.info(f"Order closed upstream: {out_trade_no}")

    async def apply_refund(
        self,
        out_trade_no: str,
        out_refund_no: str,
        refund: int,
        total: int,
        reason: str,
    ) -> Dict[str, Any]:
        _, result = await self._call(
            "apply refund",
            self._client.refund,
            out_refund_no=out_refund_no,
            amount={"refund": refund, "total": total, "currency": CURRENCY},
            out_trade_no=out_trade_no,
            reason=reason,
            notify_url=self.settings.notify_url,
        )
        logger.info(f"Refund requested upstream: {out_trade_no} / {out_refund_no} ({refund})")
        return result

    async def parse_notification(self, headers: Mapping[str, str], body: bytes) -> Dict[str, Any]:
        sdk_headers = {name: headers.get(name) for name in CALLBACK_HEADERS if headers.get(name) is not None}
        text = body.decode("utf-8") if isinstance(body, bytes) else body
        loop = asyncio.get_running_loop()
        try:
            result = await loop.run_in_executor(None, self._client.callback, sdk_headers, text)
        except Exception as e:
            raise NotificationVerificationError(f"Callback could not be decrypted: {e}") from e

        if not result:
            raise NotificationVerificationError("Callback signature verification failed")
        if not isinstance(result.get("resource"), dict):
            raise NotificationVerificationError("Callback resource missing after decryption")
        return result

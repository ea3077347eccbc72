from __future__ import annotations

from typing import List

from pydantic import Field

from core.settings.base_settings import NativePayBaseSettings


class WeChatPaySettings(NativePayBaseSettings):
    """
    WeChat Pay merchant settings (public-key verification mode).
    Loaded from .env file with exact variable name matching.
    """

    app_id: str = Field("", alias="WXPAY_APPID")
    mch_id: str = Field("", alias="WXPAY_MCHID")
    apiv3_key: str = Field("", alias="WXPAY_APIV3_KEY")
    cert_serial_no: str = Field("", alias="WXPAY_CERT_SERIAL_NO")
    private_key_path: str = Field("", alias="WXPAY_PRIVATE_KEY_PATH")
    public_key_id: str = Field("", alias="WXPAY_PUBLIC_KEY_ID")
    public_key_path: str = Field("", alias="WXPAY_PUBLIC_KEY_PATH")
    notify_url: str = Field("", alias="WXPAY_NOTIFY_URL")

    def missing_required(self) -> List[str]:
        """Return env aliases of mandatory fields that are empty."""
        required = ("app_id", "mch_id", "apiv3_key", "public_key_id")
        fields = type(self).model_fields
        return [fields[name].alias for name in required if not getattr(self, name)]

from __future__ import annotations

from functools import lru_cache

from pydantic import BaseModel, ConfigDict

from core.settings.modules.server_settings import ServerSettings
from core.settings.modules.wechatpay_settings import WeChatPaySettings


class AppSettings(BaseModel):
    """Application settings aggregator."""

    model_config = ConfigDict(arbitrary_types_allowed=True, extra="ignore")

    wechatpay: WeChatPaySettings
    server: ServerSettings


@lru_cache()
def get_app_settings() -> AppSettings:
    return AppSettings(
        wechatpay=WeChatPaySettings(),
        server=ServerSettings(),
    )

# Settings modules
from .app_settings import AppSettings, get_app_settings
from .server_settings import ServerSettings
from .wechatpay_settings import WeChatPaySettings

__all__ = [
    "AppSettings",
    "get_app_settings",
    "ServerSettings",
    "WeChatPaySettings",
]

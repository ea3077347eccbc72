# Settings package
from core.settings.modules import AppSettings, get_app_settings, ServerSettings, WeChatPaySettings

__all__ = ["get_app_settings", "AppSettings", "ServerSettings", "WeChatPaySettings"]

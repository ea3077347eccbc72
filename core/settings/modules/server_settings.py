from __future__ import annotations

from pydantic import Field

from core.settings.base_settings import NativePayBaseSettings


class ServerSettings(NativePayBaseSettings):
    """HTTP server and runtime switches."""

    host: str = Field("0.0.0.0", alias="HOST")
    port: int = Field(8080, alias="PORT")
    log_level: str = Field("INFO", alias="NATIVEPAY_LOG_LEVEL")
    use_mock_gateway: bool = Field(False, alias="NATIVEPAY_USE_MOCK_GATEWAY")

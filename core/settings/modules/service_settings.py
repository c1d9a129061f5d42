from __future__ import annotations

from pydantic import Field

from core.settings.base import OrdersBaseSettings


class ServiceSettings(OrdersBaseSettings):
    """Process-wide settings."""

    service_name: str = Field("orders-service", alias="SERVICE_NAME")
    log_level: str = Field("INFO", alias="LOG_LEVEL")

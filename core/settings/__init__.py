# Settings package
from core.settings.modules import (
    AppSettings,
    DatabaseSettings,
    ProductsSettings,
    ServiceSettings,
    TransportSettings,
    get_app_settings,
)

__all__ = [
    "get_app_settings",
    "AppSettings",
    "DatabaseSettings",
    "ProductsSettings",
    "ServiceSettings",
    "TransportSettings",
]

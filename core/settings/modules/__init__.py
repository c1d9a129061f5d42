# Settings modules
from .app_settings import AppSettings, get_app_settings
from .database_settings import DatabaseSettings
from .products_settings import ProductsSettings
from .service_settings import ServiceSettings
from .transport_settings import TransportSettings

__all__ = [
    "AppSettings",
    "get_app_settings",
    "DatabaseSettings",
    "ProductsSettings",
    "ServiceSettings",
    "TransportSettings",
]

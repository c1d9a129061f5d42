from __future__ import annotations

from functools import lru_cache

from pydantic import BaseModel, ConfigDict

from core.settings.modules.database_settings import DatabaseSettings
from core.settings.modules.products_settings import ProductsSettings
from core.settings.modules.service_settings import ServiceSettings
from core.settings.modules.transport_settings import TransportSettings


class AppSettings(BaseModel):
    """
    Application settings aggregator.

    Built once at the edge (api.dependencies) and handed to the core as
    plain constructor arguments.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, extra="ignore")

    service: ServiceSettings
    database: DatabaseSettings
    transport: TransportSettings
    products: ProductsSettings

    @property
    def log_level(self) -> str:
        return self.service.log_level


@lru_cache()
def get_app_settings() -> AppSettings:
    return AppSettings(
        service=ServiceSettings(),
        database=DatabaseSettings(),
        transport=TransportSettings(),
        products=ProductsSettings(),
    )

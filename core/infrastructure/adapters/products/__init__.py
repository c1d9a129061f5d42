"""Product catalog adapters."""
from .redis_product_client import RedisProductClient

__all__ = ["RedisProductClient"]

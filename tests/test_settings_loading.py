"""
Test settings loading from the environment.

Every section reads its variables by exact alias and falls back to the
documented defaults.
"""
from __future__ import annotations

import pytest

# Import api.dependencies so dotenv loads exactly once (canonical location).
import api.dependencies  # noqa: F401

from core.settings import (
    ProductsSettings,
    TransportSettings,
    get_app_settings,
)


_ENV_KEYS = [
    "DATABASE_URL",
    "DB_ECHO_SQL",
    "DB_POOL_SIZE",
    "DB_MAX_OVERFLOW",
    "DB_CREATE_SCHEMA",
    "REDIS_URL",
    "ORDERS_COMMAND_STREAM",
    "ORDERS_CONSUMER_GROUP",
    "ORDERS_CONSUMER_NAME",
    "RPC_BLOCK_MS",
    "RPC_BATCH_SIZE",
    "RPC_REPLY_TTL_SECONDS",
    "PRODUCTS_COMMAND_STREAM",
    "PRODUCTS_RPC_TIMEOUT_SECONDS",
    "LOG_LEVEL",
]


@pytest.fixture
def clean_env(monkeypatch):
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    get_app_settings.cache_clear()
    yield monkeypatch
    get_app_settings.cache_clear()


def _collect_aliases(model_cls) -> set[str]:
    return {field.alias for field in model_cls.model_fields.values() if field.alias}


def test_every_documented_env_key_is_mapped():
    settings = get_app_settings()
    aliases = set()
    for section in (settings.service, settings.database, settings.transport, settings.products):
        aliases |= _collect_aliases(type(section))

    missing = [key for key in _ENV_KEYS if key not in aliases]
    assert missing == []


def test_defaults(clean_env):
    transport = TransportSettings(_env_file=None)
    products = ProductsSettings(_env_file=None)

    assert transport.command_stream == "orders:commands"
    assert transport.batch_size == 10
    assert transport.block_ms == 1000
    assert products.command_stream == "products:commands"
    assert products.timeout_seconds == 5.0


def test_env_overrides(clean_env):
    clean_env.setenv("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
    clean_env.setenv("DB_CREATE_SCHEMA", "true")
    clean_env.setenv("PRODUCTS_RPC_TIMEOUT_SECONDS", "2.5")
    clean_env.setenv("LOG_LEVEL", "DEBUG")

    settings = get_app_settings()

    assert settings.database.database_url == "sqlite+aiosqlite:///:memory:"
    assert settings.database.create_schema is True
    assert settings.products.timeout_seconds == 2.5
    assert settings.log_level == "DEBUG"


def test_invalid_timeout_is_rejected(clean_env):
    clean_env.setenv("PRODUCTS_RPC_TIMEOUT_SECONDS", "0")

    with pytest.raises(ValueError):
        ProductsSettings(_env_file=None)

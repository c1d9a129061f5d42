"""
Database configuration.

Engine and session factory creation for the order store.
"""
import logging

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool


logger = logging.getLogger(__name__)


# =============================================================================
# ENGINE CREATION
# =============================================================================

def create_engine(
    database_url: str,
    echo: bool = False,
    pool_size: int = 10,
    max_overflow: int = 20,
) -> AsyncEngine:
    """
    Create async SQLAlchemy engine.

    SQLite URLs get a single shared connection so an in-memory database
    survives across sessions; other backends use a sized pool.

    Args:
        database_url: SQLAlchemy async URL
        echo: Echo SQL statements
        pool_size: Connection pool size
        max_overflow: Extra connections beyond pool_size

    Returns:
        Configured async engine
    """
    logger.info(f"Creating database engine: {_safe_url(database_url)}")

    if database_url.startswith("sqlite"):
        return create_async_engine(
            database_url,
            echo=echo,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )

    return create_async_engine(
        database_url,
        echo=echo,
        pool_size=pool_size,
        max_overflow=max_overflow,
        pool_pre_ping=True,  # Test connections before using
    )


# =============================================================================
# SESSION FACTORY
# =============================================================================

def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    Create session factory bound to an engine.

    Returns:
        Session factory for creating sessions
    """
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


def _safe_url(database_url: str) -> str:
    """Hide the password part of a database URL for logging."""
    scheme, sep, rest = database_url.partition("://")
    if "@" not in rest:
        return database_url
    credentials, host = rest.rsplit("@", 1)
    user = credentials.split(":", 1)[0]
    return f"{scheme}{sep}{user}:***@{host}"

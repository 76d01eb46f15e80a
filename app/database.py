"""
Postgres engine and session handling (SQLAlchemy async + asyncpg).

Services commit their own writes; the session scopes below only commit
what is left over and roll back on error.
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, AsyncGenerator, Dict, Optional, Tuple
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from app.config import settings

logger = logging.getLogger(__name__)

ASYNC_DRIVER = "postgresql+asyncpg"
SSL_MODES = {"require", "verify-ca", "verify-full"}


def split_database_url(url: str) -> Tuple[str, Dict[str, Any]]:
    """
    Normalize a hosted Postgres URL for asyncpg.

    Returns the URL with the asyncpg driver and no sslmode parameter,
    plus the connect_args that replace it.
    """
    scheme, rest = url.split("://", 1)
    if scheme in ("postgres", "postgresql"):
        scheme = ASYNC_DRIVER

    parts = urlsplit(f"{scheme}://{rest}")
    query = dict(parse_qsl(parts.query))
    # asyncpg rejects sslmode as a query parameter
    sslmode = query.pop("sslmode", None)

    connect_args: Dict[str, Any] = {}
    if sslmode in SSL_MODES:
        connect_args["ssl"] = True

    return urlunsplit(parts._replace(query=urlencode(query))), connect_args


def create_engine_if_configured() -> Optional[AsyncEngine]:
    if not settings.database_url:
        logger.warning("DATABASE_URL not configured. Database features disabled.")
        return None

    url, connect_args = split_database_url(settings.database_url)
    return create_async_engine(
        url,
        echo=settings.debug,
        pool_pre_ping=True,
        pool_size=5,
        max_overflow=10,
        connect_args=connect_args,
    )


# None when DATABASE_URL is unset (tests build their own engine)
engine = create_engine_if_configured()

async_session_maker = (
    async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    if engine
    else None
)


class Base(DeclarativeBase):
    """Base class for all database models."""
    pass


def utcnow() -> datetime:
    """Naive UTC timestamp, the form stored in DateTime columns."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


@asynccontextmanager
async def get_db_context() -> AsyncGenerator[AsyncSession, None]:
    """Session scope for workers and scripts."""
    if not async_session_maker:
        raise RuntimeError("Database not configured. Set DATABASE_URL environment variable.")

    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: one session per request."""
    async with get_db_context() as session:
        yield session


async def init_db() -> None:
    """Create missing tables. Alembic owns schema changes after that."""
    if not engine:
        logger.warning("Skipping database initialization - DATABASE_URL not configured")
        return

    import app.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables ready")


async def close_db() -> None:
    if engine:
        await engine.dispose()

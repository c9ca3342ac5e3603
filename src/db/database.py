# src/db/database.py
from typing import Any, Dict, Optional
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool
from utils.logger import setup_logger

logger = setup_logger("DATABASE")

# Base class for models
Base = declarative_base()


def create_store_engine(url: str, echo: bool = False) -> AsyncEngine:
    """Create the async engine backing a document store.

    In-memory SQLite needs a single shared connection, otherwise every
    session would see its own empty database.
    """
    engine_kwargs: Dict[str, Any] = {"echo": echo, "future": True}

    if url.startswith("sqlite"):
        if ":memory:" in url or url.endswith("://"):
            engine_kwargs["poolclass"] = StaticPool
        engine_kwargs["connect_args"] = {"check_same_thread": False}
    else:
        engine_kwargs.update(
            pool_size=20,
            max_overflow=10,
            pool_timeout=30,
            pool_recycle=3600,
            pool_pre_ping=True,
        )
        if "postgresql" in url:
            engine_kwargs["connect_args"] = {
                "server_settings": {
                    "jit": "off",
                    "application_name": "practice_documents",
                },
            }

    logger.debug(f"Creating store engine for {url.split('://')[0]}")
    return create_async_engine(url, **engine_kwargs)


def create_session_factory(
    engine: AsyncEngine,
) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


async def create_tables(engine: AsyncEngine, metadata: Optional[Any] = None) -> None:
    """Create all tables registered on the declarative base"""
    # Import models so they register on Base.metadata
    import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync((metadata or Base.metadata).create_all)
    logger.info("Document tables ready")

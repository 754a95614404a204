"""
Database Configuration and Connection
"""
from typing import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool
import structlog

logger = structlog.get_logger()

# Base class for models
Base = declarative_base()


class Database:
    """
    Owns the async engine and session factory.

    One instance is created per application (see ``create_app``) and stored on
    ``app.state.database``; tests build their own against in-memory SQLite.
    """

    def __init__(self, url: str, echo: bool = False):
        self.url = url

        if url.startswith("sqlite"):
            # Single shared connection so in-memory databases survive across sessions
            self.engine = create_async_engine(
                url,
                echo=echo,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool
            )
        else:
            self.engine = create_async_engine(
                url,
                echo=echo,
                pool_size=10,
                max_overflow=20,
                pool_pre_ping=True
            )

        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autocommit=False,
            autoflush=False
        )

    async def init(self):
        """Check connectivity and create missing tables"""
        # Register table metadata before create_all
        from . import tables  # noqa: F401

        logger.info("Initializing database connection", url=self.url.split("@")[-1])

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

        logger.info("Database connection established")

    async def close(self):
        """Close database connection"""
        logger.info("Closing database connection")
        await self.engine.dispose()

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Context manager for database session"""
        async with self.session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Dependency for getting database session"""
    database: Database = request.app.state.database
    async with database.session() as session:
        yield session

"""Database configuration module."""
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.orm import declarative_base

from sales_api.settings import settings

engine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
)

async_session = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)

Base = declarative_base()


async def get_db() -> AsyncIterator[AsyncSession]:
    """Dependency for database session."""
    async with async_session() as session:
        yield session


async def create_tables() -> None:
    """Create missing tables (development convenience, see alembic for migrations)."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

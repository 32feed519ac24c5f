from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncGenerator
import uuid

from sqlalchemy import JSON
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool

from wanderplan.config import get_settings

# SQLAlchemy declarative base for models
Base = declarative_base()

# JSONB on PostgreSQL, plain JSON elsewhere
JSONType = JSON().with_variant(JSONB(), "postgresql")


def new_id() -> str:
    """Store-issued opaque document id."""
    return uuid.uuid4().hex


def utcnow() -> datetime:
    """Naive UTC timestamp; all stored datetimes are UTC."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _create_engine(url: str):
    db_settings = get_settings().database
    if url.startswith("sqlite"):
        # In-memory SQLite must share one connection across sessions
        return create_async_engine(
            url,
            echo=db_settings.echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_async_engine(url, echo=db_settings.echo, pool_pre_ping=db_settings.pool_pre_ping)


engine = _create_engine(get_settings().database.url)
SessionLocal = async_sessionmaker(
    bind=engine, autoflush=False, expire_on_commit=False
)


async def create_all() -> None:
    """Create tables directly; production schemas are managed by alembic."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def drop_all() -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


async def dispose_engine() -> None:
    await engine.dispose()


@asynccontextmanager
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    session = SessionLocal()
    try:
        yield session
        await session.commit()
    except Exception:
        await session.rollback()
        raise
    finally:
        await session.close()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency for database sessions."""
    async with SessionLocal() as session:
        yield session

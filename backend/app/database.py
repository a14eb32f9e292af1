from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy import Insert
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from app.config import settings

engine = create_async_engine(
    settings.DATABASE_URL,
    echo=False,
    pool_pre_ping=True,
)

async_session = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """Declarative base for all SQLAlchemy ORM models."""
    pass


async def get_db() -> AsyncGenerator[AsyncSession]:
    """FastAPI dependency that yields an async database session.

    One session is one unit of work. Writing endpoints commit explicitly
    before they return so a failed commit still reaches the client; the
    commit on exit only covers reads that lazily created a profile. Any
    exception rolls the whole unit back.
    """
    async with async_session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


def insert_ignore(
    db: AsyncSession,
    model: type[Base],
    values: dict[str, Any],
    index_elements: list[str],
) -> Insert:
    """Build ``INSERT ... ON CONFLICT DO NOTHING`` for the session's dialect.

    PostgreSQL and SQLite share the syntax but each has its own insert
    construct in SQLAlchemy.
    """
    dialect = db.get_bind().dialect.name
    if dialect == "postgresql":
        stmt = postgresql.insert(model).values(**values)
    elif dialect == "sqlite":
        stmt = sqlite.insert(model).values(**values)
    else:
        raise NotImplementedError(f"insert_ignore not supported on {dialect}")
    return stmt.on_conflict_do_nothing(index_elements=index_elements)

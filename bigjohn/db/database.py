from typing import AsyncIterator

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool

Base = declarative_base()


def _is_memory_sqlite(database_url: str) -> bool:
    return database_url in ("sqlite+aiosqlite://", "sqlite+aiosqlite:///:memory:")


def create_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    if _is_memory_sqlite(database_url):
        # one shared connection, otherwise every session sees an empty database
        return create_async_engine(
            database_url,
            echo=echo,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
    if database_url.startswith("sqlite"):
        return create_async_engine(database_url, echo=echo)
    return create_async_engine(database_url, echo=echo, pool_pre_ping=True)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


async def init_models(engine: AsyncEngine) -> None:
    # entity modules register their tables on Base.metadata when imported
    from bigjohn.modals import dailyUserCountEntity, newsPostEntity, spotifyEmbedEntity, vipContentEntity  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    async with request.app.state.session_factory() as session:
        yield session

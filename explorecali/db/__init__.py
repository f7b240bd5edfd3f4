import logging
from typing import AsyncIterator
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker

from explorecali.models.tour import *
from explorecali.models.rating import *

logger = logging.getLogger(__name__)

connect_args = {}

engine = None


def init_db(settings):
    global engine

    engine = create_async_engine(
        settings.DATABASE_URL,
        echo=settings.SQL_ECHO,
        future=True,
        connect_args=connect_args,
    )


async def create_tables():
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


async def recreate_table():
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
        await conn.run_sync(SQLModel.metadata.create_all)
    logger.info("Recreated tables: %s", ", ".join(SQLModel.metadata.tables))


def get_session_maker():
    if engine is None:
        raise RuntimeError("Database engine is not initialized")
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def get_session() -> AsyncIterator[AsyncSession]:
    async_session = get_session_maker()
    async with async_session() as session:
        yield session


async def close_session():
    global engine
    if engine is None:
        raise RuntimeError("DatabaseSessionManager is not initialized")
    await engine.dispose()
    engine = None

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from explorecali.db.unit_of_work import UnitOfWork
from explorecali.models.tour import Difficulty, Region
from explorecali.services.tour import TourService
from explorecali.services.tour_rating import TourRatingService


@pytest_asyncio.fixture(scope="function")
async def async_engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path}/test-sqlalchemy.db", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def async_session_maker(async_engine):
    return sessionmaker(
        bind=async_engine,
        class_=AsyncSession,
        expire_on_commit=False
    )


@pytest_asyncio.fixture
async def async_session(async_session_maker):
    async with async_session_maker() as session:
        yield session


@pytest.fixture
def uow(async_session):
    return UnitOfWork(async_session)


@pytest.fixture
def rating_service(uow):
    return TourRatingService(uow)


@pytest.fixture
def tour_service(uow):
    return TourService(uow)


@pytest_asyncio.fixture
async def tour_package(tour_service):
    return await tour_service.create_tour_package("CC", "California Calm")


@pytest_asyncio.fixture
async def tour(tour_service, tour_package):
    return await tour_service.create_tour(
        "tour", "description", "blurb", 1000, "1000", "4", "keyword",
        tour_package.name, Difficulty.Easy, Region.Central_Coast
    )

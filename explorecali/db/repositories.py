"""Persistence boundary for tours, tour packages and tour ratings.

Lookups return ``None`` when nothing matches; deciding whether absence is an
error is left to the services.
"""
import logging
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from explorecali.exceptions import DuplicateRatingError
from explorecali.models.rating import TourRating
from explorecali.models.tour import Tour, TourPackage

logger = logging.getLogger(__name__)

DUPLICATE_RATING_MARKERS = (
    # PostgreSQL names the violated constraint
    "uq_tour_rating_tour_customer",
    # SQLite lists the columns instead
    "UNIQUE constraint failed: tour_rating.tour_id, tour_rating.customer_id",
)


def is_duplicate_rating(error: IntegrityError) -> bool:
    message = str(error.orig)
    return any(marker in message for marker in DUPLICATE_RATING_MARKERS)


class TourPackageRepository:

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_by_code(self, code: str) -> Optional[TourPackage]:
        return await self.session.get(TourPackage, code)

    async def find_by_name(self, name: str) -> Optional[TourPackage]:
        result = await self.session.execute(select(TourPackage).where(TourPackage.name == name))
        return result.scalar_one_or_none()

    async def find_all(self) -> List[TourPackage]:
        result = await self.session.execute(select(TourPackage).order_by(TourPackage.code))
        return list(result.scalars().all())

    async def save(self, tour_package: TourPackage) -> TourPackage:
        self.session.add(tour_package)
        await self.session.flush()
        return tour_package


class TourRepository:

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_by_id(self, tour_id: int) -> Optional[Tour]:
        return await self.session.get(Tour, tour_id)

    async def find_all(self, offset: int = 0, limit: Optional[int] = None) -> List[Tour]:
        statement = select(Tour).order_by(Tour.id).offset(offset)
        if limit is not None:
            statement = statement.limit(limit)
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def count(self) -> int:
        result = await self.session.execute(select(func.count(Tour.id)))
        return result.scalar_one()

    async def save(self, tour: Tour) -> Tour:
        self.session.add(tour)
        await self.session.flush()
        return tour


class TourRatingRepository:

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_by_tour_and_customer(self, tour_id: int, customer_id: int) -> Optional[TourRating]:
        result = await self.session.execute(
            select(TourRating)
            .where(TourRating.tour_id == tour_id)
            .where(TourRating.customer_id == customer_id)
        )
        return result.scalar_one_or_none()

    async def find_by_tour(self, tour_id: int, offset: int = 0, limit: Optional[int] = None) -> List[TourRating]:
        statement = (
            select(TourRating)
            .where(TourRating.tour_id == tour_id)
            .order_by(TourRating.id)
            .offset(offset)
        )
        if limit is not None:
            statement = statement.limit(limit)
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def count_by_tour(self, tour_id: int) -> int:
        result = await self.session.execute(
            select(func.count(TourRating.id)).where(TourRating.tour_id == tour_id)
        )
        return result.scalar_one()

    async def find_all(self) -> List[TourRating]:
        result = await self.session.execute(select(TourRating).order_by(TourRating.id))
        return list(result.scalars().all())

    async def save(self, tour_rating: TourRating) -> TourRating:
        """Insert or update a rating, flushing so uniqueness is checked immediately."""
        tour_id, customer_id = tour_rating.tour_id, tour_rating.customer_id
        self.session.add(tour_rating)
        try:
            await self.session.flush()
        except IntegrityError as e:
            if not is_duplicate_rating(e):
                raise
            logger.warning("Duplicate rating for tour %s by customer %s", tour_id, customer_id)
            raise DuplicateRatingError(tour_id, customer_id) from e
        return tour_rating

    async def delete(self, tour_rating: TourRating) -> None:
        await self.session.delete(tour_rating)
        await self.session.flush()

import logging
from typing import List, Optional

from explorecali.db.unit_of_work import UnitOfWork
from explorecali.exceptions import TourNotFoundError, TourPackageNotFoundError
from explorecali.models.tour import Difficulty, Region, Tour, TourPackage

logger = logging.getLogger(__name__)


class TourService:

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def create_tour(
        self,
        title: str,
        description: Optional[str],
        blurb: Optional[str],
        price: int,
        duration: Optional[str],
        bullets: Optional[str],
        keywords: Optional[str],
        tour_package_name: str,
        difficulty: Difficulty,
        region: Region,
    ) -> Tour:
        async with self.uow:
            tour_package = await self.uow.packages.find_by_name(tour_package_name)
            if tour_package is None:
                raise TourPackageNotFoundError(tour_package_name)
            tour = await self.uow.tours.save(Tour(
                title=title,
                description=description,
                blurb=blurb,
                price=price,
                duration=duration,
                bullets=bullets,
                keywords=keywords,
                tour_package_code=tour_package.code,
                tour_package=tour_package,
                difficulty=difficulty,
                region=region,
            ))
        logger.info("Created tour %s (%s) in package %s", tour.id, title, tour_package.code)
        return tour

    async def create_tour_package(self, code: str, name: str) -> TourPackage:
        async with self.uow:
            tour_package = await self.uow.packages.find_by_code(code)
            if tour_package is None:
                tour_package = await self.uow.packages.save(TourPackage(code=code, name=name))
                logger.info("Created tour package %s (%s)", code, name)
        return tour_package

    async def lookup_tour(self, tour_id: int) -> Tour:
        tour = await self.uow.tours.find_by_id(tour_id)
        if tour is None:
            raise TourNotFoundError(tour_id)
        return tour

    async def lookup_tours(self, offset: int = 0, limit: Optional[int] = None) -> List[Tour]:
        return await self.uow.tours.find_all(offset=offset, limit=limit)

    async def lookup_packages(self) -> List[TourPackage]:
        return await self.uow.packages.find_all()

    async def total(self) -> int:
        return await self.uow.tours.count()

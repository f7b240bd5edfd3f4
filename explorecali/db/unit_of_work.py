import logging

from sqlmodel.ext.asyncio.session import AsyncSession

from .repositories import TourPackageRepository, TourRatingRepository, TourRepository

logger = logging.getLogger(__name__)


class UnitOfWork:
    """Transaction boundary around one service operation.

    ``async with uow:`` commits when the outermost block exits normally and
    rolls back when it exits with an exception. Inner blocks join the
    outer transaction, so a batch built from single-item operations is
    committed or discarded as a whole.
    """

    def __init__(self, session: AsyncSession):
        self.session = session
        self.packages = TourPackageRepository(session)
        self.tours = TourRepository(session)
        self.ratings = TourRatingRepository(session)
        self._depth = 0

    @property
    def active(self) -> bool:
        return self._depth > 0

    async def __aenter__(self):
        self._depth += 1
        return self

    async def __aexit__(self, exc_type, exc, tb):
        self._depth -= 1
        if self._depth > 0:
            return False
        if exc_type is None:
            try:
                await self.commit()
            except Exception:
                await self.rollback()
                raise
        else:
            logger.debug("Rolling back unit of work after %s", exc_type.__name__)
            await self.rollback()
        return False

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()

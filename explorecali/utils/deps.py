from fastapi import Depends, HTTPException, Query, Request, status
from sqlmodel.ext.asyncio.session import AsyncSession
from typing import Optional, Tuple

from explorecali.core.config import Settings
from explorecali.db import get_session
from explorecali.db.unit_of_work import UnitOfWork
from explorecali.services.tour import TourService
from explorecali.services.tour_rating import TourRatingService


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_paging(
    page: int = Query(1, ge=1, description="Page number"),
    items_per_page: Optional[int] = Query(None, ge=1, description="Items per page, defaults to DEFAULT_PAGE_SIZE"),
    settings: Settings = Depends(get_app_settings),
) -> Tuple[int, int]:
    if items_per_page is None:
        items_per_page = settings.DEFAULT_PAGE_SIZE
    if items_per_page > settings.MAX_PAGE_SIZE:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"items_per_page must be at most {settings.MAX_PAGE_SIZE}",
        )
    return page, items_per_page


async def get_unit_of_work(session: AsyncSession = Depends(get_session)) -> UnitOfWork:
    return UnitOfWork(session)


async def get_tour_service(uow: UnitOfWork = Depends(get_unit_of_work)) -> TourService:
    return TourService(uow)


async def get_tour_rating_service(uow: UnitOfWork = Depends(get_unit_of_work)) -> TourRatingService:
    return TourRatingService(uow)

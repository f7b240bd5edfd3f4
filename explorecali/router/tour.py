import math
from fastapi import APIRouter, Body, Depends, HTTPException, status
from typing import List, Tuple

from ..exceptions import TourNotFoundError, TourPackageNotFoundError
from ..models.tour import PaginatedTourResponse, TourCreate, TourPackage, TourRead
from ..services.tour import TourService
from ..utils.deps import get_paging, get_tour_service

router = APIRouter()


@router.get("/packages", response_model=List[TourPackage])
async def get_tour_packages(tour_service: TourService = Depends(get_tour_service)):
    return await tour_service.lookup_packages()


@router.get("/tours", response_model=PaginatedTourResponse)
async def get_tours(
    paging: Tuple[int, int] = Depends(get_paging),
    tour_service: TourService = Depends(get_tour_service)
):
    page, items_per_page = paging
    total_items = await tour_service.total()
    tours = await tour_service.lookup_tours(offset=(page - 1) * items_per_page, limit=items_per_page)

    return PaginatedTourResponse(
        tours=[TourRead.model_validate(tour, from_attributes=True) for tour in tours],
        total_items=total_items,
        page=page,
        items_per_page=items_per_page,
        total_pages=math.ceil(total_items / items_per_page),
    )


@router.get("/tours/{tour_id}", response_model=TourRead)
async def get_tour(tour_id: int, tour_service: TourService = Depends(get_tour_service)):
    try:
        return await tour_service.lookup_tour(tour_id)
    except TourNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.post("/tours", response_model=TourRead, status_code=status.HTTP_201_CREATED)
async def create_tour(
    tour: TourCreate = Body(...),
    tour_service: TourService = Depends(get_tour_service)
):
    try:
        return await tour_service.create_tour(
            tour.title,
            tour.description,
            tour.blurb,
            tour.price,
            tour.duration,
            tour.bullets,
            tour.keywords,
            tour.tour_package_name,
            tour.difficulty,
            tour.region,
        )
    except TourPackageNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

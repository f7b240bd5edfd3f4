import math
from fastapi import APIRouter, Body, Depends, HTTPException, Path, Query, Response, status
from typing import List, Tuple

from ..exceptions import DuplicateRatingError, NotFoundError
from ..models.rating import (
    AverageScore,
    PaginatedRatingResponse,
    RatingCreate,
    RatingRead,
    RatingUpdate,
    TourRating,
)
from ..services.tour_rating import TourRatingService
from ..utils.deps import get_paging, get_tour_rating_service

router = APIRouter()


def to_rating_read(tour_rating: TourRating) -> RatingRead:
    return RatingRead(
        tour_id=tour_rating.tour_id,
        customer_id=tour_rating.customer_id,
        score=tour_rating.score,
        comment=tour_rating.comment,
    )


def not_found(e: NotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


def conflict(e: DuplicateRatingError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))


@router.post("/{tour_id}/ratings", response_model=RatingRead, status_code=status.HTTP_201_CREATED)
async def create_tour_rating(
    tour_id: int,
    rating: RatingCreate = Body(...),
    rating_service: TourRatingService = Depends(get_tour_rating_service)
):
    try:
        tour_rating = await rating_service.create_new(tour_id, rating.customer_id, rating.score, rating.comment)
    except NotFoundError as e:
        raise not_found(e)
    except DuplicateRatingError as e:
        raise conflict(e)
    return to_rating_read(tour_rating)


# Same score for many customers, e.g. POST /tours/1/ratings/5?customers=100&customers=101
@router.post("/{tour_id}/ratings/{score}", status_code=status.HTTP_201_CREATED)
async def create_many_tour_ratings(
    tour_id: int,
    score: int = Path(..., ge=0, le=5),
    customers: List[int] = Query(..., description="Customer ids to rate the tour for"),
    rating_service: TourRatingService = Depends(get_tour_rating_service)
):
    try:
        await rating_service.rate_many(tour_id, score, customers)
    except NotFoundError as e:
        raise not_found(e)
    except DuplicateRatingError as e:
        raise conflict(e)
    return {"message": f"Tour {tour_id} rated {score} by {len(customers)} customers"}


@router.get("/{tour_id}/ratings", response_model=PaginatedRatingResponse)
async def get_tour_ratings(
    tour_id: int,
    paging: Tuple[int, int] = Depends(get_paging),
    rating_service: TourRatingService = Depends(get_tour_rating_service)
):
    page, items_per_page = paging
    total_items = await rating_service.count_ratings(tour_id)
    ratings = await rating_service.lookup_ratings(tour_id, offset=(page - 1) * items_per_page, limit=items_per_page)

    return PaginatedRatingResponse(
        ratings=[to_rating_read(r) for r in ratings],
        total_items=total_items,
        page=page,
        items_per_page=items_per_page,
        total_pages=math.ceil(total_items / items_per_page),
    )


@router.get("/{tour_id}/ratings/average", response_model=AverageScore)
async def get_average(
    tour_id: int,
    rating_service: TourRatingService = Depends(get_tour_rating_service)
):
    try:
        average = await rating_service.get_average_score(tour_id)
    except NotFoundError as e:
        raise not_found(e)
    return AverageScore(tour_id=tour_id, average=average)


@router.get("/{tour_id}/ratings/{customer_id}", response_model=RatingRead)
async def get_tour_rating(
    tour_id: int,
    customer_id: int,
    rating_service: TourRatingService = Depends(get_tour_rating_service)
):
    try:
        tour_rating = await rating_service.verify_tour_rating(tour_id, customer_id)
    except NotFoundError as e:
        raise not_found(e)
    return to_rating_read(tour_rating)


@router.put("/{tour_id}/ratings", response_model=RatingRead)
async def update_with_put(
    tour_id: int,
    rating: RatingCreate = Body(...),
    rating_service: TourRatingService = Depends(get_tour_rating_service)
):
    try:
        tour_rating = await rating_service.update(tour_id, rating.customer_id, rating.score, rating.comment)
    except NotFoundError as e:
        raise not_found(e)
    return to_rating_read(tour_rating)


@router.patch("/{tour_id}/ratings", response_model=RatingRead)
async def update_with_patch(
    tour_id: int,
    rating: RatingUpdate = Body(...),
    rating_service: TourRatingService = Depends(get_tour_rating_service)
):
    try:
        tour_rating = await rating_service.update_some(tour_id, rating.customer_id, rating.score, rating.comment)
    except NotFoundError as e:
        raise not_found(e)
    return to_rating_read(tour_rating)


@router.delete("/{tour_id}/ratings/{customer_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_tour_rating(
    tour_id: int,
    customer_id: int,
    rating_service: TourRatingService = Depends(get_tour_rating_service)
):
    try:
        await rating_service.delete(tour_id, customer_id)
    except NotFoundError as e:
        raise not_found(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

"""Tour rating service.

Mutations and aggregation require the tour (or the rating) to exist and
raise a ``NotFoundError`` otherwise. Listing the ratings of a tour does not
check the tour: an unknown tour simply has no ratings.
"""
import logging
from typing import Iterable, List, Optional

from explorecali.db.unit_of_work import UnitOfWork
from explorecali.exceptions import TourNotFoundError, TourRatingNotFoundError
from explorecali.models.rating import TourRating, default_comment
from explorecali.models.tour import Tour

logger = logging.getLogger(__name__)


class TourRatingService:

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def create_new(self, tour_id: int, customer_id: int, score: int, comment: Optional[str] = None) -> TourRating:
        """Rate a tour.

        Raises:
            TourNotFoundError: no tour with ``tour_id``.
            DuplicateRatingError: the customer already rated this tour.
        """
        async with self.uow:
            tour = await self.verify_tour(tour_id)
            tour_rating = await self.uow.ratings.save(
                TourRating(tour_id=tour.id, tour=tour, customer_id=customer_id, score=score, comment=comment)
            )
        logger.info("Customer %s rated tour %s with %s", customer_id, tour_id, score)
        return tour_rating

    async def rate_many(self, tour_id: int, score: int, customer_ids: Iterable[int]) -> None:
        """Give the same score to a tour on behalf of several customers.

        All ratings are written in one unit of work: if any customer already
        rated the tour, none of the ratings from this call are kept.
        """
        customer_ids = list(customer_ids)
        async with self.uow:
            await self.verify_tour(tour_id)
            for customer_id in customer_ids:
                await self.create_new(tour_id, customer_id, score, default_comment(score))
        logger.info("Rated tour %s with %s for %d customers", tour_id, score, len(customer_ids))

    async def lookup_all(self) -> List[TourRating]:
        return await self.uow.ratings.find_all()

    async def lookup_ratings(self, tour_id: int, offset: int = 0, limit: Optional[int] = None) -> List[TourRating]:
        return await self.uow.ratings.find_by_tour(tour_id, offset=offset, limit=limit)

    async def count_ratings(self, tour_id: int) -> int:
        return await self.uow.ratings.count_by_tour(tour_id)

    async def update(self, tour_id: int, customer_id: int, score: int, comment: Optional[str]) -> TourRating:
        async with self.uow:
            tour_rating = await self.verify_tour_rating(tour_id, customer_id)
            tour_rating.score = score
            tour_rating.comment = comment
            tour_rating = await self.uow.ratings.save(tour_rating)
        logger.info("Updated rating of tour %s by customer %s", tour_id, customer_id)
        return tour_rating

    async def update_some(
        self,
        tour_id: int,
        customer_id: int,
        score: Optional[int] = None,
        comment: Optional[str] = None,
    ) -> TourRating:
        """Update only the fields that are given."""
        async with self.uow:
            tour_rating = await self.verify_tour_rating(tour_id, customer_id)
            if score is not None:
                tour_rating.score = score
            if comment is not None:
                tour_rating.comment = comment
            tour_rating = await self.uow.ratings.save(tour_rating)
        logger.info("Patched rating of tour %s by customer %s", tour_id, customer_id)
        return tour_rating

    async def delete(self, tour_id: int, customer_id: int) -> None:
        async with self.uow:
            tour_rating = await self.verify_tour_rating(tour_id, customer_id)
            await self.uow.ratings.delete(tour_rating)
        logger.info("Deleted rating of tour %s by customer %s", tour_id, customer_id)

    async def get_average_score(self, tour_id: int) -> float:
        """Mean score of a tour.

        Raises ``TourRatingNotFoundError`` when the tour has no ratings, since
        0.0 is also the average of a tour rated 0 by everyone.
        """
        await self.verify_tour(tour_id)
        ratings = await self.uow.ratings.find_by_tour(tour_id)
        if not ratings:
            logger.warning("Tour %s has no ratings to average", tour_id)
            raise TourRatingNotFoundError(tour_id, message=f"Tour {tour_id} has no ratings")
        return sum(r.score for r in ratings) / len(ratings)

    async def verify_tour_rating(self, tour_id: int, customer_id: int) -> TourRating:
        tour_rating = await self.uow.ratings.find_by_tour_and_customer(tour_id, customer_id)
        if tour_rating is None:
            logger.warning("No rating of tour %s by customer %s", tour_id, customer_id)
            raise TourRatingNotFoundError(tour_id, customer_id)
        return tour_rating

    async def verify_tour(self, tour_id: int) -> Tour:
        tour = await self.uow.tours.find_by_id(tour_id)
        if tour is None:
            logger.warning("Tour %s does not exist", tour_id)
            raise TourNotFoundError(tour_id)
        return tour

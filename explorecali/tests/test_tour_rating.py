import pytest
from sqlalchemy.exc import IntegrityError
from explorecali.exceptions import DuplicateRatingError, NotFoundError, TourNotFoundError, TourRatingNotFoundError
from explorecali.db.unit_of_work import UnitOfWork
from explorecali.models.rating import TourRating
from explorecali.models.tour import Difficulty, Region
from explorecali.services.tour_rating import TourRatingService

CUSTOMER_ID = 456
NOT_A_TOUR_ID = 123


@pytest.mark.asyncio
async def test_create_new(rating_service: TourRatingService, tour):
    ratings_before = len(await rating_service.lookup_all())

    await rating_service.create_new(tour.id, CUSTOMER_ID, 2, "it was fair")

    assert len(await rating_service.lookup_all()) == ratings_before + 1
    new_tour_rating = await rating_service.verify_tour_rating(tour.id, CUSTOMER_ID)
    assert new_tour_rating.tour.id == tour.id
    assert new_tour_rating.customer_id == CUSTOMER_ID
    assert new_tour_rating.score == 2
    assert new_tour_rating.comment == "it was fair"


@pytest.mark.asyncio
async def test_create_new_without_comment(rating_service: TourRatingService, tour):
    tour_rating = await rating_service.create_new(tour.id, CUSTOMER_ID, 4)

    assert tour_rating.id is not None
    assert tour_rating.comment is None


@pytest.mark.asyncio
@pytest.mark.parametrize("customer_id,score,comment", [(CUSTOMER_ID, 2, "it was fair"), (1, 0, None), (99, 5, "")])
async def test_create_new_unknown_tour(rating_service: TourRatingService, customer_id, score, comment):
    with pytest.raises(TourNotFoundError):
        await rating_service.create_new(NOT_A_TOUR_ID, customer_id, score, comment)

    assert await rating_service.lookup_all() == []


@pytest.mark.asyncio
async def test_create_new_duplicate(rating_service: TourRatingService, tour):
    tour_id = tour.id
    await rating_service.create_new(tour_id, CUSTOMER_ID, 2, "it was fair")

    with pytest.raises(DuplicateRatingError) as exc_info:
        await rating_service.create_new(tour_id, CUSTOMER_ID, 5, "changed my mind")

    # duplicate key is not a not-found condition
    assert not isinstance(exc_info.value, NotFoundError)
    tour_rating = await rating_service.verify_tour_rating(tour_id, CUSTOMER_ID)
    assert tour_rating.score == 2
    assert len(await rating_service.lookup_all()) == 1


@pytest.mark.asyncio
async def test_delete(rating_service: TourRatingService, tour):
    await rating_service.create_new(tour.id, CUSTOMER_ID, 2, "it was fair")

    tour_ratings = await rating_service.lookup_all()
    await rating_service.delete(tour_ratings[0].tour.id, tour_ratings[0].customer_id)

    assert len(await rating_service.lookup_all()) == len(tour_ratings) - 1


@pytest.mark.asyncio
async def test_delete_unknown_rating(rating_service: TourRatingService):
    with pytest.raises(TourRatingNotFoundError):
        await rating_service.delete(NOT_A_TOUR_ID, 1234)


@pytest.mark.asyncio
async def test_rate_many(rating_service: TourRatingService, tour):
    initial_rating_customers = [98, 99]
    more_rating_customers = [100, 101, 102]
    for customer_id in initial_rating_customers:
        await rating_service.create_new(tour.id, customer_id, 2, "it was fair")
    assert len(await rating_service.lookup_all()) == len(initial_rating_customers)

    await rating_service.rate_many(tour.id, 5, more_rating_customers)

    assert len(await rating_service.lookup_all()) == len(initial_rating_customers) + len(more_rating_customers)
    for customer_id in more_rating_customers:
        tour_rating = await rating_service.verify_tour_rating(tour.id, customer_id)
        assert tour_rating.score == 5
        assert tour_rating.comment == "Great"


@pytest.mark.asyncio
async def test_rate_many_proves_rollback(rating_service: TourRatingService, tour):
    tour_id = tour.id
    customers = [100, 101, 102]
    await rating_service.rate_many(tour_id, 3, customers)
    ratings = len(await rating_service.lookup_all())
    assert ratings == len(customers)

    with pytest.raises(DuplicateRatingError):
        await rating_service.rate_many(tour_id, 3, customers)

    assert len(await rating_service.lookup_all()) == ratings


@pytest.mark.asyncio
async def test_rate_many_discards_whole_batch(rating_service: TourRatingService, tour):
    tour_id = tour.id
    await rating_service.create_new(tour_id, 101, 1, "nope")

    # 200 is inserted before 101 collides
    with pytest.raises(DuplicateRatingError):
        await rating_service.rate_many(tour_id, 4, [200, 101, 201])

    assert [r.customer_id for r in await rating_service.lookup_all()] == [101]
    with pytest.raises(TourRatingNotFoundError):
        await rating_service.verify_tour_rating(tour_id, 200)


@pytest.mark.asyncio
async def test_rate_many_unknown_tour(rating_service: TourRatingService):
    with pytest.raises(TourNotFoundError):
        await rating_service.rate_many(NOT_A_TOUR_ID, 5, [1, 2, 3])


@pytest.mark.asyncio
async def test_update(rating_service: TourRatingService, tour):
    await rating_service.create_new(tour.id, CUSTOMER_ID, 3, "three")

    tour_rating = await rating_service.update(tour.id, CUSTOMER_ID, 1, "one")

    assert tour_rating.tour.id == tour.id
    assert tour_rating.customer_id == CUSTOMER_ID
    assert tour_rating.score == 1
    assert tour_rating.comment == "one"
    assert len(await rating_service.lookup_all()) == 1


@pytest.mark.asyncio
async def test_update_clears_comment(rating_service: TourRatingService, tour):
    await rating_service.create_new(tour.id, CUSTOMER_ID, 3, "three")

    tour_rating = await rating_service.update(tour.id, CUSTOMER_ID, 3, None)

    assert tour_rating.comment is None


@pytest.mark.asyncio
async def test_update_unknown_rating(rating_service: TourRatingService):
    with pytest.raises(TourRatingNotFoundError):
        await rating_service.update(1, 1, 1, "one")


@pytest.mark.asyncio
async def test_update_some(rating_service: TourRatingService, tour):
    await rating_service.create_new(tour.id, CUSTOMER_ID, 3, "two")

    tour_rating = await rating_service.update_some(tour.id, CUSTOMER_ID, score=1)

    assert tour_rating.customer_id == CUSTOMER_ID
    assert tour_rating.score == 1
    assert tour_rating.comment == "two"

    tour_rating = await rating_service.update_some(tour.id, CUSTOMER_ID, comment="one")
    assert tour_rating.score == 1
    assert tour_rating.comment == "one"


@pytest.mark.asyncio
async def test_update_some_unknown_rating(rating_service: TourRatingService):
    with pytest.raises(TourRatingNotFoundError):
        await rating_service.update_some(1, 1, 1, "one")


@pytest.mark.asyncio
async def test_get_average_score(rating_service: TourRatingService, tour):
    await rating_service.create_new(tour.id, 1, 3, "three")
    await rating_service.create_new(tour.id, 2, 4, "four")
    await rating_service.create_new(tour.id, 3, 5, "five")

    assert await rating_service.get_average_score(tour.id) == 4.0


@pytest.mark.asyncio
async def test_get_average_score_unknown_tour(rating_service: TourRatingService):
    with pytest.raises(TourNotFoundError):
        await rating_service.get_average_score(NOT_A_TOUR_ID)


@pytest.mark.asyncio
async def test_get_average_score_without_ratings(rating_service: TourRatingService, tour):
    with pytest.raises(TourRatingNotFoundError):
        await rating_service.get_average_score(tour.id)


@pytest.mark.asyncio
async def test_lookup_ratings(rating_service: TourRatingService, tour, tour_service):
    other_tour = await tour_service.create_tour(
        "other", None, None, 10, None, None, None, "California Calm", Difficulty.Easy, Region.Varies
    )
    await rating_service.rate_many(tour.id, 4, [1, 2, 3])
    await rating_service.create_new(other_tour.id, 1, 2)

    ratings = await rating_service.lookup_ratings(tour.id)
    assert [r.customer_id for r in ratings] == [1, 2, 3]
    assert all(r.tour_id == tour.id for r in ratings)
    assert await rating_service.count_ratings(tour.id) == 3

    page = await rating_service.lookup_ratings(tour.id, offset=1, limit=1)
    assert [r.customer_id for r in page] == [2]


@pytest.mark.asyncio
async def test_lookup_ratings_unknown_tour(rating_service: TourRatingService):
    assert await rating_service.lookup_ratings(NOT_A_TOUR_ID) == []
    assert await rating_service.count_ratings(NOT_A_TOUR_ID) == 0


@pytest.mark.asyncio
async def test_create_new_records_created_at(rating_service: TourRatingService, tour, async_session_maker):
    tour_id = tour.id
    tour_rating = await rating_service.create_new(tour_id, CUSTOMER_ID, 3, "fair")

    assert tour_rating.created_at is not None
    assert tour_rating.created_at.tzinfo is not None

    async with async_session_maker() as other_session:
        stored = await other_session.get(TourRating, tour_rating.id)
        assert stored.created_at is not None


@pytest.mark.asyncio
async def test_save_keeps_other_integrity_errors(uow: UnitOfWork, tour):
    tour_id = tour.id

    with pytest.raises(IntegrityError) as exc_info:
        async with uow:
            await uow.ratings.save(TourRating(tour_id=tour_id, customer_id=CUSTOMER_ID, score=None))

    assert "NOT NULL" in str(exc_info.value)
    assert await uow.ratings.find_all() == []

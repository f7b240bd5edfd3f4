from fastapi import APIRouter
from . import tour
from . import rating

router = APIRouter()

# Include Routers
router.include_router(tour.router, tags=["Tours"])
router.include_router(rating.router, prefix="/tours", tags=["Ratings"])


def get_router():
    return router

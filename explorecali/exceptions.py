class ExploreCaliError(Exception):
    """Base exception for tour and rating operations."""
    pass


class NotFoundError(ExploreCaliError):
    """Raised when a requested tour, package or rating does not exist."""
    pass


class TourNotFoundError(NotFoundError):
    def __init__(self, tour_id: int):
        self.tour_id = tour_id
        super().__init__(f"Tour does not exist: {tour_id}")


class TourPackageNotFoundError(NotFoundError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Tour package does not exist: {name}")


class TourRatingNotFoundError(NotFoundError):
    def __init__(self, tour_id: int, customer_id=None, message=None):
        self.tour_id = tour_id
        self.customer_id = customer_id
        super().__init__(message or f"Tour-Rating pair for request({tour_id} for customer {customer_id})")


class DuplicateRatingError(ExploreCaliError):
    """Raised by the rating store when a (tour, customer) pair is already rated."""

    def __init__(self, tour_id: int, customer_id: int):
        self.tour_id = tour_id
        self.customer_id = customer_id
        super().__init__(f"Customer {customer_id} has already rated tour {tour_id}")

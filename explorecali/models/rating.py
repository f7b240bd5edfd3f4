from pydantic import BaseModel
from sqlalchemy import UniqueConstraint
from sqlmodel import SQLModel, Field, Relationship
from typing import List, Optional
from datetime import datetime, timezone

from .tour import Tour

DEFAULT_COMMENTS = {
    1: "Terrible",
    2: "Poor",
    3: "Fair",
    4: "Good",
    5: "Great",
}


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def default_comment(score: int) -> str:
    return DEFAULT_COMMENTS.get(score, str(score))


class TourRating(SQLModel, table=True):
    """One customer's rating of one tour, unique per (tour_id, customer_id)."""

    __tablename__ = "tour_rating"
    __table_args__ = (
        UniqueConstraint("tour_id", "customer_id", name="uq_tour_rating_tour_customer"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    tour_id: int = Field(foreign_key="tour.id", index=True)
    customer_id: int = Field(index=True)
    # 0-5, checked by RatingCreate/RatingUpdate rather than here
    score: int
    comment: Optional[str] = None
    created_at: datetime = Field(default_factory=utc_now)
    tour: Optional[Tour] = Relationship(sa_relationship_kwargs={"lazy": "selectin"})


class RatingCreate(BaseModel):
    customer_id: int
    score: int = Field(..., ge=0, le=5)
    comment: Optional[str] = None


class RatingUpdate(BaseModel):
    customer_id: int
    score: Optional[int] = Field(default=None, ge=0, le=5)
    comment: Optional[str] = None


class RatingRead(BaseModel):
    tour_id: int
    customer_id: int
    score: int
    comment: Optional[str] = None


class PaginatedRatingResponse(BaseModel):
    ratings: List[RatingRead]
    total_items: int
    page: int
    items_per_page: int
    total_pages: int


class AverageScore(BaseModel):
    tour_id: int
    average: float
